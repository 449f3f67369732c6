"""
Juggler audio engine - circus chiptune cues.

Sounds are synthesized once at startup into pygame mixer buffers: a
rising chirp for every thrown ball and a looping triangle-wave melody
for the big top. The mixer plays the loop on its own channel, so the
game loop only ever fires one-shot cues and never waits on audio.
"""

import logging
from typing import Dict, List, Optional

import numpy as np
import pygame

from juggler.game.interfaces import SoundEmitter

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# C major circus tune, one note per beat
MELODY: List[float] = [
    523.25, 659.25, 587.33, 783.99,
    698.46, 659.25, 523.25, 392.0,
    440.0, 523.25, 587.33, 659.25,
    587.33, 523.25, 440.0, 392.0,
]

MUSIC_CHANNEL = 0


def sine(phase: np.ndarray) -> np.ndarray:
    """Sine wave for phase in cycles."""
    return np.sin(2 * np.pi * phase)


def triangle(phase: np.ndarray) -> np.ndarray:
    """Triangle wave for phase in cycles."""
    return 4 * np.abs((phase % 1.0) - 0.5) - 1


def chirp_samples(
    start_hz: float = 740.0,
    end_hz: float = 980.0,
    sweep_s: float = 0.12,
    peak: float = 0.35,
    attack_s: float = 0.02,
    decay_s: float = 0.18,
    length_s: float = 0.2,
) -> np.ndarray:
    """Exponential pitch sweep with a fast attack and exponential decay."""
    t = np.arange(int(SAMPLE_RATE * length_s)) / SAMPLE_RATE

    ratio = end_hz / start_hz
    freq = np.where(t < sweep_s, start_hz * ratio ** (t / sweep_s), end_hz)
    phase = np.cumsum(freq) / SAMPLE_RATE

    env = np.zeros_like(t)
    attack = t < attack_s
    env[attack] = peak * t[attack] / attack_s
    decay = (t >= attack_s) & (t < decay_s)
    span = decay_s - attack_s
    env[decay] = peak * (0.001 / peak) ** ((t[decay] - attack_s) / span)

    return sine(phase) * env


def melody_samples(notes: List[float], beat_ms: int = 260, gate: float = 0.85) -> np.ndarray:
    """One pass of ``notes``, each held for ``gate`` of a beat with a 10ms attack."""
    beat = int(SAMPLE_RATE * beat_ms / 1000)
    held = int(beat * gate)
    attack = int(SAMPLE_RATE * 0.01)
    t = np.arange(beat) / SAMPLE_RATE

    env = np.zeros(beat)
    env[:attack] = np.linspace(0.0, 1.0, attack, endpoint=False)
    env[attack:held] = np.linspace(1.0, 0.0, held - attack)

    return np.concatenate([triangle(t * freq) * env for freq in notes])


class AudioEngine(SoundEmitter):
    """
    pygame-mixer backed SoundEmitter.

    If the mixer cannot be opened (no audio device, CI) the engine stays
    uninitialized and every cue is a silent no-op.
    """

    def __init__(self, master_volume: float = 0.08, beat_ms: int = 260):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume_master = master_volume
        self._beat_ms = beat_ms
        self._muted = False
        self._ambient_started = False
        self._music_channel: Optional[pygame.mixer.Channel] = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def ambient_started(self) -> bool:
        return self._ambient_started

    def init(self) -> bool:
        """Initialize the mixer and synthesize all sounds."""
        if self._initialized:
            return True
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(8)
            self._generate_all_sounds()
            self._initialized = True
            logger.info(f"Audio engine initialized ({len(self._sounds)} sounds)")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

    def _create_sound(self, samples: np.ndarray) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono float samples in [-1, 1]."""
        mono = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
        stereo = np.repeat(mono, 2)
        return pygame.mixer.Sound(buffer=stereo.tobytes())

    def _generate_all_sounds(self) -> None:
        self._sounds["spawn_chirp"] = self._create_sound(chirp_samples())
        self._sounds["music_circus"] = self._create_sound(
            melody_samples(MELODY, beat_ms=self._beat_ms)
        )

    def play(self, sound_name: str, volume: float = 1.0, loops: int = 0) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        try:
            sound.set_volume(volume * self._volume_master)
            return sound.play(loops=loops)
        except Exception as e:
            logger.error(f"Failed to play {sound_name}: {e}")
            return None

    def on_spawn(self) -> None:
        self.play("spawn_chirp")

    def start_ambient_loop(self) -> None:
        """Start the looping melody. Only the first call has any effect."""
        if self._ambient_started:
            return
        self._ambient_started = True

        if not self.init():
            return

        sound = self._sounds["music_circus"]
        try:
            sound.set_volume(self._volume_master)
            self._music_channel = pygame.mixer.Channel(MUSIC_CHANNEL)
            self._music_channel.play(sound, loops=-1)
            logger.info("Ambient music started")
        except Exception as e:
            logger.error(f"Failed to start music: {e}")

    def mute(self) -> None:
        self._muted = True
        if self._music_channel:
            self._music_channel.pause()

    def unmute(self) -> None:
        self._muted = False
        if self._music_channel:
            self._music_channel.unpause()

    def toggle_mute(self) -> bool:
        """Toggle mute state. Returns the new muted flag."""
        if self._muted:
            self.unmute()
        else:
            self.mute()
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._music_channel = None
            logger.info("Audio engine cleaned up")
