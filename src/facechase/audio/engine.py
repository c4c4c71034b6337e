"""
FACE CHASE audio engine.

Two synthesized cues, generated at startup with pygame's mixer:
    running - tense looping bass pulse while a run is in progress
    caught  - one-shot descending sting when the player is caught

Audio is never allowed to break the game: every mixer failure is
logged and swallowed.
"""

import array
import logging
import math
import random
from typing import Callable, Dict, Optional

import pygame

from facechase.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
AMPLITUDE = 32767


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def saw(t: float, freq: float) -> float:
    """Sawtooth wave - fat synth bass."""
    return 2 * ((t * freq) % 1) - 1


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


def render_running_loop(duration: float = 2.0, bpm: int = 150) -> array.array:
    """Pulsing saw bass on a minor riff, sized to loop seamlessly."""
    riff = [55.0, 55.0, 65.41, 55.0, 73.42, 55.0, 65.41, 49.0]
    step = 60.0 / bpm / 2  # Eighth notes
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        note_index = int(t / step)
        freq = riff[note_index % len(riff)]
        t_note = t - note_index * step
        env = max(0.0, 1 - t_note / step) ** 0.5
        val = saw(t, freq) * 0.45 + square(t, freq * 2) * 0.15
        # Hi-hat tick on every beat
        if t_note < 0.01 and note_index % 2 == 0:
            val += noise() * 0.2
        samples.append(int(val * env * AMPLITUDE * 0.5))
    return samples


def render_caught_sting(duration: float = 0.7) -> array.array:
    """Falling square sweep with a noise burst on top."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        freq = 660 * (1 - t / duration) + 80
        env = max(0.0, 1 - t / duration)
        val = square(t, freq) * 0.5 + sine(t, freq / 2) * 0.3
        if t < 0.08:
            val += noise() * 0.4
        samples.append(int(val * env * AMPLITUDE * 0.6))
    return samples


class AudioEngine:
    """Mixer wrapper exposing the game's two fire-and-forget cues."""

    CUES: Dict[str, Callable[[], array.array]] = {
        "running": render_running_loop,
        "caught": render_caught_sting,
    }

    def __init__(self, muted: bool = False):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._running_channel: Optional[pygame.mixer.Channel] = None
        self._volume = 0.8
        self._muted = muted

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and synthesize the cues."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            for name, render in self.CUES.items():
                self._sounds[name] = self._create_sound(render())
            self._initialized = True
            logger.info(f"Audio engine initialized ({len(self._sounds)} cues)")
            return True
        except Exception as e:
            logger.warning(f"Audio unavailable, continuing silently: {e}")
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (duplicated to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _play(self, name: str, loops: int = 0) -> Optional[pygame.mixer.Channel]:
        if not self._initialized or self._muted:
            return None
        sound = self._sounds.get(name)
        if sound is None:
            logger.warning(f"Sound not found: {name}")
            return None
        try:
            sound.set_volume(self._volume)
            return sound.play(loops=loops)
        except Exception as e:
            logger.debug(f"Failed to play {name}: {e}")
            return None

    def start_running_loop(self) -> None:
        """Start the looping run cue (restarts it if already playing)."""
        self.stop_running_loop()
        self._running_channel = self._play("running", loops=-1)

    def stop_running_loop(self) -> None:
        if self._running_channel is None:
            return
        try:
            self._running_channel.stop()
        except Exception as e:
            logger.debug(f"Failed to stop running loop: {e}")
        self._running_channel = None

    def play_caught(self) -> None:
        self._play("caught")

    def is_running_loop_playing(self) -> bool:
        return self._running_channel is not None

    def set_volume(self, volume: float) -> None:
        """Set cue volume (0.0 - 1.0)."""
        self._volume = max(0.0, min(1.0, volume))

    def toggle_mute(self) -> bool:
        """Toggle mute state, silencing anything already playing."""
        self._muted = not self._muted
        if self._muted:
            self.stop_running_loop()
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def bind(self, event_bus: EventBus) -> None:
        """Play cues on game transitions."""
        event_bus.subscribe(EventType.GAME_STARTED, self._on_started)
        event_bus.subscribe(EventType.PLAYER_CAUGHT, self._on_caught)
        event_bus.subscribe(EventType.RUN_RESET, self._on_reset)

    def _on_started(self, event: Event) -> None:
        self.start_running_loop()

    def _on_caught(self, event: Event) -> None:
        self.stop_running_loop()
        self.play_caught()

    def _on_reset(self, event: Event) -> None:
        self.stop_running_loop()

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            self.stop_running_loop()
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
