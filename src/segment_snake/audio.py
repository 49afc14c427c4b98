"""Procedural sound cues for Segment Snake, synthesized once at start-up."""

from __future__ import annotations

import logging
import math
from array import array
from dataclasses import dataclass
from typing import Dict, Tuple

import pygame

from .simulation import Cue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Note:
    freq: float
    duration_ms: int
    waveform: str = "sine"  # "sine", "square", "triangle", "sawtooth"
    offset_ms: int = 0


# Each cue is a short chord or arpeggio of decaying notes.
CUE_NOTES: Dict[Cue, Tuple[Note, ...]] = {
    Cue.SHOOT: (Note(800, 100, "square"),),
    Cue.FOOD: (
        Note(400, 100),
        Note(600, 100, offset_ms=50),
        Note(800, 100, offset_ms=100),
    ),
    Cue.EXPLOSION: (
        Note(150, 300, "sawtooth"),
        Note(100, 200, "sawtooth", offset_ms=100),
    ),
    Cue.COLLISION: (Note(200, 400, "triangle"),),
    Cue.SHIELD: (Note(600, 300),),
    Cue.SPAWN_WARNING: (Note(330, 120, "square"), Note(330, 120, "square", 180)),
    Cue.PICKUP: (Note(500, 80, "square"), Note(750, 120, "square", 70)),
    Cue.GAME_OVER: (
        Note(300, 200, "triangle"),
        Note(220, 250, "triangle", offset_ms=180),
        Note(160, 400, "triangle", offset_ms=380),
    ),
}


def _wave(waveform: str, phase: float) -> float:
    cycle = phase % 1.0
    if waveform == "square":
        return 1.0 if cycle < 0.5 else -1.0
    if waveform == "triangle":
        return 4.0 * abs(cycle - 0.5) - 1.0
    if waveform == "sawtooth":
        return 2.0 * cycle - 1.0
    return math.sin(2.0 * math.pi * cycle)


class AudioEngine:
    """Fire-and-forget cue playback over pygame.mixer.

    If the mixer cannot start (no audio device, headless CI) the engine
    stays disabled and ``play`` does nothing.
    """

    def __init__(self, volume: float = 0.3) -> None:
        self.enabled = False
        self.volume = volume
        self.sample_rate: int = 22050
        self.sounds: Dict[Cue, pygame.mixer.Sound] = {}
        self._last_play: Dict[Cue, int] = {}
        self._sound_gate_ms: int = 40
        self._init_audio()

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            return
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]
        try:
            for cue, notes in CUE_NOTES.items():
                self.sounds[cue] = pygame.mixer.Sound(buffer=self._render(notes))
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            self.sounds.clear()
            return
        self.enabled = True

    def _render(self, notes: Tuple[Note, ...]) -> array:
        """Mix decaying notes into one signed 16-bit buffer."""

        rate = self.sample_rate
        total_ms = max(note.offset_ms + note.duration_ms for note in notes)
        samples = [0.0] * max(1, int(rate * total_ms / 1000))
        for note in notes:
            start = int(rate * note.offset_ms / 1000)
            count = int(rate * note.duration_ms / 1000)
            for idx in range(count):
                t = idx / rate
                # Exponential fade from full level down to 1/30 over the note.
                env = (1.0 / 30.0) ** (idx / max(1, count))
                samples[start + idx] += _wave(note.waveform, note.freq * t) * env

        peak = max((abs(val) for val in samples), default=1.0) or 1.0
        scale = 32767 * self.volume / peak
        return array(
            "h", (int(max(-32767, min(32767, val * scale))) for val in samples)
        )

    def play(self, cue: Cue) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(cue)
        if sound is None:
            return
        now = pygame.time.get_ticks()
        if now - self._last_play.get(cue, -self._sound_gate_ms) < self._sound_gate_ms:
            return
        self._last_play[cue] = now
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Audio playback failed, muting: %s", exc)
            self.enabled = False
