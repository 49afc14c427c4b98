"""Shield timing and the press/hold gesture that triggers abilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import pygame

from .config import (
    PALETTE,
    SHIELD_ACTIVATION_TIME,
    SHIELD_COOLDOWN,
    SHIELD_DURATION,
)

logger = logging.getLogger(__name__)


class Gesture(Enum):
    NONE = "none"
    SHORT = "short"
    LONG = "long"


@dataclass(slots=True)
class ShieldState:
    """Active window followed by a cooldown window; the two never overlap."""

    active: bool = False
    end_time: int = 0
    cooldown_end: int = 0

    def ready(self, now: int) -> bool:
        return not self.active and now >= self.cooldown_end

    def activate(self, now: int) -> bool:
        if not self.ready(now):
            return False
        self.active = True
        self.end_time = now + SHIELD_DURATION
        logger.debug("Shield up until %s", self.end_time)
        return True

    def update(self, now: int) -> bool:
        """Expire the active window; return ``True`` on the tick it ends."""

        if self.active and now >= self.end_time:
            self.active = False
            self.cooldown_end = self.end_time + SHIELD_COOLDOWN
            return True
        return False


@dataclass(slots=True)
class DeferredTask:
    """The single pending long-press check of the current press."""

    due: int


class GestureController:
    """Turn one press/release input into short-press and long-press triggers.

    A press arms a deferred task (when the caller allows it). If the task
    comes due while the input is still held the long press fires exactly
    once; releasing earlier fires the short press instead. Every press
    replaces the task, and release, restart and game over drop it, so at
    most one task is ever outstanding.
    """

    def __init__(self, delay: int = SHIELD_ACTIVATION_TIME) -> None:
        self.delay = delay
        self.pressed = False
        self.press_start = 0
        self.long_fired = False
        self._task: DeferredTask | None = None

    @property
    def armed(self) -> bool:
        return self._task is not None

    def press(self, now: int, *, arm: bool) -> bool:
        if self.pressed:
            return False
        self.pressed = True
        self.press_start = now
        self.long_fired = False
        self._task = DeferredTask(now + self.delay) if arm else None
        return True

    def poll(self, now: int) -> Gesture:
        task = self._task
        if task is None or not self.pressed:
            return Gesture.NONE
        if now < task.due:
            return Gesture.NONE
        self._task = None
        self.long_fired = True
        return Gesture.LONG

    def release(self, now: int) -> Gesture:
        if not self.pressed:
            return Gesture.NONE
        self.cancel()
        self.pressed = False
        if self.long_fired or now - self.press_start >= self.delay:
            return Gesture.NONE
        return Gesture.SHORT

    def cancel(self) -> None:
        self._task = None

    def reset(self) -> None:
        self.cancel()
        self.pressed = False
        self.press_start = 0
        self.long_fired = False

    def hold_remaining(self, now: int) -> int:
        return max(0, self.delay - (now - self.press_start))


@dataclass(frozen=True, slots=True)
class AbilityVisual:
    """What the HUD shows for one ability: colour plus a timer caption."""

    label: str
    color: pygame.Color
    timer: str = ""
    available: bool = True


def _seconds(ms: int) -> str:
    return f"{ms / 1000:.1f}"


def gun_visual(now: int, flash_end: int, available: bool) -> AbilityVisual:
    color = PALETTE["gun_flash"] if now < flash_end else PALETTE["text"]
    return AbilityVisual("GUN", pygame.Color(color), available=available)


def shield_visual(
    now: int,
    shield: ShieldState,
    gesture: GestureController,
    available: bool,
) -> AbilityVisual:
    if gesture.pressed and shield.ready(now):
        return AbilityVisual(
            "SHIELD",
            pygame.Color(PALETTE["text"]),
            _seconds(gesture.hold_remaining(now)),
            available,
        )
    if shield.active:
        return AbilityVisual(
            "SHIELD",
            pygame.Color(PALETTE["shield_body"]),
            _seconds(max(0, shield.end_time - now)),
            available,
        )
    if now < shield.cooldown_end:
        remaining = shield.cooldown_end - now
        progress = 1 - remaining / SHIELD_COOLDOWN
        gray = int(128 + 127 * max(0.0, min(1.0, progress)))
        return AbilityVisual(
            "SHIELD", pygame.Color(gray, gray, gray), _seconds(remaining), available
        )
    return AbilityVisual("SHIELD", pygame.Color(PALETTE["text"]), available=available)
