from __future__ import annotations

import pygame

from segment_snake.abilities import (
    Gesture,
    GestureController,
    ShieldState,
    gun_visual,
    shield_visual,
)
from segment_snake.config import PALETTE


class TestShieldState:
    def test_active_then_cooldown_windows(self) -> None:
        shield = ShieldState()
        assert shield.activate(1000)
        assert shield.active
        assert shield.end_time == 2000

        assert not shield.update(1999)
        assert shield.active
        assert shield.update(2000)
        assert not shield.active
        assert shield.cooldown_end == 7000

    def test_activation_rejected_inside_either_window(self) -> None:
        shield = ShieldState()
        shield.activate(1000)
        before = (shield.active, shield.end_time, shield.cooldown_end)
        assert not shield.activate(1500)
        assert (shield.active, shield.end_time, shield.cooldown_end) == before

        shield.update(2000)
        assert not shield.activate(6999)
        assert not shield.active
        assert shield.activate(7000)
        assert shield.end_time == 8000

    def test_late_update_keeps_cooldown_anchored_to_expiry(self) -> None:
        shield = ShieldState()
        shield.activate(0)
        assert shield.update(1080)
        assert shield.cooldown_end == 6000


class TestGestureController:
    def test_short_release_fires_short(self) -> None:
        gesture = GestureController(delay=500)
        assert gesture.press(0, arm=True)
        assert gesture.poll(300) is Gesture.NONE
        assert gesture.release(300) is Gesture.SHORT
        assert not gesture.armed

    def test_hold_fires_long_once_and_release_is_silent(self) -> None:
        gesture = GestureController(delay=500)
        gesture.press(0, arm=True)
        assert gesture.poll(499) is Gesture.NONE
        assert gesture.poll(500) is Gesture.LONG
        assert gesture.poll(900) is Gesture.NONE
        assert gesture.release(1000) is Gesture.NONE

    def test_second_press_while_held_is_ignored(self) -> None:
        gesture = GestureController(delay=500)
        gesture.press(0, arm=True)
        assert not gesture.press(200, arm=True)
        assert gesture.poll(500) is Gesture.LONG

    def test_unarmed_hold_fires_nothing(self) -> None:
        gesture = GestureController(delay=500)
        gesture.press(0, arm=False)
        assert gesture.poll(800) is Gesture.NONE
        assert gesture.release(800) is Gesture.NONE

    def test_reset_drops_pending_task(self) -> None:
        gesture = GestureController(delay=500)
        gesture.press(0, arm=True)
        gesture.reset()
        assert not gesture.pressed
        gesture.press(100, arm=False)
        assert gesture.poll(700) is Gesture.NONE

    def test_release_drops_pending_task(self) -> None:
        gesture = GestureController(delay=500)
        gesture.press(0, arm=True)
        assert gesture.armed
        assert gesture.release(100) is Gesture.SHORT
        assert not gesture.armed
        gesture.press(200, arm=False)
        assert not gesture.armed
        assert gesture.poll(900) is Gesture.NONE

    def test_release_without_press(self) -> None:
        assert GestureController().release(10) is Gesture.NONE


def test_gun_visual_flashes() -> None:
    assert gun_visual(100, 200, True).color == PALETTE["gun_flash"]
    assert gun_visual(200, 200, True).color == PALETTE["text"]
    assert not gun_visual(0, 0, False).available


def test_shield_visual_states() -> None:
    shield = ShieldState()
    gesture = GestureController(delay=500)

    assert shield_visual(0, shield, gesture, True).timer == ""

    gesture.press(0, arm=True)
    assert shield_visual(200, shield, gesture, True).timer == "0.3"

    gesture.reset()
    shield.activate(1000)
    active = shield_visual(1000, shield, gesture, True)
    assert active.timer == "1.0"
    assert active.color == PALETTE["shield_body"]

    shield.update(2000)
    cooling = shield_visual(2000, shield, gesture, True)
    assert cooling.timer == "5.0"
    assert cooling.color == pygame.Color(128, 128, 128)
