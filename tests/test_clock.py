from __future__ import annotations

from segment_snake.clock import TickScheduler
from segment_snake.config import MAX_GAME_SPEED, MIN_GAME_SPEED


def test_no_ticks_until_started() -> None:
    scheduler = TickScheduler(100)
    assert scheduler.advance(500) == 0


def test_accumulates_partial_periods() -> None:
    scheduler = TickScheduler(100)
    scheduler.start()
    assert scheduler.advance(250) == 2
    assert scheduler.advance(40) == 0
    assert scheduler.advance(10) == 1


def test_changing_period_reschedules() -> None:
    scheduler = TickScheduler(100)
    scheduler.start()
    scheduler.advance(90)
    assert scheduler.set_period(50) == 50
    assert scheduler.advance(40) == 0
    assert scheduler.advance(10) == 1


def test_period_is_clamped() -> None:
    scheduler = TickScheduler(100)
    assert scheduler.set_period(1) == MIN_GAME_SPEED
    assert scheduler.set_period(10_000) == MAX_GAME_SPEED


def test_stop_halts_ticks() -> None:
    scheduler = TickScheduler(100)
    scheduler.start()
    scheduler.stop()
    assert scheduler.advance(1000) == 0
