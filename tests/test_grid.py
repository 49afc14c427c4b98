from __future__ import annotations

from segment_snake.grid import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    Cell,
    in_bounds,
    is_turn_allowed,
    manhattan,
    sign,
    trailing_direction,
)


def test_cell_arithmetic_is_exact() -> None:
    assert Cell(3, 4) + RIGHT == Cell(4, 4)
    assert Cell(3, 4) - UP == Cell(3, 5)
    assert RIGHT.scaled(3) == Cell(3, 0)
    assert -LEFT == RIGHT
    assert isinstance(Cell(0, 0) + DOWN, Cell)


def test_sign_and_distance() -> None:
    assert [sign(-4), sign(0), sign(2.5)] == [-1, 0, 1]
    assert manhattan(Cell(0, 0), Cell(3, -4)) == 7
    assert manhattan((10.5, 10.0), Cell(10, 12)) == 2.5


def test_bounds() -> None:
    assert in_bounds(Cell(0, 29), 30)
    assert not in_bounds(Cell(30, 0), 30)
    assert not in_bounds(Cell(-1, 5), 30)


def test_turns_only_onto_the_other_axis() -> None:
    assert is_turn_allowed(RIGHT, UP)
    assert is_turn_allowed(RIGHT, DOWN)
    assert not is_turn_allowed(RIGHT, LEFT)
    assert not is_turn_allowed(RIGHT, RIGHT)
    assert is_turn_allowed(UP, LEFT)
    assert not is_turn_allowed(UP, DOWN)


def test_trailing_direction_follows_the_tail() -> None:
    body = [Cell(5, 5), Cell(4, 5), Cell(4, 6)]
    assert trailing_direction(body, LEFT) == DOWN


def test_trailing_direction_falls_back_when_degenerate() -> None:
    assert trailing_direction([Cell(1, 1)], LEFT) == LEFT
    assert trailing_direction([Cell(1, 1), Cell(0, 1), Cell(0, 1)], UP) == UP
