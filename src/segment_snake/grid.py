"""Integer lattice helpers shared by every part of the simulation."""

from __future__ import annotations

from typing import NamedTuple, Sequence


class Cell(NamedTuple):
    x: int
    y: int

    def __add__(self, other: tuple[int, int]) -> Cell:  # type: ignore[override]
        return Cell(self.x + other[0], self.y + other[1])

    def __sub__(self, other: tuple[int, int]) -> Cell:
        return Cell(self.x - other[0], self.y - other[1])

    def scaled(self, factor: int) -> Cell:
        return Cell(self.x * factor, self.y * factor)

    def __neg__(self) -> Cell:
        return Cell(-self.x, -self.y)


UP = Cell(0, -1)
DOWN = Cell(0, 1)
LEFT = Cell(-1, 0)
RIGHT = Cell(1, 0)

CARDINALS: tuple[Cell, ...] = (RIGHT, LEFT, DOWN, UP)


def sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def manhattan(a: Sequence[float], b: Sequence[float]) -> float:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def in_bounds(cell: Sequence[int], size: int) -> bool:
    return 0 <= cell[0] < size and 0 <= cell[1] < size


def is_turn_allowed(current: Cell, requested: Cell) -> bool:
    """Only a change onto the other axis is accepted; same-axis input is ignored.

    This is what makes a 180 degree reversal impossible within one tick.
    """

    if current.x == 0:
        return requested.y == 0
    return requested.x == 0


def trailing_direction(body: Sequence[Cell], fallback: Cell) -> Cell:
    """Direction pointing away from the snake out of its tail.

    A single-cell body or a tail stacked on the cell before it has no usable
    direction, so ``fallback`` (the negated heading) is returned instead.
    """

    if len(body) < 2:
        return fallback
    tail, before_tail = body[-1], body[-2]
    step = Cell(sign(tail.x - before_tail.x), sign(tail.y - before_tail.y))
    if step == (0, 0) or (step.x and step.y):
        return fallback
    return step
