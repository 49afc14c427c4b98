"""Greedy pursuit behaviour for enemy snakes."""

from __future__ import annotations

import random
from typing import Sequence

from .config import ENEMY_WANDER_CHANCE
from .entities import EnemySnake
from .grid import CARDINALS, Cell, manhattan, sign


def nearest_target(head: Cell, targets: Sequence[Cell]) -> Cell | None:
    best: Cell | None = None
    best_distance = float("inf")
    for target in targets:
        distance = manhattan(target, head)
        if distance < best_distance:
            best_distance = distance
            best = target
    return best


def refresh_target(enemy: EnemySnake, targets: Sequence[Cell]) -> Cell | None:
    """Keep the current target while it exists, otherwise pick the nearest."""

    if enemy.target is None or enemy.target not in targets:
        enemy.target = nearest_target(enemy.head, targets)
    return enemy.target


def steer(enemy: EnemySnake, rng: random.Random) -> Cell:
    """Pick this tick's heading: one axis toward the target, or wander."""

    head = enemy.head
    if enemy.target is not None:
        dx = enemy.target.x - head.x
        dy = enemy.target.y - head.y
        if abs(dx) > abs(dy):
            direction = Cell(sign(dx), 0)
        else:
            direction = Cell(0, sign(dy))
        if direction != (0, 0):
            enemy.direction = direction
    elif rng.random() < ENEMY_WANDER_CHANCE:
        enemy.direction = rng.choice(CARDINALS)
    return enemy.direction
