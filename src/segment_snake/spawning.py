"""Placement rules for food, enemy spawn points and collectibles."""

from __future__ import annotations

import math
import random

from .config import (
    ENTRY_POINTS,
    FOOD_SPAWN_MIN,
    FOOD_SPAWN_RANGE,
    GRID_SIZE,
    PICKUP_SPAWN_RANGE,
    PLACEMENT_ATTEMPTS,
    SPAWN_CLEARANCE,
    SPAWN_DISTANCE,
    SPAWN_DISTANCE_JITTER,
    VariantConfig,
)
from .entities import EntityStore, PendingSpawn
from .grid import RIGHT, Cell, in_bounds, sign


def _ring_cell(origin: Cell, min_distance: float, spread: float, rng: random.Random) -> Cell:
    angle = rng.random() * math.pi * 2
    distance = min_distance + rng.random() * spread
    return Cell(
        math.floor(origin.x + math.cos(angle) * distance),
        math.floor(origin.y + math.sin(angle) * distance),
    )


def find_free_cell(
    store: EntityStore,
    variant: VariantConfig,
    rng: random.Random,
    *,
    spread: int = FOOD_SPAWN_RANGE,
    min_distance: int = FOOD_SPAWN_MIN,
) -> Cell | None:
    """Pick an unoccupied cell, or ``None`` after a bounded number of tries."""

    head = store.player.head
    for _ in range(PLACEMENT_ATTEMPTS):
        if variant.food_strategy == "grid":
            cell = Cell(rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))
        else:
            cell = _ring_cell(head, min_distance, spread, rng)
        if variant.bounded and not in_bounds(cell, GRID_SIZE):
            continue
        if store.is_free(cell):
            return cell
    return None


def place_food(store: EntityStore, variant: VariantConfig, rng: random.Random) -> Cell | None:
    cell = find_free_cell(store, variant, rng)
    if cell is not None:
        store.foods.append(cell)
    return cell


def place_pickup_cell(store: EntityStore, variant: VariantConfig, rng: random.Random) -> Cell | None:
    return find_free_cell(
        store, variant, rng, spread=PICKUP_SPAWN_RANGE, min_distance=FOOD_SPAWN_MIN
    )


def _entry_point_clear(store: EntityStore, cell: Cell) -> bool:
    def near(other: Cell) -> bool:
        return (
            abs(other.x - cell.x) < SPAWN_CLEARANCE
            and abs(other.y - cell.y) < SPAWN_CLEARANCE
        )

    if any(near(segment) for segment in store.player.body):
        return False
    return not any(near(segment) for enemy in store.enemies for segment in enemy.body)


def select_spawn_point(
    store: EntityStore, variant: VariantConfig, rng: random.Random
) -> PendingSpawn | None:
    """Choose where the next enemy will appear.

    Bounded games use a fixed entry point on an edge that is clear of every
    snake. Open-world games pick a cell on a ring around the player and aim
    the newcomer at the player.
    """

    if variant.spawn_strategy == "entry_points":
        available = [
            PendingSpawn(Cell(*cell), Cell(*direction))
            for cell, direction in ENTRY_POINTS
            if _entry_point_clear(store, Cell(*cell))
        ]
        if not available:
            return None
        return rng.choice(available)

    head = store.player.head
    cell = _ring_cell(head, SPAWN_DISTANCE, SPAWN_DISTANCE_JITTER, rng)
    # Enemies move on one axis at a time; prefer the x axis toward the player.
    dx = sign(head.x - cell.x)
    direction = Cell(dx, 0) if dx else Cell(0, sign(head.y - cell.y))
    if direction == (0, 0):
        direction = RIGHT
    return PendingSpawn(cell, direction)
