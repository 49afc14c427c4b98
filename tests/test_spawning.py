from __future__ import annotations

import math
import random

from segment_snake.config import ENTRY_POINTS, GRID_SIZE, VARIANTS
from segment_snake.entities import EntityStore, PlayerSnake
from segment_snake.grid import RIGHT, Cell
from segment_snake.segments import SegmentKind
from segment_snake.spawning import find_free_cell, place_food, select_spawn_point


def make_store(head: Cell = Cell(15, 15)) -> EntityStore:
    return EntityStore(PlayerSnake.create(head, RIGHT, [SegmentKind.BODY, SegmentKind.BODY]))


def test_grid_food_lands_on_a_free_cell(rng: random.Random) -> None:
    store = make_store()
    for _ in range(20):
        cell = place_food(store, VARIANTS["classic"], rng)
        assert cell is not None
        assert 0 <= cell.x < GRID_SIZE and 0 <= cell.y < GRID_SIZE
        assert cell not in store.player.body
    assert len(set(store.foods)) == 20


def test_placement_gives_up_on_a_full_grid(rng: random.Random) -> None:
    store = make_store()
    store.foods = [
        Cell(x, y)
        for x in range(GRID_SIZE)
        for y in range(GRID_SIZE)
        if Cell(x, y) not in store.player.body
    ]
    assert find_free_cell(store, VARIANTS["classic"], rng) is None
    assert place_food(store, VARIANTS["classic"], rng) is None


def test_ring_food_stays_near_the_head(rng: random.Random) -> None:
    store = make_store(Cell(0, 0))
    for _ in range(30):
        cell = place_food(store, VARIANTS["openworld"], rng)
        assert cell is not None
        assert 3.5 <= math.hypot(cell.x, cell.y) <= 46.5


def test_entry_points_skip_crowded_edges(rng: random.Random) -> None:
    store = make_store(Cell(15, 2))
    entries = {Cell(*cell) for cell, _ in ENTRY_POINTS}
    for _ in range(50):
        pending = select_spawn_point(store, VARIANTS["classic"], rng)
        assert pending is not None
        assert pending.cell in entries
        assert pending.cell != Cell(15, 0)


def test_no_entry_point_when_all_are_crowded(rng: random.Random) -> None:
    store = make_store()
    store.player.body = [Cell(*cell) for cell, _ in ENTRY_POINTS]
    assert select_spawn_point(store, VARIANTS["classic"], rng) is None


def test_ring_spawn_faces_the_player_on_one_axis(rng: random.Random) -> None:
    store = make_store(Cell(0, 0))
    for _ in range(30):
        pending = select_spawn_point(store, VARIANTS["openworld"], rng)
        assert pending is not None
        assert 28.5 <= math.hypot(pending.cell.x, pending.cell.y) <= 41.5
        direction = pending.direction
        assert abs(direction.x) + abs(direction.y) == 1
        if direction.x:
            assert direction.x == (1 if pending.cell.x < 0 else -1)
