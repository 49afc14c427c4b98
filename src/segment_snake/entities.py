"""Entity records and the store that owns every live collection."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterable, Iterator

import pygame

from .config import EXPLOSION_MAX_RADIUS, EXPLOSION_STEP, MARKER_LIFETIME
from .grid import Cell
from .segments import SegmentConfiguration, SegmentKind

_enemy_ids = itertools.count(1)


@dataclass(slots=True)
class PlayerSnake:
    """The player's body (head first) plus the parallel segment kinds."""

    body: list[Cell]
    segments: SegmentConfiguration
    direction: Cell
    next_direction: Cell

    @classmethod
    def create(
        cls,
        head: Cell,
        direction: Cell,
        kinds: Iterable[SegmentKind],
    ) -> PlayerSnake:
        segments = SegmentConfiguration(kinds)
        body = [head - direction.scaled(i) for i in range(len(segments))]
        return cls(body, segments, direction, direction)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def advance(self, new_head: Cell, grow_kind: SegmentKind | None = None) -> None:
        """Move one cell; growth keeps the tail and appends ``grow_kind``."""

        self.body.insert(0, new_head)
        if grow_kind is None:
            self.body.pop()
        else:
            self.segments.append(grow_kind)

    def remove_segment(self, index: int) -> SegmentKind | None:
        """Remove the kind at ``index`` and shorten the body from the tail."""

        kind = self.segments.remove_at(index)
        if kind is not None:
            self.body.pop()
        return kind


@dataclass(slots=True)
class EnemySnake:
    body: list[Cell]
    direction: Cell
    target: Cell | None = None
    id: int = field(default_factory=lambda: next(_enemy_ids))

    @classmethod
    def spawn(cls, cell: Cell, direction: Cell, length: int) -> EnemySnake:
        body = [cell - direction.scaled(i) for i in range(length)]
        return cls(body=body, direction=direction)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body


@dataclass(slots=True)
class Projectile:
    pos: pygame.Vector2
    direction: Cell

    def advance(self, speed: float) -> None:
        self.pos.x += self.direction.x * speed
        self.pos.y += self.direction.y * speed

    def near(self, cell: Cell, tolerance: float) -> bool:
        return abs(self.pos.x - cell.x) < tolerance and abs(self.pos.y - cell.y) < tolerance


@dataclass(slots=True)
class Explosion:
    cell: Cell
    radius: int = 0
    max_radius: int = EXPLOSION_MAX_RADIUS

    def age(self) -> bool:
        """Grow the ring; return ``False`` once it has burnt out."""

        self.radius += EXPLOSION_STEP
        return self.radius < self.max_radius


@dataclass(slots=True)
class CollisionMarker:
    cell: Cell
    lifetime: int = MARKER_LIFETIME

    def age(self) -> bool:
        self.lifetime -= 1
        return self.lifetime > 0


@dataclass(slots=True)
class Collectible:
    cell: Cell
    kind: SegmentKind


@dataclass(slots=True)
class PendingSpawn:
    cell: Cell
    direction: Cell


@dataclass(slots=True)
class EntityStore:
    """Every collection the simulation mutates, owned in one place."""

    player: PlayerSnake
    enemies: list[EnemySnake] = field(default_factory=list)
    foods: list[Cell] = field(default_factory=list)
    projectiles: list[Projectile] = field(default_factory=list)
    explosions: list[Explosion] = field(default_factory=list)
    markers: list[CollisionMarker] = field(default_factory=list)
    collectibles: list[Collectible] = field(default_factory=list)

    def occupied_cells(self) -> Iterator[Cell]:
        yield from self.player.body
        for enemy in self.enemies:
            yield from enemy.body
        yield from self.foods
        for collectible in self.collectibles:
            yield collectible.cell

    def is_free(self, cell: Cell) -> bool:
        return all(cell != taken for taken in self.occupied_cells())

    def collectible_at(self, cell: Cell) -> Collectible | None:
        for collectible in self.collectibles:
            if collectible.cell == cell:
                return collectible
        return None

    def target_cells(self, include_collectibles: bool) -> list[Cell]:
        cells = list(self.foods)
        if include_collectibles:
            cells.extend(collectible.cell for collectible in self.collectibles)
        return cells

    def explode(self, enemy: EnemySnake) -> None:
        for cell in enemy.body:
            self.explosions.append(Explosion(cell))

    def mark(self, cell: Cell) -> None:
        self.markers.append(CollisionMarker(cell))
