"""The fixed-step simulation core: one call to ``step`` advances one tick."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import pygame

from .abilities import (
    AbilityVisual,
    Gesture,
    GestureController,
    ShieldState,
    gun_visual,
    shield_visual,
)
from .config import (
    CELL_SIZE,
    COUNTDOWN_START,
    ENEMY_HIT_TOLERANCE,
    ENEMY_LENGTH,
    ENEMY_SEGMENT_POINTS,
    ENEMY_SPAWN_DELAY,
    FOOD_HIT_TOLERANCE,
    FOOD_POINTS,
    FOOD_SHOT_POINTS,
    GRID_SIZE,
    GUN_FLASH_DURATION,
    PICKUP_CHANCE,
    PICKUP_POINTS,
    PROJECTILE_RANGE,
    PROJECTILE_SPEED,
    VariantConfig,
)
from .enemies import refresh_target, steer
from .entities import (
    Collectible,
    EnemySnake,
    EntityStore,
    PendingSpawn,
    PlayerSnake,
    Projectile,
)
from .grid import RIGHT, Cell, in_bounds, is_turn_allowed, manhattan, trailing_direction
from .segments import COLLECTIBLE_KINDS, Effect, SegmentKind, TriggerClass
from .spawning import place_food, place_pickup_cell, select_spawn_point

logger = logging.getLogger(__name__)

RUNNING = "running"
GAME_OVER = "game_over"


class Cue(Enum):
    SHOOT = "shoot"
    FOOD = "food"
    EXPLOSION = "explosion"
    COLLISION = "collision"
    SHIELD = "shield"
    SPAWN_WARNING = "spawn_warning"
    PICKUP = "pickup"
    GAME_OVER = "over"


# Without the segment system the head carries one gun and one shield.
FIXED_LOADOUT: dict[TriggerClass, list[tuple[int, SegmentKind]]] = {
    TriggerClass.SHORT_PRESS: [(0, SegmentKind.GUN)],
    TriggerClass.LONG_PRESS: [(0, SegmentKind.SHIELD)],
    TriggerClass.NONE: [],
}


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only copy of everything a renderer needs for one frame."""

    variant: str
    state: str
    score: int
    player: tuple[Cell, ...]
    kinds: tuple[SegmentKind, ...]
    direction: Cell
    shield_active: bool
    enemies: tuple[tuple[Cell, ...], ...]
    foods: tuple[Cell, ...]
    collectibles: tuple[tuple[Cell, SegmentKind], ...]
    projectiles: tuple[tuple[float, float], ...]
    explosions: tuple[tuple[Cell, int, int], ...]
    markers: tuple[Cell, ...]
    pending_spawn: Cell | None
    spawn_countdown: int
    camera: tuple[float, float]
    abilities: tuple[AbilityVisual, ...]


class Simulation:
    """Owns the entity store, ability timers and the per-tick update.

    Input handlers (``queue_direction``, ``press``, ``release``, inventory
    edits) and ``step`` are expected to run on one thread, one at a time.
    Observers are plain callbacks; they receive values, never the store.
    """

    def __init__(
        self,
        variant: VariantConfig,
        *,
        now: int = 0,
        rng: random.Random | None = None,
        on_cue: Callable[[Cue], None] | None = None,
        on_score: Callable[[int], None] | None = None,
        on_game_over: Callable[[int], None] | None = None,
    ) -> None:
        self.variant = variant
        self.rng = rng or random.Random()
        self.on_cue = on_cue
        self.on_score = on_score
        self.on_game_over = on_game_over
        self.gesture = GestureController()
        self._effects: dict[Effect, Callable[[int, int], None]] = {
            Effect.SHOOT: self._shoot,
            Effect.SHIELD: self._raise_shield,
            Effect.NONE: lambda index, now: None,
        }
        self.reset(now)

    # --- Lifecycle ------------------------------------------------------

    def reset(self, now: int) -> None:
        """Rebuild every collection and timer for a fresh game."""

        if self.variant.segments_enabled:
            kinds = [SegmentKind.GUN, SegmentKind.SHIELD]
        else:
            kinds = [SegmentKind.BODY, SegmentKind.BODY]
        if self.variant.bounded:
            head = Cell(GRID_SIZE // 2, GRID_SIZE // 2)
        else:
            head = Cell(0, 0)
        self.store = EntityStore(PlayerSnake.create(head, RIGHT, kinds))
        self.shield = ShieldState()
        self.gesture.reset()
        self.score = 0
        self.state = RUNNING
        self.ticks = 0
        self.last_spawn = now
        self.pending_spawn: PendingSpawn | None = None
        self.spawn_countdown = 0
        self.gun_flash_end = 0
        for _ in range(self.variant.food_count):
            place_food(self.store, self.variant, self.rng)
        self._notify_score()
        logger.info("New %s game started", self.variant.name)

    @property
    def game_over(self) -> bool:
        return self.state == GAME_OVER

    def _end_game(self) -> None:
        if self.state == GAME_OVER:
            return
        self.state = GAME_OVER
        self.gesture.reset()
        logger.info("Game over after %s ticks with score %s", self.ticks, self.score)
        self._cue(Cue.GAME_OVER)
        if self.on_game_over:
            self.on_game_over(self.score)

    def shift_clock(self, paused_ms: int) -> None:
        """Push every absolute deadline back by time spent paused."""

        if paused_ms <= 0:
            return
        self.last_spawn += paused_ms
        self.gun_flash_end += paused_ms
        if self.shield.active:
            self.shield.end_time += paused_ms
        if self.shield.cooldown_end:
            self.shield.cooldown_end += paused_ms

    def _cue(self, cue: Cue) -> None:
        if self.on_cue:
            self.on_cue(cue)

    def _add_score(self, points: int) -> None:
        self.score += points
        self._notify_score()

    def _notify_score(self) -> None:
        if self.on_score:
            self.on_score(self.score)

    # --- Input ----------------------------------------------------------

    def queue_direction(self, direction: Cell) -> bool:
        """Buffer a turn for the next tick; reversals and same-axis input are dropped."""

        player = self.store.player
        if self.state != RUNNING or not is_turn_allowed(player.direction, direction):
            return False
        player.next_direction = Cell(*direction)
        return True

    def press(self, now: int) -> None:
        if self.state != RUNNING:
            return
        self.gesture.press(now, arm=self.shield.ready(now))

    def poll(self, now: int) -> None:
        """Fire the long-press trigger once its hold delay has elapsed."""

        if self.state != RUNNING:
            return
        if self.gesture.poll(now) is Gesture.LONG:
            self._fire(TriggerClass.LONG_PRESS, now)

    def release(self, now: int) -> None:
        if self.state != RUNNING:
            self.gesture.reset()
            return
        self.poll(now)
        if self.gesture.release(now) is Gesture.SHORT and not self.shield.active:
            self._fire(TriggerClass.SHORT_PRESS, now)

    # --- Abilities ------------------------------------------------------

    def trigger_sources(self, trigger: TriggerClass) -> list[tuple[int, SegmentKind]]:
        if self.variant.segments_enabled:
            return self.store.player.segments.kinds_with_trigger(trigger)
        return list(FIXED_LOADOUT[trigger])

    def has_ability(self, trigger: TriggerClass) -> bool:
        if self.variant.segments_enabled:
            return self.store.player.segments.has_trigger(trigger)
        return bool(FIXED_LOADOUT[trigger])

    def _fire(self, trigger: TriggerClass, now: int) -> None:
        for index, kind in self.trigger_sources(trigger):
            self._effects[kind.effect](index, now)

    def _shoot(self, index: int, now: int) -> None:
        origin = self.store.player.body[index]
        self.store.projectiles.append(
            Projectile(pygame.Vector2(origin.x, origin.y), self.store.player.direction)
        )
        self.gun_flash_end = now + GUN_FLASH_DURATION
        self._cue(Cue.SHOOT)

    def _raise_shield(self, index: int, now: int) -> None:
        if self.shield.activate(now):
            self._cue(Cue.SHIELD)

    def ability_visuals(self, now: int) -> tuple[AbilityVisual, ...]:
        return (
            gun_visual(now, self.gun_flash_end, self.has_ability(TriggerClass.SHORT_PRESS)),
            shield_visual(
                now, self.shield, self.gesture, self.has_ability(TriggerClass.LONG_PRESS)
            ),
        )

    # --- Inventory ------------------------------------------------------

    def move_segment(self, from_index: int, to_index: int) -> bool:
        if not self.variant.segments_enabled or self.state != RUNNING:
            return False
        return self.store.player.segments.move_to(from_index, to_index)

    def discard_segment(self, index: int) -> Collectible | None:
        """Remove a segment and drop it behind the tail as a collectible.

        The drop cell is one step past the old tail along the tail's trailing
        direction (negated heading when that is undefined). If that cell is
        off the grid or taken, the vacated tail cell is used instead.
        """

        if not self.variant.segments_enabled or self.state != RUNNING:
            return None
        player = self.store.player
        old_tail = player.body[-1]
        trailing = trailing_direction(player.body, -player.direction)
        kind = player.remove_segment(index)
        if kind is None:
            return None
        cell = old_tail + trailing
        if (self.variant.bounded and not in_bounds(cell, GRID_SIZE)) or not self.store.is_free(cell):
            cell = old_tail
        collectible = Collectible(cell, kind)
        self.store.collectibles.append(collectible)
        logger.debug("Ejected %s segment to %s", kind.name, cell)
        return collectible

    # --- Tick -----------------------------------------------------------

    def step(self, now: int) -> None:
        """Advance the world by exactly one tick."""

        if self.state != RUNNING:
            return
        self.ticks += 1
        player = self.store.player
        player.direction = player.next_direction
        new_head = player.head + player.direction

        if self.variant.bounded and not in_bounds(new_head, GRID_SIZE):
            self._end_game()
            return
        if player.occupies(new_head):
            self._cue(Cue.COLLISION)
            self._end_game()
            return
        if not self._ram_enemies(new_head):
            return

        self._move_player(new_head)
        self._update_projectiles()
        self._update_spawner(now)
        if not self._update_enemies():
            return
        self._restock_food()

        self.store.explosions = [boom for boom in self.store.explosions if boom.age()]
        self.store.markers = [marker for marker in self.store.markers if marker.age()]

        if self.shield.update(now):
            logger.debug("Shield expired, cooling down until %s", self.shield.cooldown_end)

    def _remove_enemy(self, enemy: EnemySnake) -> None:
        self.store.enemies = [other for other in self.store.enemies if other is not enemy]

    def _destroy_enemy(self, enemy: EnemySnake, contact: Cell) -> None:
        """Shield or projectile kill: blow up every segment and score them."""

        self.store.mark(contact)
        self.store.explode(enemy)
        self._remove_enemy(enemy)
        self._add_score(ENEMY_SEGMENT_POINTS * len(enemy.body))
        self._cue(Cue.EXPLOSION)
        logger.debug("Enemy %s destroyed at %s", enemy.id, contact)

    def _ram_enemies(self, new_head: Cell) -> bool:
        for enemy in reversed(list(self.store.enemies)):
            if not enemy.occupies(new_head):
                continue
            if not self.shield.active:
                self.store.mark(new_head)
                self._cue(Cue.COLLISION)
                self._end_game()
                return False
            self._destroy_enemy(enemy, new_head)
        return True

    def _move_player(self, new_head: Cell) -> None:
        player = self.store.player
        grow_kind: SegmentKind | None = None
        ate_food = new_head in self.store.foods
        pickup = None
        if ate_food:
            self.store.foods.remove(new_head)
            grow_kind = SegmentKind.BODY
        elif self.variant.segments_enabled:
            pickup = self.store.collectible_at(new_head)
            if pickup is not None:
                self.store.collectibles.remove(pickup)
                grow_kind = pickup.kind

        player.advance(new_head, grow_kind)

        if ate_food:
            place_food(self.store, self.variant, self.rng)
            self._add_score(FOOD_POINTS)
            self._cue(Cue.FOOD)
            self._maybe_drop_pickup()
        elif pickup is not None:
            self._add_score(PICKUP_POINTS)
            self._cue(Cue.PICKUP)
            logger.debug("Collected %s segment", pickup.kind.name)

    def _restock_food(self) -> None:
        """Top food back up to the variant's count; failed placements retry next tick."""

        for _ in range(self.variant.food_count - len(self.store.foods)):
            if place_food(self.store, self.variant, self.rng) is None:
                logger.debug("No free cell for food this tick")
                break

    def _maybe_drop_pickup(self) -> None:
        if not self.variant.segments_enabled or self.rng.random() >= PICKUP_CHANCE:
            return
        cell = place_pickup_cell(self.store, self.variant, self.rng)
        if cell is not None:
            kind = self.rng.choice(COLLECTIBLE_KINDS)
            self.store.collectibles.append(Collectible(cell, kind))

    # --- Projectiles ----------------------------------------------------

    def _projectile_in_range(self, projectile: Projectile) -> bool:
        pos = projectile.pos
        if self.variant.bounded:
            return 0 <= pos.x < GRID_SIZE and 0 <= pos.y < GRID_SIZE
        return manhattan(pos, self.store.player.head) <= PROJECTILE_RANGE

    def _projectile_hits_food(self, projectile: Projectile) -> bool:
        for food in self.store.foods:
            if projectile.near(food, FOOD_HIT_TOLERANCE):
                self.store.foods.remove(food)
                place_food(self.store, self.variant, self.rng)
                self._add_score(FOOD_SHOT_POINTS)
                return True
        return False

    def _projectile_hits_enemy(self, projectile: Projectile) -> bool:
        for enemy in reversed(list(self.store.enemies)):
            for segment in enemy.body:
                if projectile.near(segment, ENEMY_HIT_TOLERANCE):
                    self._destroy_enemy(enemy, segment)
                    return True
        return False

    def _update_projectiles(self) -> None:
        survivors: list[Projectile] = []
        for projectile in self.store.projectiles:
            projectile.advance(PROJECTILE_SPEED)
            if not self._projectile_in_range(projectile):
                continue
            if self._projectile_hits_food(projectile):
                continue
            if self._projectile_hits_enemy(projectile):
                continue
            survivors.append(projectile)
        self.store.projectiles = survivors

    # --- Enemies --------------------------------------------------------

    def _update_spawner(self, now: int) -> None:
        elapsed = now - self.last_spawn
        if elapsed > ENEMY_SPAWN_DELAY:
            self._spawn_enemy()
            self.last_spawn = now
        elif elapsed > ENEMY_SPAWN_DELAY - COUNTDOWN_START and self.pending_spawn is None:
            self.pending_spawn = select_spawn_point(self.store, self.variant, self.rng)
            if self.pending_spawn is not None:
                self.spawn_countdown = math.ceil((ENEMY_SPAWN_DELAY - elapsed) / 1000)
                self._cue(Cue.SPAWN_WARNING)
        elif self.pending_spawn is not None:
            self.spawn_countdown = math.ceil((ENEMY_SPAWN_DELAY - elapsed) / 1000)

    def _spawn_enemy(self) -> None:
        pending = self.pending_spawn
        self.pending_spawn = None
        self.spawn_countdown = 0
        if pending is None or len(self.store.enemies) >= self.variant.max_enemies:
            return
        enemy = EnemySnake.spawn(pending.cell, pending.direction, ENEMY_LENGTH)
        self.store.enemies.append(enemy)
        logger.debug("Enemy %s spawned at %s heading %s", enemy.id, pending.cell, pending.direction)

    def _update_enemies(self) -> bool:
        """Move every enemy once; return ``False`` if one of them ended the game."""

        include_pickups = self.variant.segments_enabled
        for enemy in list(self.store.enemies):
            if not any(other is enemy for other in self.store.enemies):
                continue
            refresh_target(enemy, self.store.target_cells(include_pickups))
            new_head = enemy.head + steer(enemy, self.rng)

            if self.variant.bounded and not in_bounds(new_head, GRID_SIZE):
                self._remove_enemy(enemy)
                continue

            if self.store.player.occupies(new_head):
                self.store.mark(new_head)
                self.store.explode(enemy)
                self._remove_enemy(enemy)
                self._cue(Cue.EXPLOSION)
                if not self.shield.active:
                    self._cue(Cue.COLLISION)
                    self._end_game()
                    return False
                continue

            victim = next(
                (
                    other
                    for other in self.store.enemies
                    if other is not enemy and other.occupies(new_head)
                ),
                None,
            )
            if victim is not None:
                self.store.mark(new_head)
                self.store.explode(enemy)
                self.store.explode(victim)
                self._remove_enemy(enemy)
                self._remove_enemy(victim)
                self._cue(Cue.EXPLOSION)
                continue

            enemy.body.insert(0, new_head)
            if new_head in self.store.foods:
                self.store.foods.remove(new_head)
                place_food(self.store, self.variant, self.rng)
                enemy.target = None
                self._cue(Cue.FOOD)
            elif include_pickups and (pickup := self.store.collectible_at(new_head)):
                self.store.collectibles.remove(pickup)
                enemy.target = None
            else:
                enemy.body.pop()
        return True

    # --- Observation ----------------------------------------------------

    def camera(self, viewport: tuple[int, int]) -> tuple[float, float]:
        if self.variant.bounded:
            return 0.0, 0.0
        head = self.store.player.head
        return (
            head.x * CELL_SIZE - viewport[0] / 2,
            head.y * CELL_SIZE - viewport[1] / 2,
        )

    def snapshot(self, now: int, viewport: tuple[int, int]) -> Snapshot:
        store = self.store
        return Snapshot(
            variant=self.variant.name,
            state=self.state,
            score=self.score,
            player=tuple(store.player.body),
            kinds=store.player.segments.kinds,
            direction=store.player.direction,
            shield_active=self.shield.active,
            enemies=tuple(tuple(enemy.body) for enemy in store.enemies),
            foods=tuple(store.foods),
            collectibles=tuple((item.cell, item.kind) for item in store.collectibles),
            projectiles=tuple((p.pos.x, p.pos.y) for p in store.projectiles),
            explosions=tuple((b.cell, b.radius, b.max_radius) for b in store.explosions),
            markers=tuple(marker.cell for marker in store.markers),
            pending_spawn=self.pending_spawn.cell if self.pending_spawn else None,
            spawn_countdown=self.spawn_countdown,
            camera=self.camera(viewport),
            abilities=self.ability_visuals(now),
        )
