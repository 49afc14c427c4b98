"""Centralized configuration, variant presets and palette for Segment Snake."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import pygame

BASE_DIR = Path(__file__).resolve().parent


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for saves."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "segment-snake"


DATA_DIR = Path(os.getenv("SEGMENT_SNAKE_DATA_DIR") or _default_data_dir())
HIGHSCORE_DIR = Path(os.getenv("SEGMENT_SNAKE_HIGHSCORE_DIR") or DATA_DIR)

GRID_SIZE: int = 30
CELL_SIZE: int = 20
VIEWPORT: tuple[int, int] = (GRID_SIZE * CELL_SIZE, GRID_SIZE * CELL_SIZE)
HUD_HEIGHT: int = 56
FONT_NAME: str = "consolas"
FONT_SIZE: int = 20
FPS: int = 120

# Tick period in milliseconds, adjustable while playing.
GAME_SPEED: int = 100
MIN_GAME_SPEED: int = 40
MAX_GAME_SPEED: int = 300
GAME_SPEED_STEP: int = 10

PROJECTILE_SPEED: float = 1.5  # cells per tick
PROJECTILE_RANGE: int = 100  # Manhattan cells from the head (open world)
FOOD_HIT_TOLERANCE: float = 0.5
ENEMY_HIT_TOLERANCE: float = 0.8

ENEMY_SPAWN_DELAY: int = 5000
COUNTDOWN_START: int = 3000
ENEMY_LENGTH: int = 3
ENEMY_WANDER_CHANCE: float = 0.1
SPAWN_CLEARANCE: int = 3
SPAWN_DISTANCE: int = 30
SPAWN_DISTANCE_JITTER: int = 10

SHIELD_DURATION: int = 1000
SHIELD_COOLDOWN: int = 5000
SHIELD_ACTIVATION_TIME: int = 500
GUN_FLASH_DURATION: int = 200

FOOD_POINTS: int = 10
FOOD_SHOT_POINTS: int = 5
ENEMY_SEGMENT_POINTS: int = 20
PICKUP_POINTS: int = 10

FOOD_SPAWN_MIN: int = 5
FOOD_SPAWN_RANGE: int = 40
PLACEMENT_ATTEMPTS: int = 100
PICKUP_CHANCE: float = 0.25
PICKUP_SPAWN_RANGE: int = 12

EXPLOSION_STEP: int = 2
EXPLOSION_MAX_RADIUS: int = 30
MARKER_LIFETIME: int = 30

MINIMAP_SIZE: int = 140
MINIMAP_RANGE: int = 50

# Inward-facing entry points along the four edges of the bounded grid.
ENTRY_POINTS: tuple[tuple[tuple[int, int], tuple[int, int]], ...] = (
    ((5, 0), (0, 1)),
    ((15, 0), (0, 1)),
    ((25, 0), (0, 1)),
    ((5, GRID_SIZE - 1), (0, -1)),
    ((15, GRID_SIZE - 1), (0, -1)),
    ((25, GRID_SIZE - 1), (0, -1)),
    ((0, 5), (1, 0)),
    ((0, 15), (1, 0)),
    ((0, 25), (1, 0)),
    ((GRID_SIZE - 1, 5), (-1, 0)),
    ((GRID_SIZE - 1, 15), (-1, 0)),
    ((GRID_SIZE - 1, 25), (-1, 0)),
)


@dataclass(frozen=True, slots=True)
class VariantConfig:
    """Switches that turn the one simulation core into each game mode."""

    name: str
    bounded: bool
    max_enemies: int
    spawn_strategy: str  # "entry_points" or "ring"
    food_strategy: str  # "grid" or "ring"
    food_count: int
    segments_enabled: bool = False


VARIANTS: dict[str, VariantConfig] = {
    "classic": VariantConfig(
        name="classic",
        bounded=True,
        max_enemies=5,
        spawn_strategy="entry_points",
        food_strategy="grid",
        food_count=1,
    ),
    "openworld": VariantConfig(
        name="openworld",
        bounded=False,
        max_enemies=8,
        spawn_strategy="ring",
        food_strategy="ring",
        food_count=10,
    ),
    "segments": VariantConfig(
        name="segments",
        bounded=False,
        max_enemies=8,
        spawn_strategy="ring",
        food_strategy="ring",
        food_count=10,
        segments_enabled=True,
    ),
}
DEFAULT_VARIANT = "classic"

PALETTE = {
    "bg": pygame.Color(26, 26, 46),
    "grid": pygame.Color(22, 33, 62),
    "text": pygame.Color(255, 255, 255),
    "hud": pygame.Color(10, 10, 20),
    "snake_head": pygame.Color(255, 235, 59),
    "snake_body": pygame.Color(253, 216, 53),
    "shield_head": pygame.Color(100, 181, 246),
    "shield_body": pygame.Color(33, 150, 243),
    "gun": pygame.Color(243, 129, 129),
    "food": pygame.Color(102, 187, 106),
    "enemy_head": pygame.Color(255, 255, 255),
    "enemy_body": pygame.Color(224, 224, 224),
    "projectile": pygame.Color(244, 67, 54),
    "explosion": pygame.Color(255, 100, 0),
    "marker": pygame.Color(156, 39, 176),
    "spawn": pygame.Color(255, 0, 0),
    "gun_flash": pygame.Color(255, 0, 0),
    "panel": pygame.Color(0, 0, 0, 190),
    "cursor": pygame.Color(255, 235, 59),
}

KEY_TO_DIRECTION = {
    pygame.K_UP: "UP",
    pygame.K_w: "UP",
    pygame.K_DOWN: "DOWN",
    pygame.K_s: "DOWN",
    pygame.K_LEFT: "LEFT",
    pygame.K_a: "LEFT",
    pygame.K_RIGHT: "RIGHT",
    pygame.K_d: "RIGHT",
}
GESTURE_KEY = pygame.K_SPACE
INVENTORY_KEYS = (pygame.K_i, pygame.K_TAB)
RESTART_KEYS = (pygame.K_r,)
DISCARD_KEYS = (pygame.K_x, pygame.K_DELETE)
FASTER_KEYS = (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS)
SLOWER_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)
