"""Reduce pygame keyboard events to the small command set the game uses."""

from __future__ import annotations

from enum import Enum

import pygame

from .config import (
    DISCARD_KEYS,
    FASTER_KEYS,
    GESTURE_KEY,
    INVENTORY_KEYS,
    KEY_TO_DIRECTION,
    QUIT_KEYS,
    RESTART_KEYS,
    SLOWER_KEYS,
)
from .grid import DOWN, LEFT, RIGHT, UP, Cell


class Command(Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    PRESS = "press"
    RELEASE = "release"
    INVENTORY = "inventory"
    RESTART = "restart"
    FASTER = "faster"
    SLOWER = "slower"
    QUIT = "quit"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    DISCARD = "discard"


DIRECTION_COMMANDS: dict[Command, Cell] = {
    Command.UP: UP,
    Command.DOWN: DOWN,
    Command.LEFT: LEFT,
    Command.RIGHT: RIGHT,
}


def decode_event(event: pygame.event.Event, *, inventory_open: bool = False) -> Command | None:
    """Translate one event; unknown input decodes to ``None``."""

    if event.type == pygame.QUIT:
        return Command.QUIT
    if event.type == pygame.KEYUP:
        return Command.RELEASE if event.key == GESTURE_KEY else None
    if event.type != pygame.KEYDOWN:
        return None

    key = event.key
    if key in QUIT_KEYS:
        return Command.QUIT
    if key in INVENTORY_KEYS:
        return Command.INVENTORY

    if inventory_open:
        shift = bool(getattr(event, "mod", 0) & pygame.KMOD_SHIFT)
        name = KEY_TO_DIRECTION.get(key)
        if name == "UP":
            return Command.MOVE_UP if shift else Command.CURSOR_UP
        if name == "DOWN":
            return Command.MOVE_DOWN if shift else Command.CURSOR_DOWN
        if key in DISCARD_KEYS:
            return Command.DISCARD
        return None

    if key == GESTURE_KEY:
        return Command.PRESS
    if key in RESTART_KEYS:
        return Command.RESTART
    if key in FASTER_KEYS:
        return Command.FASTER
    if key in SLOWER_KEYS:
        return Command.SLOWER
    name = KEY_TO_DIRECTION.get(key)
    return Command(name) if name else None
