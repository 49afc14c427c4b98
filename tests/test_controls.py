from __future__ import annotations

import pygame

from segment_snake.controls import DIRECTION_COMMANDS, Command, decode_event
from segment_snake.grid import DOWN, LEFT, RIGHT, UP


def key(key_code: int, *, up: bool = False, mod: int = 0) -> pygame.event.Event:
    kind = pygame.KEYUP if up else pygame.KEYDOWN
    return pygame.event.Event(kind, key=key_code, mod=mod)


def test_directions() -> None:
    assert decode_event(key(pygame.K_UP)) is Command.UP
    assert decode_event(key(pygame.K_a)) is Command.LEFT
    assert decode_event(key(pygame.K_s)) is Command.DOWN
    assert decode_event(key(pygame.K_RIGHT)) is Command.RIGHT


def test_gesture_press_and_release() -> None:
    assert decode_event(key(pygame.K_SPACE)) is Command.PRESS
    assert decode_event(key(pygame.K_SPACE, up=True)) is Command.RELEASE
    assert decode_event(key(pygame.K_UP, up=True)) is None


def test_other_commands() -> None:
    assert decode_event(key(pygame.K_i)) is Command.INVENTORY
    assert decode_event(key(pygame.K_r)) is Command.RESTART
    assert decode_event(key(pygame.K_EQUALS)) is Command.FASTER
    assert decode_event(key(pygame.K_MINUS)) is Command.SLOWER
    assert decode_event(pygame.event.Event(pygame.QUIT)) is Command.QUIT
    assert decode_event(key(pygame.K_F5)) is None


def test_inventory_mode_keys() -> None:
    assert decode_event(key(pygame.K_UP), inventory_open=True) is Command.CURSOR_UP
    assert decode_event(key(pygame.K_DOWN), inventory_open=True) is Command.CURSOR_DOWN
    shifted = key(pygame.K_UP, mod=pygame.KMOD_LSHIFT)
    assert decode_event(shifted, inventory_open=True) is Command.MOVE_UP
    assert decode_event(key(pygame.K_x), inventory_open=True) is Command.DISCARD
    assert decode_event(key(pygame.K_SPACE), inventory_open=True) is None
    assert decode_event(key(pygame.K_TAB), inventory_open=True) is Command.INVENTORY


def test_direction_commands_map_to_cells() -> None:
    assert DIRECTION_COMMANDS[decode_event(key(pygame.K_w))] == UP
    assert DIRECTION_COMMANDS[decode_event(key(pygame.K_LEFT))] == LEFT
    assert set(DIRECTION_COMMANDS.values()) == {UP, DOWN, LEFT, RIGHT}
    assert Command.PRESS not in DIRECTION_COMMANDS
