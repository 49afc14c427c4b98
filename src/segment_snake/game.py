"""Segment Snake: the pygame driver around the simulation core."""

from __future__ import annotations

import logging

import pygame

from .audio import AudioEngine
from .clock import TickScheduler
from .config import (
    DEFAULT_VARIANT,
    FONT_NAME,
    FONT_SIZE,
    FPS,
    GAME_SPEED,
    GAME_SPEED_STEP,
    HUD_HEIGHT,
    VARIANTS,
    VIEWPORT,
)
from .controls import DIRECTION_COMMANDS, Command, decode_event
from .highscore import load_high_score, save_high_score
from .render import Renderer
from .simulation import Simulation

logger = logging.getLogger(__name__)


class SegmentSnake:
    """Owns the window, clock and observers; delegates all rules to ``Simulation``."""

    def __init__(self, variant: str = DEFAULT_VARIANT, period_ms: int = GAME_SPEED) -> None:
        pygame.init()
        self.variant = VARIANTS[variant]
        self.window = pygame.display.set_mode(
            (VIEWPORT[0], VIEWPORT[1] + HUD_HEIGHT), pygame.DOUBLEBUF | pygame.SCALED
        )
        pygame.display.set_caption(f"Segment Snake [{self.variant.name}]")
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.audio = AudioEngine()
        self.renderer = Renderer(self.window, self.font)
        self.high_score = load_high_score(self.variant.name)

        self.scheduler = TickScheduler()
        self.scheduler.set_period(period_ms)
        self.inventory_cursor: int | None = None
        self._paused_at = 0

        self.sim = Simulation(
            self.variant,
            now=pygame.time.get_ticks(),
            on_cue=self.audio.play,
            on_game_over=self._on_game_over,
        )
        self.scheduler.start()

    # --- Game over & restart -------------------------------------------

    def _on_game_over(self, score: int) -> None:
        self.scheduler.stop()
        self.inventory_cursor = None
        if score > self.high_score:
            self.high_score = score
            save_high_score(self.variant.name, score)

    def restart(self) -> None:
        self.inventory_cursor = None
        self.sim.reset(pygame.time.get_ticks())
        self.scheduler.start()

    # --- Inventory -------------------------------------------------------

    def _toggle_inventory(self, now: int) -> None:
        if not self.variant.segments_enabled or self.sim.game_over:
            return
        if self.inventory_cursor is None:
            self.sim.gesture.reset()
            self.inventory_cursor = min(1, len(self.sim.store.player.segments) - 1)
            self._paused_at = now
            self.scheduler.stop()
        else:
            self.inventory_cursor = None
            self.sim.shift_clock(now - self._paused_at)
            self.scheduler.start()

    def _inventory_command(self, command: Command) -> None:
        cursor = self.inventory_cursor
        if cursor is None:
            return
        count = len(self.sim.store.player.segments)
        if command is Command.CURSOR_UP:
            self.inventory_cursor = max(min(1, count - 1), cursor - 1)
        elif command is Command.CURSOR_DOWN:
            self.inventory_cursor = min(count - 1, cursor + 1)
        elif command is Command.MOVE_UP:
            if self.sim.move_segment(cursor, cursor - 1):
                self.inventory_cursor = cursor - 1
        elif command is Command.MOVE_DOWN:
            if self.sim.move_segment(cursor, cursor + 1):
                self.inventory_cursor = cursor + 1
        elif command is Command.DISCARD:
            if self.sim.discard_segment(cursor) is not None:
                self.inventory_cursor = min(cursor, len(self.sim.store.player.segments) - 1)

    # --- Input -----------------------------------------------------------

    def handle_command(self, command: Command, now: int) -> bool:
        """Apply one decoded command; return ``False`` to quit."""

        if command is Command.QUIT:
            return False
        if command is Command.INVENTORY:
            self._toggle_inventory(now)
            return True
        if self.inventory_cursor is not None:
            self._inventory_command(command)
            return True

        if self.sim.game_over:
            if command in (Command.PRESS, Command.RESTART):
                self.restart()
            return True

        direction = DIRECTION_COMMANDS.get(command)
        if direction is not None:
            self.sim.queue_direction(direction)
        elif command is Command.PRESS:
            self.sim.press(now)
        elif command is Command.RELEASE:
            self.sim.release(now)
        elif command is Command.RESTART:
            self.restart()
        elif command is Command.FASTER:
            self.scheduler.set_period(self.scheduler.period_ms - GAME_SPEED_STEP)
        elif command is Command.SLOWER:
            self.scheduler.set_period(self.scheduler.period_ms + GAME_SPEED_STEP)
        return True

    def handle_events(self) -> bool:
        for event in pygame.event.get():
            command = decode_event(event, inventory_open=self.inventory_cursor is not None)
            if command is None:
                continue
            if not self.handle_command(command, pygame.time.get_ticks()):
                return False
        return True

    # --- Main loop -------------------------------------------------------

    def draw(self) -> None:
        now = pygame.time.get_ticks()
        self.window.fill((0, 0, 0))
        self.renderer.draw(
            self.sim.snapshot(now, VIEWPORT),
            high_score=self.high_score,
            period_ms=self.scheduler.period_ms,
            inventory_cursor=self.inventory_cursor,
        )

    def start(self) -> None:
        """Run the main loop: handle events, tick at the set period, then render."""

        clock = pygame.time.Clock()
        running = True
        logger.info("Starting %s at %s ms per tick", self.variant.name, self.scheduler.period_ms)

        while running:
            dt = clock.tick(FPS)
            running = self.handle_events()

            now = pygame.time.get_ticks()
            if self.inventory_cursor is None:
                self.sim.poll(now)
            for _ in range(self.scheduler.advance(dt)):
                self.sim.step(now)
                if self.sim.game_over:
                    break

            self.draw()
            pygame.display.update()

        pygame.quit()
