"""pygame drawing for simulation snapshots; never touches simulation state."""

from __future__ import annotations

import math

import pygame

from .config import (
    CELL_SIZE,
    GRID_SIZE,
    HUD_HEIGHT,
    MINIMAP_RANGE,
    MINIMAP_SIZE,
    PALETTE,
    VIEWPORT,
)
from .grid import Cell
from .segments import SegmentKind
from .simulation import GAME_OVER, Snapshot

KIND_COLORS = {
    SegmentKind.HEAD: PALETTE["snake_head"],
    SegmentKind.GUN: PALETTE["gun"],
    SegmentKind.SHIELD: PALETTE["shield_body"],
    SegmentKind.BODY: PALETTE["snake_body"],
}


class Renderer:
    """Draws the board into a viewport below a one-line HUD."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self.surface = surface
        self.font = font
        self.board = pygame.Surface(VIEWPORT).convert_alpha()

    # --- Helpers -------------------------------------------------------

    def _to_screen(self, x: float, y: float, camera: tuple[float, float]) -> tuple[float, float]:
        return x * CELL_SIZE - camera[0], y * CELL_SIZE - camera[1]

    def _visible(self, sx: float, sy: float) -> bool:
        return -CELL_SIZE < sx < VIEWPORT[0] + CELL_SIZE and -CELL_SIZE < sy < VIEWPORT[1] + CELL_SIZE

    def _cell_rect(self, cell: Cell, camera: tuple[float, float], inset: int = 2) -> pygame.Rect | None:
        sx, sy = self._to_screen(cell.x, cell.y, camera)
        if not self._visible(sx, sy):
            return None
        return pygame.Rect(int(sx) + inset, int(sy) + inset, CELL_SIZE - inset * 2, CELL_SIZE - inset * 2)

    def _text(self, text: str, color: pygame.Color, pos: tuple[int, int]) -> pygame.Rect:
        label = self.font.render(text, True, color)
        return self.surface.blit(label, pos)

    # --- Board ---------------------------------------------------------

    def _draw_grid(self, snap: Snapshot) -> None:
        self.board.fill(PALETTE["bg"])
        cam_x, cam_y = snap.camera
        offset_x = -(cam_x % CELL_SIZE)
        offset_y = -(cam_y % CELL_SIZE)
        cols = VIEWPORT[0] // CELL_SIZE + 2
        rows = VIEWPORT[1] // CELL_SIZE + 2
        for i in range(cols):
            x = int(offset_x + i * CELL_SIZE)
            pygame.draw.line(self.board, PALETTE["grid"], (x, 0), (x, VIEWPORT[1]))
        for i in range(rows):
            y = int(offset_y + i * CELL_SIZE)
            pygame.draw.line(self.board, PALETTE["grid"], (0, y), (VIEWPORT[0], y))

    def _draw_foods(self, snap: Snapshot) -> None:
        for food in snap.foods:
            sx, sy = self._to_screen(food.x, food.y, snap.camera)
            if self._visible(sx, sy):
                center = (int(sx + CELL_SIZE / 2), int(sy + CELL_SIZE / 2))
                pygame.draw.circle(self.board, PALETTE["food"], center, CELL_SIZE // 2 - 2)
        for cell, kind in snap.collectibles:
            rect = self._cell_rect(cell, snap.camera, inset=4)
            if rect:
                pygame.draw.rect(self.board, KIND_COLORS[kind], rect, border_radius=3)
                pygame.draw.rect(self.board, PALETTE["text"], rect, width=1, border_radius=3)

    def _draw_enemies(self, snap: Snapshot) -> None:
        for body in snap.enemies:
            for idx, cell in enumerate(body):
                rect = self._cell_rect(cell, snap.camera)
                if rect:
                    color = PALETTE["enemy_head"] if idx == 0 else PALETTE["enemy_body"]
                    pygame.draw.rect(self.board, color, rect)

    def _draw_player(self, snap: Snapshot) -> None:
        segmented = snap.variant == "segments"
        for idx, cell in enumerate(snap.player):
            rect = self._cell_rect(cell, snap.camera)
            if rect is None:
                continue
            if snap.shield_active:
                color = PALETTE["shield_head"] if idx == 0 else PALETTE["shield_body"]
            elif segmented:
                color = KIND_COLORS[snap.kinds[idx]]
            else:
                color = PALETTE["snake_head"] if idx == 0 else PALETTE["snake_body"]
            pygame.draw.rect(self.board, color, rect)
            if idx == 0:
                gun_x = rect.centerx + snap.direction.x * CELL_SIZE // 3
                gun_y = rect.centery + snap.direction.y * CELL_SIZE // 3
                pygame.draw.rect(self.board, PALETTE["gun"], (gun_x - 3, gun_y - 3, 6, 6))

    def _draw_effects(self, snap: Snapshot) -> None:
        for x, y in snap.projectiles:
            sx, sy = self._to_screen(x, y, snap.camera)
            if self._visible(sx, sy):
                center = (int(sx + CELL_SIZE / 2), int(sy + CELL_SIZE / 2))
                pygame.draw.circle(self.board, PALETTE["projectile"], center, 4)

        for cell, radius, max_radius in snap.explosions:
            sx, sy = self._to_screen(cell.x, cell.y, snap.camera)
            alpha = int(255 * max(0.0, 1 - radius / max_radius))
            color = pygame.Color(PALETTE["explosion"])
            color.a = alpha
            center = (int(sx + CELL_SIZE / 2), int(sy + CELL_SIZE / 2))
            pygame.draw.circle(self.board, color, center, max(1, radius), width=3)

        if snap.pending_spawn is not None and snap.spawn_countdown > 0:
            rect = self._cell_rect(snap.pending_spawn, snap.camera, inset=0)
            if rect:
                pulse = 0.3 + 0.3 * math.sin(pygame.time.get_ticks() * 0.01)
                tint = pygame.Color(PALETTE["spawn"])
                tint.a = int(255 * pulse)
                pygame.draw.rect(self.board, tint, rect)
                label = self.font.render(str(snap.spawn_countdown), True, PALETTE["spawn"])
                self.board.blit(label, label.get_rect(center=rect.center))

        for cell in snap.markers:
            sx, sy = self._to_screen(cell.x, cell.y, snap.camera)
            cx, cy = sx + CELL_SIZE / 2, sy + CELL_SIZE / 2
            size = 8
            pygame.draw.line(self.board, PALETTE["marker"], (cx - size, cy - size), (cx + size, cy + size), 3)
            pygame.draw.line(self.board, PALETTE["marker"], (cx + size, cy - size), (cx - size, cy + size), 3)

    def _draw_minimap(self, snap: Snapshot) -> None:
        minimap = pygame.Surface((MINIMAP_SIZE, MINIMAP_SIZE), pygame.SRCALPHA)
        minimap.fill((0, 0, 0, 200))
        scale = MINIMAP_SIZE / (MINIMAP_RANGE * 2)
        center = MINIMAP_SIZE / 2
        head = snap.player[0]

        def plot(cell: Cell, color: pygame.Color, size: int) -> None:
            dx, dy = cell.x - head.x, cell.y - head.y
            if abs(dx) < MINIMAP_RANGE and abs(dy) < MINIMAP_RANGE:
                x = center + dx * scale
                y = center + dy * scale
                minimap.fill(color, (x - size / 2, y - size / 2, size, size))

        for food in snap.foods:
            plot(food, PALETTE["food"], 2)
        for body in snap.enemies:
            plot(body[0], PALETTE["projectile"], 4)
        plot(head, PALETTE["snake_head"], 4)
        end = (center + snap.direction.x * 10, center + snap.direction.y * 10)
        pygame.draw.line(minimap, PALETTE["snake_head"], (center, center), end, 2)
        self.board.blit(minimap, (VIEWPORT[0] - MINIMAP_SIZE - 8, VIEWPORT[1] - MINIMAP_SIZE - 8))

    # --- HUD & overlays -------------------------------------------------

    def _draw_hud(self, snap: Snapshot, high_score: int, period_ms: int) -> None:
        self.surface.fill(PALETTE["hud"], (0, 0, VIEWPORT[0], HUD_HEIGHT))
        self._text(f"Score {snap.score}", PALETTE["text"], (10, 6))
        self._text(f"Best {high_score}", PALETTE["text"], (10, 30))
        self._text(f"{period_ms}ms", PALETTE["text"], (VIEWPORT[0] - 80, 6))
        x = 170
        for ability in snap.abilities:
            if not ability.available:
                continue
            rect = self._text(ability.label, ability.color, (x, 6))
            if ability.timer:
                self._text(ability.timer, ability.color, (x, 30))
            x = rect.right + 30
        if snap.variant != "classic":
            head = snap.player[0]
            self._text(f"({head.x}, {head.y})", PALETTE["text"], (x, 6))

    def _draw_overlay(self, lines: list[str]) -> None:
        overlay = pygame.Surface(VIEWPORT, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        self.board.blit(overlay, (0, 0))
        total = len(lines) * (self.font.get_linesize() + 6)
        y = VIEWPORT[1] // 2 - total // 2
        for line in lines:
            label = self.font.render(line, True, PALETTE["text"])
            self.board.blit(label, label.get_rect(midtop=(VIEWPORT[0] // 2, y)))
            y += self.font.get_linesize() + 6

    def _draw_inventory(self, snap: Snapshot, cursor: int) -> None:
        row_h = self.font.get_linesize() + 4
        height = row_h * (len(snap.kinds) + 1) + 12
        panel = pygame.Surface((220, min(height, VIEWPORT[1] - 20)), pygame.SRCALPHA)
        panel.fill(PALETTE["panel"])
        title = self.font.render("Segments", True, PALETTE["text"])
        panel.blit(title, (10, 6))
        for idx, kind in enumerate(snap.kinds):
            y = 6 + row_h * (idx + 1)
            if idx == cursor:
                pygame.draw.rect(panel, PALETTE["cursor"], (4, y - 2, 212, row_h), width=1)
            swatch = pygame.Rect(10, y + 2, row_h - 8, row_h - 8)
            pygame.draw.rect(panel, KIND_COLORS[kind], swatch)
            suffix = " (locked)" if kind is SegmentKind.HEAD else ""
            label = self.font.render(f"{idx}: {kind.name}{suffix}", True, PALETTE["text"])
            panel.blit(label, (swatch.right + 8, y))
        self.board.blit(panel, (10, 10))

    # --- Frame ---------------------------------------------------------

    def draw(
        self,
        snap: Snapshot,
        *,
        high_score: int,
        period_ms: int,
        inventory_cursor: int | None = None,
    ) -> None:
        self._draw_grid(snap)
        if snap.variant == "classic":
            border = pygame.Rect(0, 0, GRID_SIZE * CELL_SIZE, GRID_SIZE * CELL_SIZE)
            pygame.draw.rect(self.board, PALETTE["grid"], border, width=2)
        self._draw_foods(snap)
        self._draw_enemies(snap)
        self._draw_player(snap)
        self._draw_effects(snap)
        if snap.variant != "classic":
            self._draw_minimap(snap)
        if inventory_cursor is not None:
            self._draw_inventory(snap, inventory_cursor)
        if snap.state == GAME_OVER:
            self._draw_overlay(
                ["Game Over!", f"Score: {snap.score}", "SPACE or R to play again"]
            )
        self.surface.blit(self.board, (0, HUD_HEIGHT))
        self._draw_hud(snap, high_score, period_ms)
