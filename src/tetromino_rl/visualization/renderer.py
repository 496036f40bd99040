from __future__ import annotations

from typing import Optional, Tuple

import pygame

from tetromino_rl.game.engine import SessionState, Status, ghost_row
from tetromino_rl.game.pieces import TetrominoType, shape_for


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (240, 240, 0),  # O
        5: (0, 240, 0),    # S
        6: (160, 0, 240),  # T
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    """Draws the visible rows, ghost, preview queue, hold slot and HUD."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, state: SessionState) -> Tuple[int, int]:
        cfg = state.config
        width = self.margin * 3 + (cfg.width + self.panel_cells) * self.cell_size
        height = self.margin * 2 + cfg.visible_rows * self.cell_size
        return width, height

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cell_rect(self, x: int, y: int, ox: int, oy: int) -> pygame.Rect:
        return pygame.Rect(ox + x * self.cell_size, oy + y * self.cell_size,
                           self.cell_size - 1, self.cell_size - 1)

    def _draw_board(self, screen: pygame.Surface, state: SessionState) -> None:
        cfg = state.config
        hidden = cfg.height - cfg.visible_rows
        board = state.board
        for vy in range(cfg.visible_rows):
            y = vy + hidden
            for x in range(cfg.width):
                color = _color_for_value(int(board.cells[y, x]))
                if board.clearing[y, x]:
                    color = (250, 250, 250)
                pygame.draw.rect(screen, color, self._cell_rect(x, vy, self.margin, self.margin))

        if state.status not in (Status.PLAYING, Status.PAUSED) or state.pending_clear:
            return
        piece = state.current
        color = _color_for_value(int(piece.kind))
        gy = ghost_row(state)
        for x, y in piece.cells_at(origin_y=gy):
            if y >= hidden:
                pygame.draw.rect(screen, color, self._cell_rect(x, y - hidden, self.margin, self.margin), 2)
        for x, y in piece.cells_at():
            if y >= hidden:
                pygame.draw.rect(screen, color, self._cell_rect(x, y - hidden, self.margin, self.margin))

    def _draw_mini(self, screen: pygame.Surface, kind: TetrominoType, ox: int, oy: int, scale: float = 0.6) -> None:
        size = max(4, int(self.cell_size * scale))
        shape = shape_for(kind, 0)
        for py in range(shape.shape[0]):
            for px in range(shape.shape[1]):
                if shape[py, px]:
                    rect = pygame.Rect(ox + px * size, oy + py * size, size - 1, size - 1)
                    pygame.draw.rect(screen, _color_for_value(int(kind)), rect)

    def _draw_panel(self, screen: pygame.Surface, state: SessionState, best: int) -> None:
        font = self._font_obj()
        x0 = self.margin * 2 + state.config.width * self.cell_size
        y = self.margin
        lines = [
            f"Score {state.score}",
            f"Best  {max(best, state.score)}",
            f"Level {state.level}",
            f"Lines {state.lines}",
        ]
        for text in lines:
            screen.blit(font.render(text, True, (230, 230, 230)), (x0, y))
            y += 22

        y += 10
        screen.blit(font.render("Hold", True, (180, 180, 190)), (x0, y))
        y += 22
        if state.hold is not None:
            self._draw_mini(screen, state.hold, x0, y)
        y += int(self.cell_size * 0.6) * 3

        screen.blit(font.render("Next", True, (180, 180, 190)), (x0, y))
        y += 22
        for kind in state.preview:
            self._draw_mini(screen, kind, x0, y)
            y += int(self.cell_size * 0.6) * 3

    def _draw_banner(self, screen: pygame.Surface, text: str) -> None:
        font = self._font_obj()
        surf = font.render(text, True, (255, 255, 255))
        rect = surf.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(surf, rect)

    def draw(self, screen: pygame.Surface, state: SessionState, best: int = 0) -> None:
        screen.fill((10, 10, 14))
        self._draw_board(screen, state)
        self._draw_panel(screen, state, best)
        if state.status is Status.IDLE:
            self._draw_banner(screen, "Press SPACE to start")
        elif state.status is Status.PAUSED:
            self._draw_banner(screen, "Paused - P to resume")
        elif state.status is Status.GAME_OVER:
            self._draw_banner(screen, "Game Over - SPACE to restart")
        pygame.display.flip()
