from __future__ import annotations

from typing import Tuple

import pygame

from falling_blocks.game import FallingBlockGame


EMPTY_COLOR = (20, 20, 26)
FILLED_COLOR = (70, 200, 120)


class Renderer:
    """Draws a game by polling `cell_at`, `score` and `game_over` each frame."""

    def __init__(self, cell_size: int = 30, margin: int = 20, header: int = 30) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.header = header
        self._font = None

    def window_size(self, game: FallingBlockGame) -> Tuple[int, int]:
        width = game.board.width * self.cell_size + self.margin * 2
        height = game.board.height * self.cell_size + self.margin * 2 + self.header
        return width, height

    def _grid_surface(self, game: FallingBlockGame) -> pygame.Surface:
        h, w = game.board.height, game.board.width
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for row in range(h):
            for col in range(w):
                color = FILLED_COLOR if game.cell_at(row, col) else EMPTY_COLOR
                rect = pygame.Rect(
                    col * self.cell_size,
                    row * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def draw(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))
        score = self._font.render(f"Score: {game.score}", True, (230, 230, 230))
        screen.blit(score, (self.margin, self.margin // 2))
        screen.blit(self._grid_surface(game), (self.margin, self.margin + self.header))
        if game.game_over:
            text = self._font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
