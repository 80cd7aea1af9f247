from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, FallingBlockGame, GravityTicker
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
}


def new_session(seed: Optional[int], gravity_ms: int) -> tuple[FallingBlockGame, GravityTicker]:
    game = FallingBlockGame(seed=seed)
    game.generate_piece()
    return game, GravityTicker(game, interval_ms=gravity_ms)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity_ms", type=int, default=1000)
    p.add_argument("--cell_size", type=int, default=28)
    return p


def run(seed: Optional[int] = None, gravity_ms: int = 1000, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=cell_size)
        game, ticker = new_session(seed, gravity_ms)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks - Human Play")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game, ticker = new_session(seed, gravity_ms)
                    elif not game.game_over:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            ticker.update(pygame.time.get_ticks())
            renderer.draw(screen, game)
            clock.tick(60)
        ticker.cancel()
        print(f"Final score: {game.score}")
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    run(seed=args.seed, gravity_ms=args.gravity_ms, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
