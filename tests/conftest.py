from __future__ import annotations

from typing import Iterable, List

import pytest

from falling_blocks.game import FallingBlockGame, TetrominoType


class SequenceRandom:
    """Deterministic random source that replays a fixed list of indices."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        assert 0 <= value < stop
        return value


def index_of(kind: TetrominoType) -> int:
    return int(kind) - 1


def game_with(*kinds: TetrominoType) -> FallingBlockGame:
    return FallingBlockGame(rng=SequenceRandom(index_of(k) for k in kinds))


@pytest.fixture
def o_game() -> FallingBlockGame:
    game = game_with(TetrominoType.O)
    game.generate_piece()
    return game
