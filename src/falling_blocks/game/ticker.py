from __future__ import annotations

from typing import Optional

from .core import FallingBlockGame


class GravityTicker:
    """Calls `move_down` on a fixed interval against a caller-supplied clock.

    The ticker owns no thread or timer: the event loop passes the current time
    in milliseconds to `update`. It stops for good once cancelled or once the
    game is over.
    """

    def __init__(self, game: FallingBlockGame, interval_ms: int = 1000) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.game = game
        self.interval_ms = int(interval_ms)
        self._last_tick: Optional[int] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def update(self, now_ms: int) -> bool:
        if self._cancelled:
            return False
        if self.game.game_over:
            self.cancel()
            return False
        if self._last_tick is None:
            self._last_tick = now_ms
            return False
        if now_ms - self._last_tick < self.interval_ms:
            return False
        self._last_tick = now_ms
        self.game.move_down()
        if self.game.game_over:
            self.cancel()
        return True
