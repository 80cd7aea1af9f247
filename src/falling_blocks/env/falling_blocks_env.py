from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlockGame


class FallingBlocksEnv(gym.Env):
    """Gymnasium wrapper around `FallingBlockGame`.

    One env step applies the chosen action and then one gravity tick, so the
    piece always makes progress. A soft drop already is the gravity tick and is
    not doubled.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 terminal_penalty: float = -10.0,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.render_mode = render_mode
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "lines": 10.0,           # reward per line cleared
            "holes": 0.5,            # penalize holes created
            "height": 0.1,           # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        self.game = FallingBlockGame()
        h, w = self.game.board.height, self.game.board.width
        self.observation_space = spaces.Box(low=-1, high=1, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_spawned": self.game.pieces_spawned,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Each episode is a fresh session; np_random feeds the piece choice.
        self.game = FallingBlockGame(rng=_NumpyRandomSource(self.np_random))
        self.game.generate_piece()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        board = self.game.board
        holes_before = board.count_holes()
        height_before = board.get_max_height()
        score_before = self.game.score

        self.game.step(action)
        if action != Action.SOFT_DROP:
            self.game.move_down()

        board = self.game.board
        lines = self.game.score - score_before
        reward_components: Dict[str, float] = {
            "lines": self.reward_weights["lines"] * float(lines),
            "holes": -self.reward_weights["holes"] * float(
                max(0, board.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(
                max(0, board.get_max_height() - height_before)),
        }

        terminated = bool(self.game.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        self._steps += 1
        truncated = not terminated and self._steps >= self.max_episode_steps

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["lines_cleared"] = lines
        return self.game.get_state(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        palette = {0: (30, 30, 36), 1: (70, 200, 120), -1: (200, 180, 60)}
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = palette[int(state[y, x])]
        return img

    def close(self) -> None:
        pass


class _NumpyRandomSource:
    def __init__(self, generator: np.random.Generator) -> None:
        self.generator = generator

    def randrange(self, stop: int) -> int:
        return int(self.generator.integers(stop))
