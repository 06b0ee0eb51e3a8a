"""
Random agent for Minesweeper.

Baseline that clicks any unopened cell.
"""
from typing import Optional

import numpy as np

from game.board import RandomSource, make_rng

from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Agent that picks uniformly among valid actions."""

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        seed: RandomSource = None,
    ) -> None:
        super().__init__(board_height, board_width)
        self.rng = make_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)
        candidates = np.flatnonzero(valid_actions)
        if candidates.size == 0:
            # Nothing clickable; the environment penalises the move
            return 0
        return int(self.rng.choice(candidates))
