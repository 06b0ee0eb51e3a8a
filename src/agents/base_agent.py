"""
Base agent interface for Minesweeper players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from game import VisibleGrid


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    Agents receive the environment observation (int8 array indexed
    [row, col]) and return a flat action index row * width + col.
    """

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (row * width + col).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (col, row) position."""
        return action % self.board_width, action // self.board_width

    def position_to_action(self, col: int, row: int) -> int:
        """Convert (col, row) position to flat action index."""
        return row * self.board_width + col

    def observation_to_grid(self, observation: np.ndarray) -> VisibleGrid:
        """Rebuild the visible grid an observation encodes."""
        return VisibleGrid.from_observation(observation)

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Every cell not yet opened (codes below zero) is clickable.
        """
        return observation.flatten() < 0

    def reset(self) -> None:
        """Reset agent state for new episode."""
