"""
Gymnasium environment wrapper for Minesweeper.

Lets agents play full games against a hidden board through a
standard step/reset interface.
"""
from typing import Any, Dict, List, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, GameState
from .cell import CellKind, OBS_EXPLODED, OBS_SUGGESTED
from .grid import VisibleGrid
from .reveal import revealed_region


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array indexed [row, col], see `VisibleCell.to_observation`.
        The environment itself only produces -1 (unrevealed), 0-8 and 9.

    Actions:
        Discrete action space of size width * height.
        Action i corresponds to cell (col, row) = (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already opened)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 at 12% density).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=OBS_SUGGESTED,
            high=OBS_EXPLODED,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self.board: Optional[Board] = None
        self.grid: Optional[VisibleGrid] = None
        self.history: List[VisibleGrid] = []
        self._steps = 0

    # ========================================================================
    # Gymnasium API
    # ========================================================================

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a freshly generated board.

        Args:
            seed: Random seed for reproducible boards.
            options: May contain ``board`` to play a prepared `Board`.

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)

        board = (options or {}).get("board")
        if board is None:
            board = Board.from_config(self.config, self.np_random)
        self.board = board
        self.grid = board.initial_grid()
        self.history = [self.grid]
        self._steps = 0

        return self.grid.to_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.board is None:
            raise RuntimeError("Call reset() before step()")

        col, row = self._action_to_position(int(action))
        self._steps += 1

        reward = self._apply_click(col, row)
        observation = self.grid.to_observation()
        terminated = self.game_state != GameState.PLAYING

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (col, row) position."""
        return action % self.board.width, action // self.board.width

    def _apply_click(self, col: int, row: int) -> float:
        """Reveal (col, row), record the snapshot and score the move."""
        opened = revealed_region(self.board, self.grid, col, row)
        if not opened:
            return -0.1

        self.grid = self.grid.replace(opened)
        self.history.append(self.grid)

        state = self.game_state
        if state == GameState.WON:
            return 10.0
        if state == GameState.LOST:
            return -10.0
        return 1.0

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        return self.board.game_state(self.grid)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.grid.count(CellKind.REVEALED),
            "total_safe": self.board.safe_cell_count,
            "game_state": self.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.grid is None:
            return None
        if self.render_mode == "ansi":
            return self.grid.render()
        if self.render_mode == "human":
            print(self.grid.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = cell not yet opened.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for col, row in self.grid.positions():
            if not self.grid.get(col, row).is_opened:
                mask[row * self.board.width + col] = True
        return mask
