"""
Planner-driven agent for Minesweeper.

Clicks cells the suggestion planner proves safe, and falls back to the
planner's least risky suggestion when no certain move exists.
"""
from typing import Optional

import numpy as np

from game.board import RandomSource, make_rng
from inference import (
    ASSUMED_BOMB_DENSITY,
    ConstraintProbabilityEngine,
    Plan,
    SuggestionPlanner,
)

from .base_agent import BaseAgent


class PlannerAgent(BaseAgent):
    """
    Agent built on `SuggestionPlanner`.

    Strategy:
        1. Rebuild the visible grid from the observation
        2. Run the planner to its fixpoint
        3. Click a known-safe cell if any, else a suggested one
        4. Fall back to a random valid cell if the plan offers nothing

    Attributes:
        certain_moves: Moves taken on known-safe cells.
        guesses: Moves taken on suggested (uncertain) cells.
        last_plan: Plan behind the most recent move.
    """

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        assumed_bomb_density: float = ASSUMED_BOMB_DENSITY,
        seed: RandomSource = None,
    ) -> None:
        super().__init__(board_height, board_width)
        self.planner = SuggestionPlanner(
            ConstraintProbabilityEngine(assumed_bomb_density)
        )
        self.rng = make_rng(seed)
        self.certain_moves = 0
        self.guesses = 0
        self.last_plan: Optional[Plan] = None

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select the planner's next move.

        Returns:
            Action index of the chosen cell.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        plan = self.planner.plan(self.observation_to_grid(observation))
        self.last_plan = plan

        move = self.planner.next_move(plan, self.rng)
        if move is not None:
            action = self.position_to_action(*move)
            if valid_actions[action]:
                if plan.known_safe:
                    self.certain_moves += 1
                else:
                    self.guesses += 1
                return action

        candidates = np.flatnonzero(valid_actions)
        if candidates.size == 0:
            return 0
        self.guesses += 1
        return int(self.rng.choice(candidates))

    def reset(self) -> None:
        """Reset per-game state; move counters accumulate across games."""
        self.last_plan = None

    @property
    def certainty_rate(self) -> float:
        """Share of moves that were proven safe."""
        total = self.certain_moves + self.guesses
        return self.certain_moves / total if total else 0.0
