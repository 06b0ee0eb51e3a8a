"""
Minesweeper agents module.

Provides agents for playing Minesweeper:
- RandomAgent: Baseline random selection
- PlannerAgent: Constraint deductions with least-risk suggestions
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .planner_agent import PlannerAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "PlannerAgent",
]
