"""
Evaluation module for Minesweeper agents.
"""
from .evaluator import Evaluator

__all__ = [
    "Evaluator",
]
