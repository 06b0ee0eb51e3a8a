"""
Monte Carlo mine probability estimation.

Samples random mine layouts for the unknown cells of a clue grid,
keeps the layouts that agree with every clue, and reports how often
each cell held a mine. Independent of the constraint engine, it is
used to cross-check its deductions.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from game import NoAcceptedSamples, ParseError, VisibleGrid


logger = logging.getLogger(__name__)

UNKNOWN_GLYPH = "#"
MINE_GLYPH = "*"

# Encoding of the parsed clue array
UNKNOWN = -1
KNOWN_MINE = 9

# Sampling streams per estimate; fixed so results do not depend on `workers`
DEFAULT_SHARDS = 8


# ============================================================================
# Clue Grid Parsing
# ============================================================================

def parse_clue_grid(text: str, unknown: str = UNKNOWN_GLYPH) -> np.ndarray:
    """
    Parse a textual clue grid.

    Digits are clue counts, `unknown` marks unknown cells and ``*``
    marks a known mine. Leading/trailing blank lines and whitespace
    around rows are ignored.

    Returns:
        int8 array indexed [row, col]: 0-8 for clues, -1 unknown, 9 mine.

    Raises:
        ParseError: On an unexpected character, ragged rows or no rows.
    """
    rows = [line.strip() for line in text.strip().splitlines()]
    if not rows or not rows[0]:
        raise ParseError("Clue grid is empty")

    width = len(rows[0])
    grid = np.empty((len(rows), width), dtype=np.int8)
    for row_index, line in enumerate(rows):
        if len(line) != width:
            raise ParseError(
                f"Row {row_index} has {len(line)} cells, expected {width}"
            )
        for col_index, char in enumerate(line):
            if char == unknown:
                grid[row_index, col_index] = UNKNOWN
            elif char == MINE_GLYPH:
                grid[row_index, col_index] = KNOWN_MINE
            elif char in "012345678":
                grid[row_index, col_index] = int(char)
            else:
                raise ParseError(
                    f"Unexpected character {char!r} at ({col_index}, {row_index})"
                )
    return grid


def _neighbor_sums(layouts: np.ndarray) -> np.ndarray:
    """Mined-neighbour counts for a batch of layouts (batch, rows, cols)."""
    _, height, width = layouts.shape
    padded = np.pad(layouts.astype(np.int8), ((0, 0), (1, 1), (1, 1)))
    sums = np.zeros(layouts.shape, dtype=np.int8)
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            sums += padded[
                :,
                1 + delta_row:1 + delta_row + height,
                1 + delta_col:1 + delta_col + width,
            ]
    return sums


# ============================================================================
# Estimator
# ============================================================================

@dataclass
class MonteCarloResult:
    """
    Outcome of an estimation run.

    Attributes:
        probabilities: float array [row, col]; clue cells 0, known mines 1.
        accepted: Number of sampled layouts consistent with every clue.
        iterations: Number of layouts actually sampled.
    """

    probabilities: np.ndarray
    accepted: int
    iterations: int

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.iterations if self.iterations else 0.0


class MonteCarloEstimator:
    """
    Rejection-sampling estimator.

    Iterations are split into shards, each with its own generator spawned
    from one seed, so a fixed seed gives the same result regardless of
    how the shards are scheduled over worker threads.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        workers: int = 1,
        batch_size: int = 1024,
        shards: Optional[int] = None,
    ) -> None:
        """
        Args:
            seed: Seed for reproducible estimates.
            workers: Number of worker threads.
            batch_size: Layouts sampled per vectorised batch.
            shards: Independent sampling streams (default: `DEFAULT_SHARDS`).
        """
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.seed = seed
        self.workers = workers
        self.batch_size = batch_size
        self.shards = shards or DEFAULT_SHARDS

    def estimate(
        self,
        assumed_density: float,
        grid: Union[str, VisibleGrid],
        iterations: int,
        cancel: Optional[threading.Event] = None,
    ) -> MonteCarloResult:
        """
        Estimate the mine probability of every cell.

        Args:
            assumed_density: Probability each unknown cell is sampled as a mine.
            grid: Clue text (``#`` unknown) or a visible grid snapshot.
            iterations: Total layouts to sample.
            cancel: Set to stop sampling early; partial results are kept.

        Raises:
            ParseError: If the clue text is malformed.
            NoAcceptedSamples: If no sampled layout matched the clues.
        """
        if not 0.0 <= assumed_density <= 1.0:
            raise ValueError("Assumed density must be within [0, 1]")
        if iterations < 1:
            raise ValueError("iterations must be at least 1")
        if isinstance(grid, VisibleGrid):
            grid = grid.to_clue_text()
        clues = parse_clue_grid(grid)

        streams = np.random.SeedSequence(self.seed).spawn(self.shards)
        quotas = self._split(iterations, self.shards)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            partials = list(executor.map(
                lambda args: self._run_shard(assumed_density, clues, *args, cancel),
                zip(streams, quotas),
            ))

        mine_totals = sum(partial[0] for partial in partials)
        accepted = sum(partial[1] for partial in partials)
        sampled = sum(partial[2] for partial in partials)
        logger.debug(
            "Monte Carlo accepted %d of %d sampled layouts", accepted, sampled
        )
        if accepted == 0:
            raise NoAcceptedSamples(
                f"No layout out of {sampled} matched the clues; "
                "increase iterations or adjust the assumed density"
            )

        probabilities = mine_totals / accepted
        probabilities[clues == KNOWN_MINE] = 1.0
        return MonteCarloResult(probabilities, accepted, sampled)

    @staticmethod
    def _split(iterations: int, shards: int) -> List[int]:
        base, extra = divmod(iterations, shards)
        return [base + (1 if index < extra else 0) for index in range(shards)]

    def _run_shard(
        self,
        assumed_density: float,
        clues: np.ndarray,
        seed_sequence: np.random.SeedSequence,
        quota: int,
        cancel: Optional[threading.Event],
    ) -> Tuple[np.ndarray, int, int]:
        """Sample `quota` layouts; return (mine counts, accepted, sampled)."""
        rng = np.random.default_rng(seed_sequence)
        unknown = clues == UNKNOWN
        known_mines = clues == KNOWN_MINE
        clue_mask = (clues >= 0) & (clues <= 8)

        mine_totals = np.zeros(clues.shape, dtype=np.float64)
        accepted = 0
        sampled = 0
        while sampled < quota:
            if cancel is not None and cancel.is_set():
                break
            batch = min(self.batch_size, quota - sampled)
            draws = rng.random((batch,) + clues.shape) < assumed_density
            layouts = (draws & unknown) | known_mines
            sums = _neighbor_sums(layouts)
            consistent = np.all(
                (sums == clues) | ~clue_mask, axis=(1, 2)
            )
            kept = layouts[consistent] & unknown
            mine_totals += kept.sum(axis=0)
            accepted += int(consistent.sum())
            sampled += batch
        return mine_totals, accepted, sampled
