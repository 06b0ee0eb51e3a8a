"""
Unit tests for the Monte Carlo estimator.

Tests clue-grid parsing, convergence on symmetric positions, seeding,
cancellation and the empty-result condition.
"""
import threading

import pytest
import numpy as np
from game import NoAcceptedSamples, ParseError
from inference import MonteCarloEstimator, parse_clue_grid


class _CancelAfterChecks(threading.Event):
    """Event that sets itself once it has been polled `checks` times."""

    def __init__(self, checks: int) -> None:
        super().__init__()
        self.checks = checks

    def is_set(self) -> bool:
        if self.checks <= 0:
            self.set()
        self.checks -= 1
        return super().is_set()


# ============================================================================
# Parsing Tests
# ============================================================================

class TestParseClueGrid:
    """Test textual clue grid parsing."""

    def test_parses_digits_unknowns_and_mines(self) -> None:
        grid = parse_clue_grid("""
            #1*
            08#
        """)
        np.testing.assert_array_equal(grid, [[-1, 1, 9], [0, 8, -1]])

    def test_custom_unknown_sentinel(self) -> None:
        grid = parse_clue_grid("?2", unknown="?")
        np.testing.assert_array_equal(grid, [[-1, 2]])

    def test_unexpected_character_raises(self) -> None:
        with pytest.raises(ParseError, match="Unexpected character"):
            parse_clue_grid("#x#")

    def test_nine_is_not_a_clue(self) -> None:
        with pytest.raises(ParseError):
            parse_clue_grid("9#")

    def test_ragged_rows_raise(self) -> None:
        with pytest.raises(ParseError, match="expected 3"):
            parse_clue_grid("###\n##")

    def test_empty_text_raises(self) -> None:
        with pytest.raises(ParseError):
            parse_clue_grid("\n  \n")


# ============================================================================
# Estimation Tests
# ============================================================================

class TestEstimate:
    """Test probability estimates."""

    def test_five_of_eight_symmetry(self) -> None:
        """A lone 5 with 8 unknown neighbours converges to 5/8 each."""
        estimator = MonteCarloEstimator(seed=7, batch_size=4096)
        result = estimator.estimate(0.5, "###\n#5#\n###", 40000)

        neighbors = np.ones((3, 3), dtype=bool)
        neighbors[1, 1] = False
        np.testing.assert_allclose(
            result.probabilities[neighbors], 5 / 8, atol=0.03
        )
        assert result.probabilities[1, 1] == 0.0
        assert result.accepted > 0
        assert result.iterations == 40000

    def test_forced_mine_is_certain(self) -> None:
        result = MonteCarloEstimator(seed=1).estimate(0.5, "1#", 2000)
        np.testing.assert_array_equal(result.probabilities, [[0.0, 1.0]])

    def test_known_mine_satisfies_clue(self) -> None:
        result = MonteCarloEstimator(seed=1).estimate(0.5, "*1#", 2000)
        np.testing.assert_array_equal(result.probabilities, [[1.0, 0.0, 0.0]])

    def test_unconstrained_cells_follow_density(self) -> None:
        result = MonteCarloEstimator(seed=3).estimate(0.2, "####\n####", 20000)
        np.testing.assert_allclose(result.probabilities, 0.2, atol=0.02)
        assert result.accepted == 20000
        assert result.acceptance_rate == 1.0

    def test_accepts_visible_grid(self, make_grid) -> None:
        grid = make_grid("1F")
        result = MonteCarloEstimator(seed=2).estimate(0.5, grid, 1000)
        assert result.probabilities[0, 1] == 1.0

    def test_agrees_with_constraint_engine_on_certainties(
        self, engine, make_grid
    ) -> None:
        grid = make_grid("1.1..")
        sampled = MonteCarloEstimator(seed=5).estimate(0.3, grid, 5000)
        for (col, row), value in engine.probabilities(grid).items():
            if value in (0.0, 1.0):
                assert sampled.probabilities[row, col] == value


# ============================================================================
# Reproducibility and Concurrency Tests
# ============================================================================

class TestReproducibility:
    """Test seeding and sharding."""

    def test_same_seed_same_result(self) -> None:
        text = "###\n#3#\n###"
        first = MonteCarloEstimator(seed=11).estimate(0.4, text, 5000)
        second = MonteCarloEstimator(seed=11).estimate(0.4, text, 5000)
        np.testing.assert_array_equal(first.probabilities, second.probabilities)
        assert first.accepted == second.accepted

    def test_threaded_shards_are_reproducible(self) -> None:
        text = "####\n#2##\n####"
        runs = [
            MonteCarloEstimator(seed=4, workers=3, batch_size=256).estimate(
                0.3, text, 9000
            )
            for _ in range(2)
        ]
        np.testing.assert_array_equal(
            runs[0].probabilities, runs[1].probabilities
        )

    def test_worker_count_does_not_change_result(self) -> None:
        text = "####\n#2##\n####"
        single = MonteCarloEstimator(seed=4, workers=1).estimate(0.3, text, 9000)
        threaded = MonteCarloEstimator(seed=4, workers=4).estimate(0.3, text, 9000)
        np.testing.assert_array_equal(
            single.probabilities, threaded.probabilities
        )
        assert single.accepted == threaded.accepted

    def test_shards_split_all_iterations(self) -> None:
        result = MonteCarloEstimator(seed=0, workers=2, shards=3).estimate(
            0.5, "##", 1001
        )
        assert result.iterations == 1001


# ============================================================================
# Failure Tests
# ============================================================================

class TestFailures:
    """Test empty results and argument validation."""

    def test_impossible_clue_raises(self) -> None:
        """A lone 8 with no neighbours can never be satisfied."""
        with pytest.raises(NoAcceptedSamples):
            MonteCarloEstimator(seed=0).estimate(0.5, "8", 500)

    def test_cancelled_before_start_raises(self) -> None:
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(NoAcceptedSamples):
            MonteCarloEstimator(seed=0).estimate(0.5, "##", 500, cancel=cancel)

    def test_cancelled_mid_run_keeps_partial_result(self) -> None:
        """Cancelling after the first batch returns what was sampled so far."""
        cancel = _CancelAfterChecks(1)
        result = MonteCarloEstimator(seed=0, batch_size=100).estimate(
            0.2, "####\n####", 5000, cancel=cancel
        )
        assert result.iterations == 100
        assert result.iterations < 5000
        assert result.accepted == 100
        assert np.all(np.isfinite(result.probabilities))

    @pytest.mark.parametrize("density", [-0.1, 1.1])
    def test_bad_density_raises(self, density: float) -> None:
        with pytest.raises(ValueError):
            MonteCarloEstimator().estimate(density, "##", 10)

    def test_bad_iterations_raise(self) -> None:
        with pytest.raises(ValueError):
            MonteCarloEstimator().estimate(0.5, "##", 0)

    def test_bad_worker_count_raises(self) -> None:
        with pytest.raises(ValueError):
            MonteCarloEstimator(workers=0)
