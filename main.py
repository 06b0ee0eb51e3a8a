#!/usr/bin/env python3
"""
Minesweeper advisor - Main entry point.

Usage:
    python main.py play [--seed N] [--width W] [--height H] [--density D]
    python main.py evaluate [--agent {random,planner}] [--games N]
    python main.py compare [--games N]
    python main.py estimate FILE [--density D] [--iterations N]
"""
import argparse
import logging
import sys
from pathlib import Path

from game import (
    Board,
    BoardConfig,
    GameState,
    MinesweeperError,
    click,
    make_rng,
)
from agents import PlannerAgent, RandomAgent
from evaluation import Evaluator
from inference import MonteCarloEstimator, SuggestionPlanner, ConstraintProbabilityEngine


def board_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from command line options."""
    return BoardConfig(width=args.width, height=args.height, density=args.density)


def play(args: argparse.Namespace) -> None:
    """Let the planner play one game, printing every annotated board."""
    config = board_config(args)
    board = Board.from_config(config, args.seed)
    grid = board.initial_grid()
    planner = SuggestionPlanner(ConstraintProbabilityEngine(args.prior))
    rng = make_rng(args.seed)

    print(f"Board: {config.width}x{config.height} with {board.mine_count} mines")
    step = 0
    while board.game_state(grid) == GameState.PLAYING:
        plan = planner.plan(grid)
        move = planner.next_move(plan, rng)
        if move is None:
            break
        step += 1
        print(f"\n=== Step {step} | passes: {plan.passes} | open {move} ===")
        print(plan.grid.render())
        grid = click(board, grid, *move)

    print("\n=== Final board ===")
    print(grid.render())
    state = board.game_state(grid)
    print(f"\n*** {state.name} after {step} moves ***")


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    config = board_config(args)

    if args.agent == "random":
        agent = RandomAgent(config.height, config.width, seed=args.seed)
        name = "Random"
    else:
        agent = PlannerAgent(config.height, config.width, args.prior, seed=args.seed)
        name = "Planner"

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed or 0)
    print(f"\nEvaluating {name} over {args.games} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")
    if isinstance(agent, PlannerAgent):
        print(f"  Certain moves: {agent.certainty_rate:.1%}")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents on the same boards."""
    config = board_config(args)

    agents = {
        "Random": RandomAgent(config.height, config.width, seed=args.seed),
        "Planner": PlannerAgent(config.height, config.width, args.prior, seed=args.seed),
    }

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed or 0)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def estimate(args: argparse.Namespace) -> None:
    """Run the Monte Carlo estimator over a clue-grid file."""
    text = Path(args.file).read_text(encoding="utf-8")
    estimator = MonteCarloEstimator(seed=args.seed, workers=args.workers)
    result = estimator.estimate(args.density, text, args.iterations)

    print(
        f"Accepted {result.accepted} of {result.iterations} samples "
        f"({result.acceptance_rate:.2%})"
    )
    for row in result.probabilities:
        print(" ".join(f"{value:.2f}" for value in row))


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper advisor - deduce safe cells and suggest moves"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    board_options = argparse.ArgumentParser(add_help=False)
    board_options.add_argument("--width", type=int, default=9, help="Board width")
    board_options.add_argument("--height", type=int, default=9, help="Board height")
    board_options.add_argument(
        "--density", type=float, default=0.12, help="Mine density"
    )
    board_options.add_argument(
        "--prior", type=float, default=0.1,
        help="Assumed bomb density for unconstrained cells",
    )
    board_options.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers.add_parser(
        "play", parents=[board_options], help="Watch the planner play one game"
    )

    eval_parser = subparsers.add_parser(
        "evaluate", parents=[board_options], help="Evaluate an agent"
    )
    eval_parser.add_argument(
        "--agent",
        choices=["random", "planner"],
        default="planner",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    compare_parser = subparsers.add_parser(
        "compare", parents=[board_options], help="Compare all agents"
    )
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    estimate_parser = subparsers.add_parser(
        "estimate", help="Monte Carlo estimate over a clue-grid file"
    )
    estimate_parser.add_argument("file", help="Clue grid, '#' marks unknown cells")
    estimate_parser.add_argument(
        "--density", type=float, default=0.18, help="Assumed mine density"
    )
    estimate_parser.add_argument(
        "--iterations", type=int, default=10000, help="Layouts to sample"
    )
    estimate_parser.add_argument(
        "--workers", type=int, default=1, help="Sampling threads"
    )
    estimate_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    commands = {
        "play": play,
        "evaluate": evaluate,
        "compare": compare,
        "estimate": estimate,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return

    try:
        command(args)
    except (MinesweeperError, OSError, ValueError) as error:
        print(f"error: {error}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
