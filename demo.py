#!/usr/bin/env python3
"""Watch the planner agent play Minesweeper."""
import time
import os

from game import BoardConfig, MinesweeperEnv
from agents import PlannerAgent


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, size: int = 9, density: float = 0.15):
    """Run demo games with visualization."""
    config = BoardConfig(width=size, height=size, density=density)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = PlannerAgent(size, size)

    print(f"Board: {size}x{size} at {density:.0%} density")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, info = env.reset(seed=game)
        agent.reset()

        done = info["game_state"] != "PLAYING"
        step = 0

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            col, row = agent.action_to_position(action)

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step + 1} ===")
            print(f"Wins so far: {wins}")
            print(f"Next move: ({col}, {row})\n")
            print(agent.last_plan.grid.render())
            time.sleep(delay)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

        clear_screen()
        print(f"=== Game {game + 1}/{games} finished after {step} steps ===\n")
        print(env.render())
        if info["game_state"] == "WON":
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit mine) ***")

        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")
    print(f"Certain moves: {agent.certain_moves}, guesses: {agent.guesses}")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--density", type=float, default=0.15, help="Mine density")
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, size=args.size, density=args.density)
