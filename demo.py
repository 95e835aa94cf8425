#!/usr/bin/env python3
"""Watch a random player play Minesweeper."""
import time
import os

import numpy as np

from src.minesweeper.config import GameConfig
from src.minesweeper.environment import MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, size: int = 1, mines: int = 10):
    """Run demo games with visualization."""
    config = GameConfig.from_inputs(size, mines)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng()

    print(f"Board: {config.rows}x{config.cols} with {config.num_mines} mines")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, _ = env.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            # Reveal actions only
            mask = env.get_action_mask()[: config.rows * config.cols]
            action = int(rng.choice(np.flatnonzero(mask)))
            row, col = divmod(action, config.cols)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done and info.get("game_state") == "WIN":
                wins += 1

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=1, help="Board size multiplier (1, 2 or 4)")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, size=args.size, mines=args.mines)
