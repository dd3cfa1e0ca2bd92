#!/usr/bin/env python3
"""Play random games of a configured board game and print a JSON summary."""

import argparse
import json
import logging
from typing import List, Optional

import numpy as np

from boardstate import RandomPolicy, evaluate_policies, load_game, load_game_from_file


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/checkers.yaml")
    parser.add_argument("--game", type=str, help="Registered game name; overrides --config")
    parser.add_argument("--episodes", type=int, default=20)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    game = load_game(args.game) if args.game else load_game_from_file(args.config)
    seeds = np.random.SeedSequence(args.seed).spawn(game.num_players)
    policies = [RandomPolicy(np.random.default_rng(seed)) for seed in seeds]
    result = evaluate_policies(game, policies, episodes=args.episodes, seed=args.seed)

    output = {
        "game": game.name,
        "params": game.config.as_dict(),
        "games": result.games_played,
        "wins": result.wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "mean_returns": result.mean_returns,
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
