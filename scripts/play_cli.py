#!/usr/bin/env python3
"""Play a registered game against a random policy in the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from boardstate import RandomPolicy, load_game, load_game_from_file, replay_actions
from boardstate.core import CHANCE_PLAYER, Game, State
from boardstate.play import sample_chance_action, select_action


def list_human_moves(state: State) -> List:
    player = state.current_player
    return [(action, state.action_to_string(player, action)) for action in state.legal_actions()]


def prompt_human_move(state: State) -> int:
    moves = list_human_moves(state)
    move_indices = {entry[0] for entry in moves}
    print("Legal moves:")
    for idx, label in moves:
        print(f"  {idx}: {label}")
    while True:
        raw = input("Action id to play (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if not raw.isdigit():
            print("Please enter a number.")
            continue
        idx = int(raw)
        if idx in move_indices:
            return idx
        print("Not a legal action id, try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    game = load_game(metadata.get("game", "checkers"), **metadata.get("params", {}))
    moves = data.get("moves", [])
    state = replay_actions(game, [entry["action_index"] for entry in moves])
    if verbose:
        for entry in moves:
            print(f"{entry.get('actor', 'unknown')} played {entry.get('label', entry['action_index'])}")
        print(state)
    summary = {
        "game": game.name,
        "moves": len(moves),
        "terminal": state.is_terminal(),
        "returns": state.returns() if state.is_terminal() else None,
        "board": state.board.as_grid().tolist(),
    }
    if verbose:
        print(f"Replay finished: {summary['returns']}")
    return summary


def play_interactive(game: Game, args: argparse.Namespace) -> None:
    rng = np.random.default_rng(args.seed)
    policy_ai = RandomPolicy(rng)
    state = game.new_initial_state()
    log_records: List[Dict] = []

    while not state.is_terminal():
        player = state.current_player
        if player == CHANCE_PLAYER:
            action_index = sample_chance_action(state, rng)
            actor = "chance"
        else:
            print("\nCurrent board:")
            print(state)
            print(f"To move: player {player}")
            if player == args.human_player:
                action_index = prompt_human_move(state)
                actor = "human"
            else:
                action_index = select_action(policy_ai, state, rng)
                actor = "ai"
                print(f"AI plays {state.action_to_string(player, action_index)}")

        log_records.append(
            {
                "move_index": state.move_number(),
                "actor": actor,
                "player": int(player),
                "action_index": int(action_index),
                "label": state.action_to_string(player, action_index),
            }
        )
        state.apply_action(action_index)

    print("\nFinal board:")
    print(state)
    returns = state.returns()
    print(f"Returns: {returns}")

    if args.log_file:
        metadata = {
            "game": game.name,
            "params": game.config.as_dict(),
            "human_player": args.human_player,
            "seed": args.seed,
            "returns": returns,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play a board game in the console against a random policy.")
    parser.add_argument("--game", default="checkers")
    parser.add_argument("--config", type=str, help="YAML config with game and params")
    parser.add_argument("--human-player", type=int, default=0)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    game = load_game_from_file(args.config) if args.config else load_game(args.game)
    play_interactive(game, args)


if __name__ == "__main__":
    main()
