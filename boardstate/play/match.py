from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from boardstate.core import Game, InvalidStateError, State

from .policies import Policy, sample_chance_action, select_action

logger = logging.getLogger(__name__)


@dataclass
class Trajectory:
    actions: List[int]
    returns: List[float]
    final_state: State

    def __len__(self) -> int:
        return len(self.actions)


@dataclass
class MatchResult:
    games_played: int
    wins: List[int]
    draws: int
    average_length: float
    mean_returns: List[float] = field(default_factory=list)

    def winrate(self, player: int) -> float:
        return self.wins[player] / max(1, self.games_played)


def play_game(
    game: Game,
    policies: Sequence[Policy],
    *,
    rng: Optional[np.random.Generator] = None,
    initial_state: Optional[State] = None,
) -> Trajectory:
    """Play one game to the end, sampling chance nodes from ``chance_outcomes()``."""
    if len(policies) != game.num_players:
        raise ValueError(f"Expected {game.num_players} policies, got {len(policies)}.")
    rng = rng or np.random.default_rng()
    state = initial_state.clone() if initial_state is not None else game.new_initial_state()

    while not state.is_terminal():
        if state.move_number() >= game.max_game_length:
            raise InvalidStateError(
                "Game exceeded its maximum length.", max_game_length=game.max_game_length
            )
        if state.is_chance_node():
            action = sample_chance_action(state, rng)
        else:
            action = select_action(policies[state.current_player], state, rng)
        state.apply_action(action)

    return Trajectory(actions=state.history(), returns=state.returns(), final_state=state)


def replay_actions(
    game: Game, actions: Sequence[int], *, initial_state: Optional[State] = None
) -> State:
    """Rebuild a state by applying stored action ids from the initial state."""
    state = initial_state.clone() if initial_state is not None else game.new_initial_state()
    for action in actions:
        state.apply_action(int(action))
    return state


def evaluate_policies(
    game: Game,
    policies: Sequence[Policy],
    *,
    episodes: int,
    seed: Optional[int] = None,
) -> MatchResult:
    rng = np.random.default_rng(seed)
    wins = [0] * game.num_players
    draws = 0
    total_length = 0
    return_sums = np.zeros(game.num_players, dtype=np.float64)

    for _ in range(episodes):
        trajectory = play_game(game, policies, rng=rng)
        total_length += len(trajectory)
        returns = np.asarray(trajectory.returns, dtype=np.float64)
        return_sums += returns
        if game.num_players > 1:
            best = np.flatnonzero(returns == returns.max())
            if len(best) == 1:
                wins[int(best[0])] += 1
            else:
                draws += 1

    result = MatchResult(
        games_played=episodes,
        wins=wins,
        draws=draws,
        average_length=total_length / max(1, episodes),
        mean_returns=(return_sums / max(1, episodes)).tolist(),
    )
    logger.info(
        "Played %d %s games: wins=%s draws=%d avg_length=%.1f",
        episodes,
        game.name,
        result.wins,
        result.draws,
        result.average_length,
    )
    return result
