"""Driver-side helpers: policies, random playouts and trajectory replay."""

from .match import MatchResult, Trajectory, evaluate_policies, play_game, replay_actions
from .policies import Policy, RandomPolicy, sample_chance_action, select_action

__all__ = [
    "MatchResult",
    "Trajectory",
    "evaluate_policies",
    "play_game",
    "replay_actions",
    "Policy",
    "RandomPolicy",
    "sample_chance_action",
    "select_action",
]
