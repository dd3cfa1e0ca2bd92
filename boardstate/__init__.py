"""Board game state machines behind a uniform action-id interface."""

from . import core, env, features, games, play
from .core import (
    CHANCE_PLAYER,
    TERMINAL_PLAYER,
    Board,
    BoardStateError,
    ConfigurationError,
    Game,
    IllegalActionError,
    InvalidStateError,
    State,
    UndoError,
)
from .env import BoardGameEnv
from .features import (
    build_aux_vector,
    build_observation,
    legal_action_mask,
    state_to_numpy,
    state_to_torch,
)
from .games import (
    CheckersGame,
    KalahGame,
    TwentyFortyEightGame,
    load_game,
    load_game_from_file,
    registered_games,
)
from .play import (
    MatchResult,
    RandomPolicy,
    Trajectory,
    evaluate_policies,
    play_game,
    replay_actions,
)

__all__ = [
    "core",
    "env",
    "features",
    "games",
    "play",
    "CHANCE_PLAYER",
    "TERMINAL_PLAYER",
    "Board",
    "BoardStateError",
    "ConfigurationError",
    "Game",
    "IllegalActionError",
    "InvalidStateError",
    "State",
    "UndoError",
    "BoardGameEnv",
    "build_aux_vector",
    "build_observation",
    "legal_action_mask",
    "state_to_numpy",
    "state_to_torch",
    "CheckersGame",
    "KalahGame",
    "TwentyFortyEightGame",
    "load_game",
    "load_game_from_file",
    "registered_games",
    "MatchResult",
    "RandomPolicy",
    "Trajectory",
    "evaluate_policies",
    "play_game",
    "replay_actions",
]
