"""Game-independent state machine pieces: board, codecs, history, base classes."""

from .board import Board
from .codec import ChanceMove, ChanceMoveCodec, MoveKind, PlayerMove, PlayerMoveCodec
from .config import GameConfig, check_int_range, read_config_file
from .errors import (
    BoardStateError,
    ConfigurationError,
    IllegalActionError,
    InvalidStateError,
    UndoError,
)
from .game import Game
from .history import TurnHistory, TurnRecord
from .state import (
    CHANCE_PLAYER,
    INVALID_PLAYER,
    TERMINAL_PLAYER,
    ActionsAndProbs,
    State,
    opponent,
)

__all__ = [
    "Board",
    "ChanceMove",
    "ChanceMoveCodec",
    "MoveKind",
    "PlayerMove",
    "PlayerMoveCodec",
    "GameConfig",
    "check_int_range",
    "read_config_file",
    "BoardStateError",
    "ConfigurationError",
    "IllegalActionError",
    "InvalidStateError",
    "UndoError",
    "Game",
    "TurnHistory",
    "TurnRecord",
    "CHANCE_PLAYER",
    "INVALID_PLAYER",
    "TERMINAL_PLAYER",
    "ActionsAndProbs",
    "State",
    "opponent",
]
