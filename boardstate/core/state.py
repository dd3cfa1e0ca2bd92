from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Tuple

import numpy as np

from .board import Board
from .errors import IllegalActionError, InvalidStateError, UndoError
from .history import TurnHistory, TurnRecord

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)

CHANCE_PLAYER = -1
INVALID_PLAYER = -3
TERMINAL_PLAYER = -4

ActionsAndProbs = List[Tuple[int, float]]


def opponent(player: int) -> int:
    return 1 - player


class State(ABC):
    """Mutable game state driven through integer action ids.

    Subclasses supply the rules through the ``_legal_player_actions``,
    ``_do_apply_action``, ``_undo`` and ``_returns`` hooks; this class owns
    the current player, the turn history and the precondition checks shared
    by every game.
    """

    def __init__(self, game: "Game", board: Board, current_player: int) -> None:
        self.game = game
        self._board = board
        self._current_player = current_player
        self._history = TurnHistory()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self._board

    @property
    def num_players(self) -> int:
        return self.game.num_players

    @property
    def current_player(self) -> int:
        return TERMINAL_PLAYER if self.is_terminal() else self._current_player

    def is_chance_node(self) -> bool:
        return self._current_player == CHANCE_PLAYER and not self.is_terminal()

    def legal_actions(self) -> List[int]:
        if self.is_terminal():
            return []
        if self._current_player == CHANCE_PLAYER:
            return [action for action, _ in self._chance_outcomes()]
        return self._legal_player_actions()

    def chance_outcomes(self) -> ActionsAndProbs:
        if not self.is_chance_node():
            raise InvalidStateError(
                "Chance outcomes requested at a non-chance node.",
                player=self.current_player,
            )
        return self._chance_outcomes()

    def apply_action(self, action: int) -> None:
        if self.is_terminal():
            raise InvalidStateError("Cannot apply action to a terminal state.", action=action)
        player = self._current_player
        if action not in self.legal_actions():
            raise IllegalActionError("Action is not legal.", action=action, player=player)
        record = self._do_apply_action(action)
        self._history.push(record)
        logger.debug("Player %d applied action %d (move %d)", player, action, len(self._history))

    def undo_action(self, player: int, action: int) -> None:
        record = self._history.peek()
        if record.player != player or record.action != action:
            raise UndoError(
                "Undo does not match the last applied action.",
                expected=(record.player, record.action),
                got=(player, action),
            )
        self._history.pop()
        self._undo(record)
        logger.debug("Player %d undid action %d", player, action)

    def history(self) -> List[int]:
        return self._history.actions()

    def move_number(self) -> int:
        return len(self._history)

    def returns(self) -> List[float]:
        if not self.is_terminal():
            raise InvalidStateError("Returns are only defined at terminal states.")
        return self._returns()

    def observation_tensor(self, player: int) -> np.ndarray:
        self._check_player(player)
        planes = self._observation_planes(player)
        return planes.astype(np.float32, copy=False)

    def observation_string(self, player: int) -> str:
        self._check_player(player)
        return str(self)

    def information_state_string(self, player: int) -> str:
        """Comma-separated action ids applied so far; every game here has perfect information."""
        self._check_player(player)
        return ", ".join(str(int(action)) for action in self._history.actions())

    def clone(self) -> "State":
        other = copy.copy(self)
        other._board = self._board.copy()
        other._history = self._history.copy()
        return other

    # ------------------------------------------------------------------
    # Game hooks
    # ------------------------------------------------------------------
    @abstractmethod
    def is_terminal(self) -> bool: ...

    @abstractmethod
    def action_to_string(self, player: int, action: int) -> str: ...

    @abstractmethod
    def __str__(self) -> str: ...

    @abstractmethod
    def _legal_player_actions(self) -> List[int]: ...

    @abstractmethod
    def _do_apply_action(self, action: int) -> TurnRecord:
        """Mutate the board and return the record that undoes the mutation."""

    @abstractmethod
    def _undo(self, record: TurnRecord) -> None: ...

    @abstractmethod
    def _returns(self) -> List[float]: ...

    @abstractmethod
    def _observation_planes(self, player: int) -> np.ndarray: ...

    def _chance_outcomes(self) -> ActionsAndProbs:
        raise InvalidStateError(f"{type(self).__name__} has no chance nodes.")

    def _check_player(self, player: int) -> None:
        if not 0 <= player < self.num_players:
            raise ValueError(f"Invalid player {player} for a {self.num_players}-player game.")
