"""Kalah, a two-row sowing game.

Cells are numbered counter-clockwise from player 1's store: player 1's store
``0``, player 0's houses ``1..h``, player 0's store ``h+1`` and player 1's
houses ``h+2..2h+1``. Action ids are house indices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from boardstate.core import (
    Board,
    ConfigurationError,
    Game,
    GameConfig,
    PlayerMove,
    PlayerMoveCodec,
    State,
    TurnRecord,
    UndoError,
    check_int_range,
    opponent,
)

logger = logging.getLogger(__name__)

DEFAULT_HOUSES = 6
DEFAULT_SEEDS = 4
MAX_GAME_LENGTH = 1000


@dataclass(frozen=True)
class KalahConfig(GameConfig):
    houses: int = DEFAULT_HOUSES
    seeds: int = DEFAULT_SEEDS

    def validate(self) -> None:
        check_int_range("houses", self.houses, 1, 12)
        check_int_range("seeds", self.seeds, 1, 24)


@dataclass(frozen=True)
class KalahTurn(TurnRecord):
    seeds: int
    captured: int
    # House contents (player 0's, then player 1's) before the final sweep.
    swept: Tuple[int, ...] = ()


class KalahState(State):
    def __init__(self, game: "KalahGame", board: Optional[Sequence[int]] = None) -> None:
        houses = game.config.houses
        initial = Board(1, 2 * houses + 2)
        super().__init__(game, initial, current_player=0)
        self.codec = game.codec
        self.houses = houses
        for player in (0, 1):
            for index in self.player_houses(player):
                initial.set_at(index, game.config.seeds)
        if board is not None:
            self.set_board(board)

    # ------------------------------------------------------------------
    def store(self, player: int) -> int:
        return self.houses + 1 if player == 0 else 0

    def player_houses(self, player: int) -> range:
        if player == 0:
            return range(1, self.houses + 1)
        return range(self.houses + 2, 2 * self.houses + 2)

    def opposite(self, index: int) -> int:
        return 2 * self.houses + 2 - index

    def board_at(self, index: int) -> int:
        return self._board.at(index)

    def set_board(self, values: Sequence[int]) -> None:
        if len(values) != len(self._board):
            raise ConfigurationError(
                "Custom board has the wrong number of cells.",
                expected=len(self._board),
                got=len(values),
            )
        if any(value < 0 for value in values):
            raise ConfigurationError("Seed counts must be non-negative.", board=list(values))
        self._board.fill(values)

    def is_terminal(self) -> bool:
        return self._side_empty(0) or self._side_empty(1)

    def action_to_string(self, player: int, action: int) -> str:
        return str(self.codec.decode(action).column)

    def __str__(self) -> str:
        top = "-".join(str(self._board.at(i)) for i in reversed(self.player_houses(1)))
        bottom = "-".join(str(self._board.at(i)) for i in self.player_houses(0))
        middle = (
            f"{self._board.at(self.store(1))}"
            f"{'-' * (2 * self.houses - 1)}"
            f"{self._board.at(self.store(0))}"
        )
        return "\n".join([f"-{top}-", middle, f"-{bottom}-"])

    # ------------------------------------------------------------------
    def _legal_player_actions(self) -> List[int]:
        board = self._board
        return [
            self.codec.encode(PlayerMove(0, house, 0))
            for house in self.player_houses(self._current_player)
            if board.at(house) > 0
        ]

    def _do_apply_action(self, action: int) -> KalahTurn:
        house = self.codec.decode(action).column
        player = self._current_player
        board = self._board

        seeds = board.at(house)
        board.set_at(house, 0)
        index = house
        for _ in range(seeds):
            index = self._next_cell(index, player)
            board.set_at(index, board.at(index) + 1)

        captured = 0
        opposite = self.opposite(index)
        if index in self.player_houses(player) and board.at(index) == 1 and board.at(opposite) > 0:
            captured = board.at(opposite)
            own_store = self.store(player)
            board.set_at(own_store, board.at(own_store) + captured + 1)
            board.set_at(index, 0)
            board.set_at(opposite, 0)

        # Ending in the own store grants another turn.
        if index != self.store(player):
            self._current_player = opponent(player)

        swept: Tuple[int, ...] = ()
        if self.is_terminal():
            swept = self._sweep()
            logger.debug("Kalah game over, stores=%s", (board.at(self.store(0)), board.at(self.store(1))))
        return KalahTurn(action=action, player=player, seeds=seeds, captured=captured, swept=swept)

    def _undo(self, record: TurnRecord) -> None:
        if not isinstance(record, KalahTurn):
            raise UndoError("Record does not belong to a kalah game.", record=record)
        board = self._board
        player = record.player
        house = self.codec.decode(record.action).column

        if record.swept:
            for side in (0, 1):
                indices = list(self.player_houses(side))
                offset = 0 if side == 0 else self.houses
                values = record.swept[offset:offset + self.houses]
                store = self.store(side)
                board.set_at(store, board.at(store) - sum(values))
                for index, value in zip(indices, values):
                    board.set_at(index, value)

        path = []
        index = house
        for _ in range(record.seeds):
            index = self._next_cell(index, player)
            path.append(index)

        if record.captured:
            landing = path[-1]
            own_store = self.store(player)
            board.set_at(own_store, board.at(own_store) - record.captured - 1)
            board.set_at(landing, 1)
            board.set_at(self.opposite(landing), record.captured)

        for index in path:
            board.set_at(index, board.at(index) - 1)
        board.set_at(house, record.seeds)
        self._current_player = player

    def _returns(self) -> List[float]:
        score_0 = self._score(0)
        score_1 = self._score(1)
        if score_0 > score_1:
            return [1.0, -1.0]
        if score_1 > score_0:
            return [-1.0, 1.0]
        return [0.0, 0.0]

    def _observation_planes(self, player: int) -> np.ndarray:
        return self._board.as_grid()[np.newaxis, :, :].astype(np.float32)

    # ------------------------------------------------------------------
    def _next_cell(self, index: int, player: int) -> int:
        size = len(self._board)
        index = (index + 1) % size
        if index == self.store(opponent(player)):
            index = (index + 1) % size
        return index

    def _side_empty(self, player: int) -> bool:
        return all(self._board.at(index) == 0 for index in self.player_houses(player))

    def _score(self, player: int) -> int:
        return self._board.at(self.store(player)) + sum(
            self._board.at(index) for index in self.player_houses(player)
        )

    def _sweep(self) -> Tuple[int, ...]:
        board = self._board
        swept = []
        for side in (0, 1):
            store = self.store(side)
            for index in self.player_houses(side):
                seeds = board.at(index)
                swept.append(seeds)
                board.set_at(store, board.at(store) + seeds)
                board.set_at(index, 0)
        return tuple(swept)


class KalahGame(Game):
    name = "kalah"
    config_class = KalahConfig
    config: KalahConfig

    def __init__(self, config: Optional[KalahConfig] = None, **params) -> None:
        super().__init__(config, **params)
        self.codec = PlayerMoveCodec(1, 2 * self.config.houses + 2, 1)

    @property
    def num_distinct_actions(self) -> int:
        return self.codec.size

    @property
    def observation_shape(self) -> Tuple[int, int, int]:
        return (1, 1, 2 * self.config.houses + 2)

    @property
    def max_game_length(self) -> int:
        return MAX_GAME_LENGTH

    def new_initial_state(self, board: Optional[Sequence[int]] = None) -> KalahState:
        return KalahState(self, board)
