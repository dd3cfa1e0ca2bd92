"""2048: a one-player tile sliding game with random tile placements.

The chance player places two tiles to start and one tile after every player
move: a 2 with probability 0.9 or a 4 with probability 0.1, on a uniformly
chosen empty cell. Sliding merges equal neighbours once per move and adds the
merged value to the score.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Set, Tuple

import numpy as np

from boardstate.core import (
    CHANCE_PLAYER,
    ActionsAndProbs,
    Board,
    ChanceMove,
    ChanceMoveCodec,
    ConfigurationError,
    Game,
    GameConfig,
    PlayerMove,
    PlayerMoveCodec,
    State,
    TurnRecord,
    UndoError,
    check_int_range,
)

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 4
DEFAULT_COLUMNS = 4
DEFAULT_MAX_TILE = 2048
INITIAL_TILES = 2
CHANCE_TILES: Tuple[int, ...] = (2, 4)
CHANCE_PROBABILITIES: Tuple[float, ...] = (0.9, 0.1)


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


VECTORS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}

Position = Tuple[int, int]


@dataclass(frozen=True)
class TwentyFortyEightConfig(GameConfig):
    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    max_tile: int = DEFAULT_MAX_TILE

    def validate(self) -> None:
        check_int_range("rows", self.rows, 2, 8)
        check_int_range("columns", self.columns, 2, 8)
        check_int_range("max_tile", self.max_tile, 8, 2**17)
        if self.max_tile & (self.max_tile - 1):
            raise ConfigurationError("Parameter 'max_tile' must be a power of two.", value=self.max_tile)


@dataclass(frozen=True)
class TileTurn(TurnRecord):
    # Board before a player move; empty for chance placements.
    cells: Tuple[int, ...]
    score: int


class TwentyFortyEightState(State):
    def __init__(self, game: "TwentyFortyEightGame") -> None:
        config = game.config
        super().__init__(game, Board(config.rows, config.columns), current_player=CHANCE_PLAYER)
        self.codec = game.codec
        self.chance_codec = game.chance_codec
        self.max_tile = config.max_tile
        self._score = 0

    # ------------------------------------------------------------------
    @property
    def score(self) -> int:
        return self._score

    def within_bounds(self, row: int, col: int) -> bool:
        return self._board.in_bounds(row, col)

    def cell_available(self, row: int, col: int) -> bool:
        return self._board.in_bounds(row, col) and self._board.get(row, col) == 0

    def available_cell_count(self) -> int:
        return self._board.count(0)

    def build_traversals(self, direction: int) -> Tuple[List[int], List[int]]:
        """Row and column visiting order so the cells nearest the wall go first."""
        rows = list(range(self._board.rows))
        columns = list(range(self._board.columns))
        if direction == Direction.DOWN:
            rows.reverse()
        if direction == Direction.RIGHT:
            columns.reverse()
        return rows, columns

    def find_farthest_position(self, row: int, col: int, direction: int) -> Tuple[Position, Position]:
        """Return the farthest empty cell reachable and the cell just past it."""
        dr, dc = VECTORS[Direction(direction)]
        previous = (row, col)
        current = (row + dr, col + dc)
        while self.cell_available(*current):
            previous = current
            current = (current[0] + dr, current[1] + dc)
        return previous, current

    def tile_matches_available(self) -> bool:
        board = self._board
        for row in range(board.rows):
            for col in range(board.columns):
                value = board.get(row, col)
                if value == 0:
                    continue
                for dr, dc in ((0, 1), (1, 0)):
                    if board.in_bounds(row + dr, col + dc) and board.get(row + dr, col + dc) == value:
                        return True
        return False

    def is_terminal(self) -> bool:
        if int(self._board.cells.max()) >= self.max_tile:
            return True
        if self._current_player == CHANCE_PLAYER:
            return False
        return self.available_cell_count() == 0 and not self.tile_matches_available()

    def action_to_string(self, player: int, action: int) -> str:
        if player == CHANCE_PLAYER:
            move = self.chance_codec.decode(action)
            return f"[{move.value}] placed at ({move.row}, {move.column})"
        return Direction(self.codec.decode(action).direction).name.capitalize()

    def __str__(self) -> str:
        width = max(len(str(value)) for value in self._board)
        lines = []
        for row in range(self._board.rows):
            lines.append(
                " ".join(str(self._board.get(row, col)).rjust(width) for col in range(self._board.columns))
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    def _chance_outcomes(self) -> ActionsAndProbs:
        board = self._board
        empty = [index for index in range(len(board)) if board.at(index) == 0]
        outcomes: ActionsAndProbs = []
        for value, probability in zip(CHANCE_TILES, CHANCE_PROBABILITIES):
            for index in empty:
                row, col = board.position(index)
                action = self.chance_codec.encode(ChanceMove(row, col, value))
                outcomes.append((action, probability / len(empty)))
        return outcomes

    def _legal_player_actions(self) -> List[int]:
        return [
            self.codec.encode(PlayerMove(0, 0, direction))
            for direction in Direction
            if self._can_slide(direction)
        ]

    def _do_apply_action(self, action: int) -> TileTurn:
        if self._current_player == CHANCE_PLAYER:
            move = self.chance_codec.decode(action)
            self._board.set(move.row, move.column, move.value)
            if len(self._history) + 1 >= INITIAL_TILES:
                self._current_player = 0
            return TileTurn(action=action, player=CHANCE_PLAYER, cells=(), score=self._score)

        record = TileTurn(action=action, player=0, cells=tuple(self._board), score=self._score)
        direction = Direction(self.codec.decode(action).direction)
        self._score += self._slide(direction)
        self._current_player = CHANCE_PLAYER
        return record

    def _undo(self, record: TurnRecord) -> None:
        if not isinstance(record, TileTurn):
            raise UndoError("Record does not belong to a 2048 game.", record=record)
        if record.player == CHANCE_PLAYER:
            move = self.chance_codec.decode(record.action)
            self._board.set(move.row, move.column, 0)
        else:
            self._board.fill(record.cells)
        self._score = record.score
        self._current_player = record.player

    def _returns(self) -> List[float]:
        return [float(self._score)]

    def _observation_planes(self, player: int) -> np.ndarray:
        grid = self._board.as_grid()
        exponents = np.zeros_like(grid)
        occupied = grid > 0
        exponents[occupied] = np.log2(grid[occupied]).astype(np.int64)
        planes = np.arange(self.game.observation_shape[0]).reshape(-1, 1, 1)
        return (exponents[np.newaxis, :, :] == planes).astype(np.float32)

    # ------------------------------------------------------------------
    def _can_slide(self, direction: Direction) -> bool:
        board = self._board
        dr, dc = VECTORS[direction]
        for row in range(board.rows):
            for col in range(board.columns):
                value = board.get(row, col)
                if value == 0 or not board.in_bounds(row + dr, col + dc):
                    continue
                neighbour = board.get(row + dr, col + dc)
                if neighbour == 0 or neighbour == value:
                    return True
        return False

    def _slide(self, direction: Direction) -> int:
        board = self._board
        merged: Set[Position] = set()
        gained = 0
        rows, columns = self.build_traversals(direction)
        for row in rows:
            for col in columns:
                value = board.get(row, col)
                if value == 0:
                    continue
                farthest, following = self.find_farthest_position(row, col, direction)
                if (
                    board.in_bounds(*following)
                    and following not in merged
                    and board.get(*following) == value
                ):
                    board.set(*following, value * 2)
                    board.set(row, col, 0)
                    merged.add(following)
                    gained += value * 2
                elif farthest != (row, col):
                    board.set(*farthest, value)
                    board.set(row, col, 0)
        return gained


class TwentyFortyEightGame(Game):
    name = "2048"
    config_class = TwentyFortyEightConfig
    config: TwentyFortyEightConfig

    def __init__(self, config: Optional[TwentyFortyEightConfig] = None, **params) -> None:
        super().__init__(config, **params)
        self.codec = PlayerMoveCodec(1, 1, len(Direction))
        self.chance_codec = ChanceMoveCodec(self.config.rows, self.config.columns, CHANCE_TILES)

    @property
    def num_players(self) -> int:
        return 1

    @property
    def min_utility(self) -> float:
        return 0.0

    @property
    def max_utility(self) -> float:
        cells = self.config.rows * self.config.columns
        return float(cells * self.config.max_tile * math.log2(self.config.max_tile))

    @property
    def utility_sum(self) -> Optional[float]:
        return None

    @property
    def max_chance_outcomes(self) -> int:
        return self.chance_codec.size

    @property
    def num_distinct_actions(self) -> int:
        return self.codec.size

    @property
    def observation_shape(self) -> Tuple[int, int, int]:
        planes = int(math.log2(self.config.max_tile)) + 1
        return (planes, self.config.rows, self.config.columns)

    @property
    def max_game_length(self) -> int:
        # Every placement adds at least 2 to a tile sum bounded by cells * max_tile.
        return self.config.rows * self.config.columns * self.config.max_tile

    def new_initial_state(self) -> TwentyFortyEightState:
        return TwentyFortyEightState(self)
