"""Checkers on a configurable rectangular board.

Rules as implemented here:
- Capturing is mandatory. A capture that leaves another capture available from
  the landing cell must be continued by the same piece in the same turn, unless
  the capture crowned the piece, which ends the turn.
- Men step diagonally forward; kings step diagonally in all four directions.
  Both capture by jumping an adjacent opposing piece onto the empty cell behind.
- The game is drawn after a configurable number of consecutive moves without a
  capture (40 by default). A player with no legal move on their turn loses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from boardstate.core import (
    INVALID_PLAYER,
    Board,
    ConfigurationError,
    Game,
    GameConfig,
    IllegalActionError,
    MoveKind,
    PlayerMove,
    PlayerMoveCodec,
    State,
    TurnRecord,
    UndoError,
    check_int_range,
    opponent,
)

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 8
DEFAULT_COLUMNS = 8
MIN_DIMENSION = 4
MAX_DIMENSION = 16
MAX_MOVES_WITHOUT_CAPTURE = 40
# Arbitrarily chosen to keep the game finite.
MAX_GAME_LENGTH = 1000

# Up-left, up-right, down-right, down-left.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, 1), (1, -1))
MOVE_KINDS = (MoveKind.NORMAL, MoveKind.CAPTURE)


class CellState(IntEnum):
    EMPTY = 0
    WHITE = 1
    BLACK = 2
    WHITE_KING = 3
    BLACK_KING = 4


class PieceType(IntEnum):
    MAN = 0
    KING = 1


NUM_CELL_STATES = len(CellState)

CELL_SYMBOLS: Dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.WHITE: "o",
    CellState.BLACK: "+",
    CellState.WHITE_KING: "8",
    CellState.BLACK_KING: "*",
}
SYMBOL_TO_CELL: Dict[str, CellState] = {symbol: state for state, symbol in CELL_SYMBOLS.items()}

_OWNERS: Dict[int, int] = {
    CellState.WHITE: 0,
    CellState.WHITE_KING: 0,
    CellState.BLACK: 1,
    CellState.BLACK_KING: 1,
}
_PIECE_DIRECTIONS: Dict[int, Tuple[int, ...]] = {
    CellState.WHITE: (0, 1),
    CellState.BLACK: (2, 3),
    CellState.WHITE_KING: (0, 1, 2, 3),
    CellState.BLACK_KING: (0, 1, 2, 3),
}


def owner(cell: int) -> Optional[int]:
    return _OWNERS.get(cell)


def piece_type(cell: int) -> PieceType:
    if cell in (CellState.WHITE_KING, CellState.BLACK_KING):
        return PieceType.KING
    return PieceType.MAN


def piece_state(player: int, piece: PieceType) -> CellState:
    if player == 0:
        return CellState.WHITE_KING if piece == PieceType.KING else CellState.WHITE
    return CellState.BLACK_KING if piece == PieceType.KING else CellState.BLACK


@dataclass(frozen=True)
class CheckersConfig(GameConfig):
    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    max_moves_without_capture: int = MAX_MOVES_WITHOUT_CAPTURE

    def validate(self) -> None:
        check_int_range("rows", self.rows, MIN_DIMENSION, MAX_DIMENSION)
        check_int_range("columns", self.columns, MIN_DIMENSION, MAX_DIMENSION)
        check_int_range(
            "max_moves_without_capture", self.max_moves_without_capture, 1, MAX_GAME_LENGTH
        )


@dataclass(frozen=True)
class CheckersTurn(TurnRecord):
    captured_piece: Optional[PieceType]
    mover_piece: PieceType
    moves_without_capture: int
    pending_capture: Optional[int]


def initial_board(rows: int, columns: int) -> Board:
    board = Board(rows, columns)
    for row in range(rows):
        for col in range(columns):
            if (row + col) % 2 == 0:
                continue
            if row < (rows - 2) // 2:
                board.set(row, col, CellState.BLACK)
            elif row >= (rows + 2) // 2:
                board.set(row, col, CellState.WHITE)
    return board


def parse_board_string(board_string: str, rows: int, columns: int) -> Board:
    """Parse one symbol per cell in row-major order (``.o+8*``)."""
    if len(board_string) != rows * columns:
        raise ConfigurationError(
            "Custom board has the wrong number of cells.",
            expected=rows * columns,
            got=len(board_string),
        )
    cells = []
    for symbol in board_string:
        if symbol not in SYMBOL_TO_CELL:
            raise ConfigurationError("Unknown symbol in custom board.", symbol=symbol)
        cells.append(int(SYMBOL_TO_CELL[symbol]))
    return Board(rows, columns, cells)


def generate_moves(
    board: Board, player: int, origin: Optional[int] = None
) -> Tuple[List[PlayerMove], List[PlayerMove]]:
    """Return ``(captures, steps)`` for ``player``, optionally from one cell only."""
    captures: List[PlayerMove] = []
    steps: List[PlayerMove] = []
    indices = range(len(board)) if origin is None else (origin,)
    for index in indices:
        cell = board.at(index)
        if owner(cell) != player:
            continue
        row, col = board.position(index)
        for direction in _PIECE_DIRECTIONS[cell]:
            dr, dc = DIRECTIONS[direction]
            next_row, next_col = row + dr, col + dc
            if not board.in_bounds(next_row, next_col):
                continue
            target = board.get(next_row, next_col)
            if target == CellState.EMPTY:
                steps.append(PlayerMove(row, col, direction, MoveKind.NORMAL))
            elif owner(target) == opponent(player):
                land_row, land_col = next_row + dr, next_col + dc
                if board.in_bounds(land_row, land_col) and board.get(land_row, land_col) == CellState.EMPTY:
                    captures.append(PlayerMove(row, col, direction, MoveKind.CAPTURE))
    return captures, steps


class CheckersState(State):
    def __init__(self, game: "CheckersGame", board_string: Optional[str] = None) -> None:
        config = game.config
        super().__init__(game, initial_board(config.rows, config.columns), current_player=0)
        self.codec = game.codec
        self._max_moves_without_capture = config.max_moves_without_capture
        self._moves_without_capture = 0
        # Cell index of the piece that must keep capturing this turn.
        self._pending_capture: Optional[int] = None
        self._terminal = False
        self._winner = INVALID_PLAYER
        if board_string is not None:
            self.set_custom_board(board_string)

    # ------------------------------------------------------------------
    @property
    def moves_without_capture(self) -> int:
        return self._moves_without_capture

    @property
    def pending_capture(self) -> Optional[int]:
        return self._pending_capture

    @property
    def winner(self) -> int:
        """Winning player, or ``INVALID_PLAYER`` while undecided or drawn."""
        return self._winner

    def in_bounds(self, row: int, col: int) -> bool:
        return self._board.in_bounds(row, col)

    def set_custom_board(self, board_string: str) -> None:
        board = parse_board_string(board_string, self._board.rows, self._board.columns)
        self._board.fill(board.to_list())
        self._pending_capture = None
        self._evaluate_terminal()

    def crown_state_if_last_row_reached(self, row: int, state: int) -> CellState:
        if state == CellState.WHITE and row == 0:
            return CellState.WHITE_KING
        if state == CellState.BLACK and row == self._board.rows - 1:
            return CellState.BLACK_KING
        return CellState(state)

    def is_terminal(self) -> bool:
        return self._terminal

    def action_to_string(self, player: int, action: int) -> str:
        move = self.codec.decode(action)
        steps = 2 if move.is_capture else 1
        dr, dc = DIRECTIONS[move.direction]
        origin = self._square_name(move.row, move.column)
        target = self._square_name(move.row + steps * dr, move.column + steps * dc)
        return f"{origin}{target}"

    def __str__(self) -> str:
        rows, columns = self._board.rows, self._board.columns
        width = len(str(rows))
        lines = []
        for row in range(rows):
            symbols = "".join(
                CELL_SYMBOLS[CellState(self._board.get(row, col))] for col in range(columns)
            )
            lines.append(f"{str(rows - row).rjust(width)}{symbols}")
        letters = "".join(chr(ord("a") + col) for col in range(columns))
        lines.append(" " * width + letters)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    def _legal_player_actions(self) -> List[int]:
        player = self._current_player
        captures, steps = generate_moves(self._board, player, self._pending_capture)
        if self._pending_capture is not None:
            moves = captures
        else:
            moves = captures if captures else steps
        return sorted(self.codec.encode(move) for move in moves)

    def _do_apply_action(self, action: int) -> CheckersTurn:
        move = self.codec.decode(action)
        player = self._current_player
        board = self._board
        cell = board.get(move.row, move.column)
        if owner(cell) != player:
            raise IllegalActionError("No piece of the current player at the origin.", action=action)

        dr, dc = DIRECTIONS[move.direction]
        captured: Optional[PieceType] = None
        if move.is_capture:
            jumped_row, jumped_col = move.row + dr, move.column + dc
            captured = piece_type(board.get(jumped_row, jumped_col))
            board.set(jumped_row, jumped_col, CellState.EMPTY)
            dest_row, dest_col = move.row + 2 * dr, move.column + 2 * dc
        else:
            dest_row, dest_col = move.row + dr, move.column + dc

        record = CheckersTurn(
            action=action,
            player=player,
            captured_piece=captured,
            mover_piece=piece_type(cell),
            moves_without_capture=self._moves_without_capture,
            pending_capture=self._pending_capture,
        )

        landed = self.crown_state_if_last_row_reached(dest_row, cell)
        board.set(dest_row, dest_col, landed)
        board.set(move.row, move.column, CellState.EMPTY)

        self._pending_capture = None
        if move.is_capture:
            self._moves_without_capture = 0
            dest = board.index(dest_row, dest_col)
            promoted = landed != cell
            if not promoted and generate_moves(board, player, dest)[0]:
                self._pending_capture = dest
        else:
            self._moves_without_capture += 1

        if self._pending_capture is None:
            self._current_player = opponent(player)
        self._evaluate_terminal()
        return record

    def _undo(self, record: TurnRecord) -> None:
        if not isinstance(record, CheckersTurn):
            raise UndoError("Record does not belong to a checkers game.", record=record)
        move = self.codec.decode(record.action)
        dr, dc = DIRECTIONS[move.direction]
        steps = 2 if move.is_capture else 1
        board = self._board
        board.set(move.row + steps * dr, move.column + steps * dc, CellState.EMPTY)
        board.set(move.row, move.column, piece_state(record.player, record.mover_piece))
        if record.captured_piece is not None:
            board.set(
                move.row + dr,
                move.column + dc,
                piece_state(opponent(record.player), record.captured_piece),
            )
        self._current_player = record.player
        self._pending_capture = record.pending_capture
        self._moves_without_capture = record.moves_without_capture
        self._terminal = False
        self._winner = INVALID_PLAYER

    def _returns(self) -> List[float]:
        if self._winner == INVALID_PLAYER:
            return [0.0, 0.0]
        return [1.0, -1.0] if self._winner == 0 else [-1.0, 1.0]

    def _observation_planes(self, player: int) -> np.ndarray:
        grid = self._board.as_grid()
        states = np.arange(NUM_CELL_STATES).reshape(-1, 1, 1)
        return (grid[np.newaxis, :, :] == states).astype(np.float32)

    # ------------------------------------------------------------------
    def _evaluate_terminal(self) -> None:
        if self._moves_without_capture >= self._max_moves_without_capture:
            self._terminal = True
            self._winner = INVALID_PLAYER
        elif not self._legal_player_actions():
            self._terminal = True
            self._winner = opponent(self._current_player)
        else:
            self._terminal = False
            self._winner = INVALID_PLAYER
        if self._terminal:
            logger.debug("Checkers game over, winner=%s", self._winner)

    def _square_name(self, row: int, col: int) -> str:
        return f"{chr(ord('a') + col)}{self._board.rows - row}"


class CheckersGame(Game):
    name = "checkers"
    config_class = CheckersConfig
    config: CheckersConfig

    def __init__(self, config: Optional[CheckersConfig] = None, **params) -> None:
        super().__init__(config, **params)
        self.codec = PlayerMoveCodec(
            self.config.rows, self.config.columns, len(DIRECTIONS), MOVE_KINDS
        )

    @property
    def num_distinct_actions(self) -> int:
        return self.codec.size

    @property
    def observation_shape(self) -> Tuple[int, int, int]:
        return (NUM_CELL_STATES, self.config.rows, self.config.columns)

    @property
    def max_game_length(self) -> int:
        # Each capture can be preceded by a full run of non-capturing moves.
        cells = self.config.rows * self.config.columns
        return max(MAX_GAME_LENGTH, (cells + 1) * self.config.max_moves_without_capture)

    def new_initial_state(self, board_string: Optional[str] = None) -> CheckersState:
        return CheckersState(self, board_string)
