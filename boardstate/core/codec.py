from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

from .errors import IllegalActionError


class MoveKind(IntEnum):
    NORMAL = 0
    CAPTURE = 1


@dataclass(frozen=True)
class PlayerMove:
    row: int
    column: int
    direction: int
    kind: MoveKind = MoveKind.NORMAL

    @property
    def is_capture(self) -> bool:
        return self.kind == MoveKind.CAPTURE


@dataclass(frozen=True)
class ChanceMove:
    row: int
    column: int
    value: int


class PlayerMoveCodec:
    """Bijection between player action ids and ``PlayerMove`` tuples.

    Ids are laid out in one contiguous block per move kind, so the kind is read
    off the id range before the origin and direction are decoded:
    ``id = kind_block * block_size + (row * columns + column) * directions + direction``.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        num_directions: int,
        kinds: Sequence[MoveKind] = (MoveKind.NORMAL,),
    ) -> None:
        self.rows = rows
        self.columns = columns
        self.num_directions = num_directions
        self.kinds: Tuple[MoveKind, ...] = tuple(kinds)
        self.block_size = rows * columns * num_directions

    @property
    def size(self) -> int:
        return self.block_size * len(self.kinds)

    def encode(self, move: PlayerMove) -> int:
        if not (0 <= move.row < self.rows and 0 <= move.column < self.columns):
            raise IllegalActionError(
                "Move origin is off the board.", row=move.row, column=move.column
            )
        if not 0 <= move.direction < self.num_directions:
            raise IllegalActionError("Move direction out of range.", direction=move.direction)
        if move.kind not in self.kinds:
            raise IllegalActionError("Move kind not supported by this game.", kind=move.kind)
        block = self.kinds.index(move.kind)
        base = (move.row * self.columns + move.column) * self.num_directions + move.direction
        return block * self.block_size + base

    def decode(self, action: int) -> PlayerMove:
        if not 0 <= action < self.size:
            raise IllegalActionError("Player action id out of range.", action=action)
        block, offset = divmod(action, self.block_size)
        cell, direction = divmod(offset, self.num_directions)
        row, column = divmod(cell, self.columns)
        return PlayerMove(row, column, direction, self.kinds[block])


class ChanceMoveCodec:
    """Bijection between chance action ids and ``ChanceMove`` placements.

    One block of ``rows * columns`` ids per placeable value:
    ``id = value_index * cells + row * columns + column``.
    """

    def __init__(self, rows: int, columns: int, values: Sequence[int]) -> None:
        self.rows = rows
        self.columns = columns
        self.values: Tuple[int, ...] = tuple(values)
        self.block_size = rows * columns

    @property
    def size(self) -> int:
        return self.block_size * len(self.values)

    def encode(self, move: ChanceMove) -> int:
        if not (0 <= move.row < self.rows and 0 <= move.column < self.columns):
            raise IllegalActionError(
                "Placement cell is off the board.", row=move.row, column=move.column
            )
        if move.value not in self.values:
            raise IllegalActionError("Value cannot be placed by chance.", value=move.value)
        block = self.values.index(move.value)
        return block * self.block_size + move.row * self.columns + move.column

    def decode(self, action: int) -> ChanceMove:
        if not 0 <= action < self.size:
            raise IllegalActionError("Chance action id out of range.", action=action)
        block, cell = divmod(action, self.block_size)
        row, column = divmod(cell, self.columns)
        return ChanceMove(row, column, self.values[block])
