from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

CellArray = NDArray[np.int64]


class Board:
    """Flat row-major grid of integer cell values.

    Values are either a small closed set of cell states (checkers) or
    non-negative counts (kalah seeds, 2048 tiles). The board does no rule
    validation beyond bounds.
    """

    __slots__ = ("rows", "columns", "cells")

    def __init__(self, rows: int, columns: int, cells: Iterable[int] | None = None) -> None:
        self.rows = rows
        self.columns = columns
        if cells is None:
            self.cells: CellArray = np.zeros(rows * columns, dtype=np.int64)
        else:
            self.cells = np.array(list(cells), dtype=np.int64)
            if self.cells.shape != (rows * columns,):
                raise ValueError(
                    f"Board expects {rows * columns} cells, got {self.cells.shape[0]}."
                )

    def __len__(self) -> int:
        return self.rows * self.columns

    def __iter__(self) -> Iterator[int]:
        return (int(value) for value in self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.columns == other.columns
            and bool(np.array_equal(self.cells, other.cells))
        )

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, columns={self.columns}, cells={self.to_list()})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def index(self, row: int, col: int) -> int:
        return row * self.columns + col

    def position(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.columns)

    def get(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is off the board.")
        return int(self.cells[row * self.columns + col])

    def set(self, row: int, col: int, value: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is off the board.")
        self.cells[row * self.columns + col] = value

    def at(self, index: int) -> int:
        return int(self.cells[index])

    def set_at(self, index: int, value: int) -> None:
        self.cells[index] = value

    def fill(self, values: Sequence[int]) -> None:
        if len(values) != len(self):
            raise ValueError(f"Board expects {len(self)} cells, got {len(values)}.")
        self.cells[:] = values

    def as_grid(self) -> CellArray:
        """Return a (rows, columns) copy of the cells."""
        return self.cells.reshape(self.rows, self.columns).copy()

    def to_list(self) -> list[int]:
        return [int(value) for value in self.cells]

    def count(self, value: int) -> int:
        return int(np.count_nonzero(self.cells == value))

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.rows = self.rows
        clone.columns = self.columns
        clone.cells = self.cells.copy()
        return clone
