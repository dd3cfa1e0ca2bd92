from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .errors import UndoError


@dataclass(frozen=True)
class TurnRecord:
    """Minimal information needed to undo one applied action.

    Games subclass this with whatever the board mutation destroyed (captured
    piece type, pre-promotion piece type, swept seeds, ...).
    """

    action: int
    player: int


class TurnHistory:
    """Append-only stack of turn records; only the top record can be undone."""

    __slots__ = ("_records",)

    def __init__(self, records: Optional[List[TurnRecord]] = None) -> None:
        self._records: List[TurnRecord] = list(records) if records else []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TurnRecord]:
        return iter(self._records)

    def push(self, record: TurnRecord) -> None:
        self._records.append(record)

    def peek(self) -> TurnRecord:
        if not self._records:
            raise UndoError("Turn history is empty.")
        return self._records[-1]

    def pop(self) -> TurnRecord:
        if not self._records:
            raise UndoError("Turn history is empty.")
        return self._records.pop()

    def actions(self) -> List[int]:
        return [record.action for record in self._records]

    def copy(self) -> "TurnHistory":
        # Records are immutable.
        return TurnHistory(self._records)
