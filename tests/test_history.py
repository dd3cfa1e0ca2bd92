import pytest

from boardstate.core import TurnHistory, TurnRecord, UndoError


def test_push_peek_pop() -> None:
    history = TurnHistory()
    history.push(TurnRecord(action=3, player=0))
    history.push(TurnRecord(action=5, player=1))

    assert len(history) == 2
    assert history.actions() == [3, 5]
    assert history.peek() == TurnRecord(action=5, player=1)
    assert history.pop().action == 5
    assert len(history) == 1


def test_empty_history_raises() -> None:
    history = TurnHistory()
    with pytest.raises(UndoError):
        history.pop()
    with pytest.raises(UndoError):
        history.peek()


def test_copy_is_independent() -> None:
    history = TurnHistory()
    history.push(TurnRecord(action=1, player=0))
    clone = history.copy()
    clone.push(TurnRecord(action=2, player=1))

    assert history.actions() == [1]
    assert clone.actions() == [1, 2]
