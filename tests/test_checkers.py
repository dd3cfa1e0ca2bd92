import pytest

from boardstate.core import (
    INVALID_PLAYER,
    ConfigurationError,
    IllegalActionError,
    InvalidStateError,
    MoveKind,
    PlayerMove,
    TERMINAL_PLAYER,
    UndoError,
)
from boardstate.games import CheckersGame
from boardstate.games.checkers import CellState, generate_moves


def custom_state(rows, **params):
    game = CheckersGame(**params)
    return game, game.new_initial_state("".join(rows))


def capture_id(game, row, col, direction):
    return game.codec.encode(PlayerMove(row, col, direction, MoveKind.CAPTURE))


def test_initial_position() -> None:
    game = CheckersGame()
    state = game.new_initial_state()

    assert state.current_player == 0
    assert state.board.count(CellState.WHITE) == 12
    assert state.board.count(CellState.BLACK) == 12
    actions = state.legal_actions()
    assert len(actions) == 7
    assert all(action < game.codec.size // 2 for action in actions)

    lines = str(state).splitlines()
    assert lines[0] == "8.+.+.+.+"
    assert lines[5] == "3o.o.o.o."
    assert lines[-1] == " abcdefgh"


def test_action_string_uses_square_names() -> None:
    game = CheckersGame()
    state = game.new_initial_state()
    action = game.codec.encode(PlayerMove(5, 0, 1))

    assert action in state.legal_actions()
    assert state.action_to_string(0, action) == "a3b4"


def test_capture_is_mandatory() -> None:
    game, state = custom_state(
        [
            "........",
            "........",
            "........",
            "..+.....",
            ".o......",
            "........",
            "......o.",
            "........",
        ]
    )
    assert state.legal_actions() == [capture_id(game, 4, 1, 1)]


def test_capture_chain_continues_with_same_piece() -> None:
    game, state = custom_state(
        [
            "........",
            "........",
            "........",
            "....+...",
            "........",
            "..+...+.",
            ".o.....o",
            "........",
        ]
    )
    initial_text = str(state)
    first = capture_id(game, 6, 1, 1)
    other = capture_id(game, 6, 7, 0)
    assert state.legal_actions() == [first, other]

    state.apply_action(first)
    assert state.current_player == 0
    assert state.pending_capture == state.board.index(4, 3)
    second = capture_id(game, 4, 3, 1)
    assert state.legal_actions() == [second]

    state.apply_action(second)
    assert state.current_player == 1
    assert state.pending_capture is None
    assert state.moves_without_capture == 0
    assert state.board.get(2, 5) == CellState.WHITE
    assert state.board.get(3, 4) == CellState.EMPTY

    state.undo_action(0, second)
    assert state.current_player == 0
    assert state.pending_capture == state.board.index(4, 3)
    assert state.board.get(3, 4) == CellState.BLACK

    state.undo_action(0, first)
    assert str(state) == initial_text
    assert state.pending_capture is None
    assert state.legal_actions() == [first, other]


def test_promotion_ends_capture_chain() -> None:
    game, state = custom_state(
        [
            "........",
            "....+.+.",
            "...o....",
            "........",
            "........",
            "........",
            "........",
            "........",
        ]
    )
    action = capture_id(game, 2, 3, 1)
    assert state.legal_actions() == [action]

    state.apply_action(action)
    assert state.board.get(0, 5) == CellState.WHITE_KING
    # The new king could capture (1, 6) but the turn is over.
    assert state.current_player == 1
    assert state.pending_capture is None

    state.undo_action(0, action)
    assert state.board.get(2, 3) == CellState.WHITE
    assert state.board.get(1, 4) == CellState.BLACK
    assert state.board.get(0, 5) == CellState.EMPTY


def test_king_moves_in_all_directions() -> None:
    _, state = custom_state(
        [
            ".......+",
            "........",
            "........",
            "........",
            "...8....",
            "........",
            "........",
            "........",
        ]
    )
    assert len(state.legal_actions()) == 4


def test_crowning_rule() -> None:
    state = CheckersGame().new_initial_state()

    assert state.crown_state_if_last_row_reached(0, CellState.WHITE) == CellState.WHITE_KING
    assert state.crown_state_if_last_row_reached(7, CellState.BLACK) == CellState.BLACK_KING
    assert state.crown_state_if_last_row_reached(3, CellState.WHITE) == CellState.WHITE
    assert state.crown_state_if_last_row_reached(0, CellState.BLACK) == CellState.BLACK


def test_draw_after_moves_without_capture() -> None:
    state = CheckersGame(max_moves_without_capture=2).new_initial_state()
    state.apply_action(state.legal_actions()[0])
    assert not state.is_terminal()
    state.apply_action(state.legal_actions()[0])

    assert state.is_terminal()
    assert state.current_player == TERMINAL_PLAYER
    assert state.legal_actions() == []
    assert state.returns() == [0.0, 0.0]
    assert state.winner == INVALID_PLAYER


def test_player_without_moves_loses() -> None:
    game, state = custom_state(
        [
            "........",
            "........",
            "........",
            "..+.....",
            ".o......",
            "........",
            "........",
            "........",
        ]
    )
    action = capture_id(game, 4, 1, 1)
    state.apply_action(action)

    assert state.is_terminal()
    assert state.returns() == [1.0, -1.0]
    assert state.winner == 0
    with pytest.raises(InvalidStateError):
        state.apply_action(action)

    state.undo_action(0, action)
    assert state.winner == INVALID_PLAYER
    assert not state.is_terminal()


def test_blocked_player_loses() -> None:
    _, state = custom_state(
        [
            "........",
            "........",
            "........",
            "........",
            "........",
            "..+.....",
            ".+......",
            "o.......",
        ]
    )
    assert state.legal_actions() == []
    assert state.is_terminal()
    assert state.returns() == [-1.0, 1.0]


def test_generate_moves_splits_captures_and_steps() -> None:
    _, state = custom_state(
        [
            "........",
            "........",
            "........",
            "..+.....",
            ".o......",
            "........",
            "......o.",
            "........",
        ]
    )
    captures, steps = generate_moves(state.board, 0)

    assert captures == [PlayerMove(4, 1, 1, MoveKind.CAPTURE)]
    assert PlayerMove(6, 6, 0) in steps


def test_errors() -> None:
    game = CheckersGame()
    state = game.new_initial_state()

    with pytest.raises(InvalidStateError):
        state.returns()
    with pytest.raises(IllegalActionError):
        state.apply_action(0)
    with pytest.raises(UndoError):
        state.undo_action(0, 0)

    action = state.legal_actions()[0]
    state.apply_action(action)
    with pytest.raises(UndoError):
        state.undo_action(1, action)


def test_custom_board_validation() -> None:
    game = CheckersGame()
    with pytest.raises(ConfigurationError):
        game.new_initial_state("." * 63)
    with pytest.raises(ConfigurationError):
        game.new_initial_state("x" + "." * 63)


def test_config_validation() -> None:
    with pytest.raises(ConfigurationError):
        CheckersGame(rows=3)
    with pytest.raises(ConfigurationError):
        CheckersGame(columns=17)
    with pytest.raises(ConfigurationError):
        CheckersGame(max_moves_without_capture=0)
    with pytest.raises(ConfigurationError):
        CheckersGame(kings=True)


def test_observation_planes() -> None:
    game = CheckersGame()
    state = game.new_initial_state()
    obs = state.observation_tensor(0)

    assert obs.shape == game.observation_shape == (5, 8, 8)
    assert obs.sum() == 64
    assert obs[CellState.EMPTY].sum() == 40
    assert obs[CellState.WHITE].sum() == 12
    assert obs[CellState.BLACK, 0, 1] == 1
    with pytest.raises(ValueError):
        state.observation_tensor(2)


def test_smaller_board() -> None:
    game = CheckersGame(rows=6, columns=6)
    state = game.new_initial_state()

    assert game.num_distinct_actions == 6 * 6 * 4 * 2
    assert state.board.count(CellState.WHITE) == 6
    assert state.board.count(CellState.BLACK) == 6
