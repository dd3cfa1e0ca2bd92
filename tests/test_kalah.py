import pytest

from boardstate.core import ConfigurationError, TERMINAL_PLAYER
from boardstate.games import KalahGame


def make_state(board=None, **params):
    return KalahGame(**params).new_initial_state(board)


def test_initial_position() -> None:
    state = make_state()

    assert state.current_player == 0
    assert state.board.to_list() == [0] + [4] * 6 + [0] + [4] * 6
    assert state.legal_actions() == [1, 2, 3, 4, 5, 6]
    assert str(state) == "-4-4-4-4-4-4-\n0-----------0\n-4-4-4-4-4-4-"
    assert state.action_to_string(0, 3) == "3"


def test_layout_helpers() -> None:
    state = make_state()

    assert state.store(0) == 7
    assert state.store(1) == 0
    assert list(state.player_houses(1)) == [8, 9, 10, 11, 12, 13]
    assert state.opposite(4) == 10
    assert state.opposite(1) == 13


def test_second_player_houses() -> None:
    state = make_state()
    state.apply_action(1)

    assert state.current_player == 1
    assert state.legal_actions() == [8, 9, 10, 11, 12, 13]


def test_last_seed_in_own_store_grants_extra_turn() -> None:
    state = make_state()
    state.apply_action(3)

    assert state.board_at(7) == 1
    assert state.current_player == 0


def test_capture_when_opposite_house_not_empty() -> None:
    # -0-0-0-4-0-0-
    # 0-----------0
    # -0-0-1-0-0-0-
    board = [0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 4, 0, 0, 0]
    state = make_state(board)
    assert state.legal_actions() == [3]

    state.apply_action(3)
    assert state.board_at(7) == 5
    assert state.board_at(3) == 0
    assert state.board_at(4) == 0
    assert state.board_at(10) == 0
    assert state.is_terminal()
    assert state.current_player == TERMINAL_PLAYER
    assert state.returns() == [1.0, -1.0]

    state.undo_action(0, 3)
    assert state.board.to_list() == board
    assert state.current_player == 0


def test_no_capture_when_opposite_house_is_empty() -> None:
    # -0-0-0-0-4-0-
    # 0-----------0
    # -0-0-1-0-0-0-
    state = make_state([0, 0, 0, 1, 0, 0, 0, 0, 0, 4, 0, 0, 0, 0])
    assert state.legal_actions() == [3]

    state.apply_action(3)
    assert state.board_at(7) == 0
    assert state.board_at(3) == 0
    assert state.board_at(4) == 1
    assert state.board_at(9) == 4
    assert not state.is_terminal()
    assert state.current_player == 1


def test_sowing_skips_opponent_store() -> None:
    # -0-0-0-0-0-1-
    # 0-----------0
    # -1-0-0-0-0-8-
    state = make_state([0, 1, 0, 0, 0, 0, 8, 0, 1, 0, 0, 0, 0, 0])
    assert state.legal_actions() == [1, 6]

    state.apply_action(6)
    assert state.board_at(0) == 0
    assert state.board_at(7) == 1
    assert state.board_at(8) == 2
    assert state.board_at(1) == 2
    assert state.board.to_list() == [0, 2, 0, 0, 0, 0, 0, 1, 2, 1, 1, 1, 1, 1]
    assert state.current_player == 1


def test_empty_side_sweeps_remaining_seeds() -> None:
    board = [0, 0, 0, 0, 0, 0, 1, 0, 2, 0, 0, 3, 0, 0]
    state = make_state(board)
    state.apply_action(6)

    assert state.is_terminal()
    assert state.board_at(7) == 1
    assert state.board_at(0) == 5
    assert all(state.board_at(i) == 0 for i in range(8, 14))
    assert state.returns() == [-1.0, 1.0]

    state.undo_action(0, 6)
    assert state.board.to_list() == board
    assert not state.is_terminal()


def test_full_lap_passes_origin_house() -> None:
    board = [0, 0, 0, 0, 0, 0, 13, 0, 1, 1, 1, 1, 1, 1]
    state = make_state(board)
    state.apply_action(6)

    # 13 seeds cover every cell but the opponent's store and end back in house 6.
    assert state.board_at(7) == 1 + 1 + 2
    assert state.board_at(6) == 0
    assert state.board_at(8) == 0
    assert state.board_at(0) == 0

    state.undo_action(0, 6)
    assert state.board.to_list() == board


def test_tie_returns_zero() -> None:
    state = make_state([3, 0, 0, 0, 0, 0, 1, 3, 0, 0, 0, 0, 0, 1])
    state.apply_action(6)

    assert state.is_terminal()
    assert state.returns() == [0.0, 0.0]


def test_smaller_configuration() -> None:
    game = KalahGame(houses=3, seeds=2)
    state = game.new_initial_state()

    assert game.num_distinct_actions == 8
    assert state.board.to_list() == [0, 2, 2, 2, 0, 2, 2, 2]
    assert state.opposite(1) == 7
    assert str(state) == "-2-2-2-\n0-----0\n-2-2-2-"


def test_observation_is_seed_counts() -> None:
    game = KalahGame()
    state = game.new_initial_state()
    obs = state.observation_tensor(1)

    assert obs.shape == game.observation_shape == (1, 1, 14)
    assert obs[0, 0].tolist() == [0.0] + [4.0] * 6 + [0.0] + [4.0] * 6


def test_invalid_boards_and_config() -> None:
    state = make_state()
    with pytest.raises(ConfigurationError):
        state.set_board([0] * 13)
    with pytest.raises(ConfigurationError):
        state.set_board([-1] + [0] * 13)
    with pytest.raises(ConfigurationError):
        KalahGame(houses=0)
    with pytest.raises(ConfigurationError):
        KalahGame(seeds=25)
