from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import torch

from boardstate.core import State


def _perspective(state: State, player: Optional[int]) -> int:
    if player is not None:
        return player
    current = state.current_player
    return current if current >= 0 else 0


def build_observation(state: State, player: Optional[int] = None) -> np.ndarray:
    """Return the state's planes with shape ``game.observation_shape``, channel-first."""
    return state.observation_tensor(_perspective(state, player))


def build_aux_vector(state: State) -> np.ndarray:
    """One-hot of the player to move; all zeros at chance and terminal nodes."""
    aux = np.zeros((state.num_players,), dtype=np.float32)
    current = state.current_player
    if current >= 0:
        aux[current] = 1.0
    return aux


def legal_action_mask(state: State) -> np.ndarray:
    game = state.game
    size = game.max_chance_outcomes if state.is_chance_node() else game.num_distinct_actions
    mask = np.zeros(size, dtype=np.int8)
    mask[state.legal_actions()] = 1
    return mask


def state_to_numpy(state: State, player: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    return build_observation(state, player), build_aux_vector(state)


def state_to_torch(
    state: State,
    *,
    player: Optional[int] = None,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.float32,
) -> Tuple[torch.Tensor, torch.Tensor]:
    board_np, aux_np = state_to_numpy(state, player)
    board = torch.from_numpy(board_np).to(device=device, dtype=dtype)
    aux = torch.from_numpy(aux_np).to(device=device, dtype=dtype)
    return board, aux
