"""Feature extraction helpers for board game states."""

from .observation import (
    build_aux_vector,
    build_observation,
    legal_action_mask,
    state_to_numpy,
    state_to_torch,
)

__all__ = [
    "build_aux_vector",
    "build_observation",
    "legal_action_mask",
    "state_to_numpy",
    "state_to_torch",
]
