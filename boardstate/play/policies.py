from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from boardstate.core import State
from boardstate.features import legal_action_mask


class Policy(ABC):
    @abstractmethod
    def act(self, state: State, legal_mask: np.ndarray) -> np.ndarray:
        """Return a probability vector over the mask's action ids."""


class RandomPolicy(Policy):
    """Picks one legal id uniformly with its own generator and returns it one-hot."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def act(self, state: State, legal_mask: np.ndarray) -> np.ndarray:
        probs = np.zeros(legal_mask.shape, dtype=np.float32)
        legal = np.flatnonzero(legal_mask)
        if legal.size:
            probs[int(self.rng.choice(legal))] = 1.0
        return probs


def sample_chance_action(state: State, rng: np.random.Generator) -> int:
    outcomes = state.chance_outcomes()
    actions = np.array([action for action, _ in outcomes], dtype=np.int64)
    probs = np.array([probability for _, probability in outcomes], dtype=np.float64)
    probs /= probs.sum()
    return int(rng.choice(actions, p=probs))


def select_action(policy: Policy, state: State, rng: np.random.Generator) -> int:
    legal_mask = legal_action_mask(state)
    probs = policy.act(state, legal_mask).astype(np.float64) * legal_mask
    if probs.sum() <= 0:
        probs = legal_mask.astype(np.float64)
    probs /= probs.sum()
    return int(rng.choice(len(probs), p=probs))
