from __future__ import annotations

from typing import Any, Dict, Optional, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from boardstate.core import Game, State
from boardstate.features import build_aux_vector, build_observation, legal_action_mask
from boardstate.games import load_game
from boardstate.play import sample_chance_action


class BoardGameEnv(gym.Env):
    """Gymnasium view of a game; chance nodes are resolved inside ``step``/``reset``.

    The reward is player 0's return once the game is over and 0 before that.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        game: Union[Game, str] = "checkers",
        *,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
        **params: Any,
    ) -> None:
        super().__init__()
        self.game = load_game(game, **params) if isinstance(game, str) else game
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(
                    low=0.0, high=np.inf, shape=self.game.observation_shape, dtype=np.float32
                ),
                "aux": spaces.Box(
                    low=0.0, high=1.0, shape=(self.game.num_players,), dtype=np.float32
                ),
            }
        )
        self.action_space = spaces.Discrete(self.game.num_distinct_actions)

        self._state: State = self.game.new_initial_state()

    @property
    def state(self) -> State:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = self.game.new_initial_state()
        self._resolve_chance()
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_terminal():
            raise ValueError("Episode is over; call reset().")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        self._state.apply_action(int(action_index))
        self._resolve_chance()

        terminated = self._state.is_terminal()
        reward = float(self._state.returns()[0]) if terminated else 0.0
        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        if self._state.is_terminal():
            return np.zeros(self.action_space.n, dtype=np.int8)
        return legal_action_mask(self._state)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return str(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_chance(self) -> None:
        while self._state.is_chance_node():
            self._state.apply_action(sample_chance_action(self._state, self.np_random))

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {
            "board": build_observation(self._state),
            "aux": build_aux_vector(self._state),
        }

    def _build_info(self) -> Dict[str, np.ndarray]:
        return {"legal_action_mask": self.legal_action_mask()}
