from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Tuple, Type

from .config import GameConfig
from .errors import ConfigurationError
from .state import State


class Game(ABC):
    """Static description of a game plus a factory for its initial state."""

    name: ClassVar[str] = ""
    config_class: ClassVar[Type[GameConfig]] = GameConfig

    def __init__(self, config: Optional[GameConfig] = None, **params: Any) -> None:
        if config is None:
            config = self.config_class.from_dict(params)
        elif params:
            raise ConfigurationError("Pass either a config object or keyword parameters.")
        if not isinstance(config, self.config_class):
            raise ConfigurationError(
                f"{type(self).__name__} expects a {self.config_class.__name__}.",
                got=type(config).__name__,
            )
        config.validate()
        self.config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"

    @property
    def num_players(self) -> int:
        return 2

    @property
    def min_utility(self) -> float:
        return -1.0

    @property
    def max_utility(self) -> float:
        return 1.0

    @property
    def utility_sum(self) -> Optional[float]:
        return 0.0

    @property
    def max_chance_outcomes(self) -> int:
        return 0

    @property
    @abstractmethod
    def num_distinct_actions(self) -> int: ...

    @property
    @abstractmethod
    def observation_shape(self) -> Tuple[int, int, int]: ...

    @property
    @abstractmethod
    def max_game_length(self) -> int: ...

    @abstractmethod
    def new_initial_state(self) -> State: ...
