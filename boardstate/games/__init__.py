"""Concrete games plus a name-based registry used by drivers and scripts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Type, Union

from boardstate.core import ConfigurationError, Game, read_config_file

from .checkers import CheckersConfig, CheckersGame, CheckersState
from .kalah import KalahConfig, KalahGame, KalahState
from .twenty_forty_eight import (
    TwentyFortyEightConfig,
    TwentyFortyEightGame,
    TwentyFortyEightState,
)

logger = logging.getLogger(__name__)

_REGISTRY: Dict[str, Type[Game]] = {
    CheckersGame.name: CheckersGame,
    KalahGame.name: KalahGame,
    TwentyFortyEightGame.name: TwentyFortyEightGame,
}


def registered_games() -> List[str]:
    return sorted(_REGISTRY)


def load_game(name: str, **params: Any) -> Game:
    """Instantiate a registered game, validating its parameters once."""
    try:
        game_class = _REGISTRY[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown game '{name}'.", available=registered_games()
        ) from None
    game = game_class(**params)
    logger.info("Loaded game %s with %s", name, game.config.as_dict())
    return game


def load_game_from_file(path: Union[str, Path]) -> Game:
    name, params = read_config_file(path)
    return load_game(name, **params)


__all__ = [
    "CheckersConfig",
    "CheckersGame",
    "CheckersState",
    "KalahConfig",
    "KalahGame",
    "KalahState",
    "TwentyFortyEightConfig",
    "TwentyFortyEightGame",
    "TwentyFortyEightState",
    "load_game",
    "load_game_from_file",
    "registered_games",
]
