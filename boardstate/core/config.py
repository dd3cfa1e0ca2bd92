from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Type, TypeVar, Union

import yaml

from .errors import ConfigurationError

ConfigT = TypeVar("ConfigT", bound="GameConfig")


@dataclass(frozen=True)
class GameConfig:
    """Base for per-game parameter sets; every field carries a default."""

    def validate(self) -> None:
        """Raise ``ConfigurationError`` when a parameter is out of range."""

    @classmethod
    def from_dict(cls: Type[ConfigT], params: Mapping[str, Any]) -> ConfigT:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown game parameters.", config=cls.__name__, unknown=unknown
            )
        return cls(**dict(params))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def check_int_range(name: str, value: Any, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Parameter '{name}' must be an integer.", value=value)
    if not low <= value <= high:
        raise ConfigurationError(
            f"Parameter '{name}' out of range [{low}, {high}].", value=value
        )


def read_config_file(path: Union[str, Path]) -> Tuple[str, Dict[str, Any]]:
    """Read ``{game: <name>, params: {...}}`` from a YAML file."""
    cfg_path = Path(path)
    data = yaml.safe_load(cfg_path.read_text()) or {}
    if not isinstance(data, dict) or "game" not in data:
        raise ConfigurationError("Config file must define a 'game' key.", path=str(cfg_path))
    params = data.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigurationError("'params' must be a mapping.", path=str(cfg_path))
    return str(data["game"]), dict(params)
