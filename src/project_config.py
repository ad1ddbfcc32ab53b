"""Load ``config.toml`` for the puzzle engines.

The file next to the project root is used unless ``PUZZLE_ENGINES_CONFIG``
points at another TOML file.  Modules read their settings once at import
time through :func:`get_section`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - older interpreters
    import tomli as tomllib  # type: ignore[import-untyped]


CONFIG_ENV_VAR = "PUZZLE_ENGINES_CONFIG"
_CONFIG_FILENAME = "config.toml"
_MISSING = object()


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Parse the configuration file once and cache the resulting tables."""
    path = config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:
        raise RuntimeError(f"Puzzle engine configuration not found at '{path}'") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"Puzzle engine configuration '{path}' is not valid TOML: {exc}") from exc


def reload_config() -> Dict[str, Any]:
    get_config.cache_clear()
    return get_config()


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Return the value at dotted ``path`` such as ``"geosudo.tiers"``.

    Raises ``KeyError`` when the path is absent and no default was given.
    """

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        elif default is not _MISSING:
            return default
        else:
            raise KeyError(f"Configuration path '{path}' not found")
    return data


__all__ = ["CONFIG_ENV_VAR", "config_path", "get_config", "get_section", "reload_config"]
