# src/snippet_expander/expansion/general/utils/load_config.py

"""Load JSON-object tunables (e.g. ``scoring.json``) from a <data/> directory.

Every config read here is a JSON object shaped by a caller-supplied validator:
the scorer passes one that checks subsequence thresholds and field weights.
Results are cached per (file, mtime, validator) so an edited file is picked up
without a restart.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import Any

__all__ = [
    "Validator",
    "load_config",
    "resolve_data_dir",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]

ENV_VARS = ("SNIPPET_EXPANDER_DATA_DIR", "DATA_DIR")

Validator = Callable[[dict[str, Any]], dict[str, Any]]


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """Raise when no usable 'data' directory can be resolved."""


class ConfigFileNotFound(FileNotFoundError):
    """Raise when the requested config file is missing or outside the data dir."""


class ConfigParseError(ValueError):
    """Raise when a config file is not valid JSON or its validator rejects it."""


class ConfigTypeError(TypeError):
    """Raise when a config file holds something other than a JSON object."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
_CONFIG_CACHE: dict[tuple[Path, float, Validator | None], dict[str, Any]] = {}


def clear_config_cache() -> None:
    """Forget every cached config (tests, hot reload)."""
    with _CACHE_LOCK:
        _CONFIG_CACHE.clear()


def resolve_data_dir(base_dir: Path | None = None) -> Path:
    """
    Does: Pick the data directory: env override, then ``base_dir``, then the
          nearest ``data/`` above this module (the one shipped in the package).
    Returns: Resolved existing directory. Raises DataDirNotFound otherwise.
    """
    for var in ENV_VARS:
        value = os.environ.get(var)
        if value:
            chosen = Path(value).expanduser().resolve()
            break
    else:
        if base_dir is not None:
            chosen = Path(base_dir).resolve()
        else:
            here = Path(__file__).resolve()
            tried = [p / "data" for p in here.parents]
            chosen = next((p for p in tried if p.is_dir()), None)
            if chosen is None:
                raise DataDirNotFound(
                    "No 'data' directory found. Tried:\n  " + "\n  ".join(map(str, tried))
                )

    if not chosen.is_dir():
        raise DataDirNotFound(f"Data directory does not exist: {chosen}")
    return chosen


def _config_path(name: str, data_dir: Path) -> Path:
    file_name = name if name.endswith(".json") else f"{name}.json"
    path = (data_dir / file_name).resolve()
    if not path.is_relative_to(data_dir):
        raise ConfigFileNotFound(f"Refusing to read outside {data_dir}: {path}")
    if not path.is_file():
        raise ConfigFileNotFound(f"Config file not found: {path}")
    return path


def load_config(
    name: str,
    *,
    validator: Validator | None = None,
    base_dir: Path | None = None,
) -> dict[str, Any]:
    """
    Does: Read <data>/<name>.json, require a JSON object, run ``validator`` on it.
    Returns: The (validated) dict, served from cache while the file's mtime holds.
    """
    data_dir = resolve_data_dir(base_dir)
    path = _config_path(name, data_dir)
    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    key = (path, mtime, validator)
    with _CACHE_LOCK:
        cached = _CONFIG_CACHE.get(key)
    if cached is not None:
        return cached

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigTypeError(f"{path.name}: expected a JSON object, got {type(data).__name__}")
    if validator is not None:
        try:
            data = validator(data)
        except (ValueError, TypeError, KeyError) as e:
            raise ConfigParseError(f"{path.name}: {e}") from e

    with _CACHE_LOCK:
        _CONFIG_CACHE[key] = data
    log.debug("Loaded config %s from %s", path.name, data_dir)
    return data


class temp_data_dir:
    """Temporarily point the loader at another data directory via env."""

    def __init__(self, path: os.PathLike[str] | str):
        self._new = str(path)
        self._old: str | None = None

    def __enter__(self) -> temp_data_dir:
        self._old = os.environ.get(ENV_VARS[0])
        os.environ[ENV_VARS[0]] = self._new
        clear_config_cache()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._old is None:
            os.environ.pop(ENV_VARS[0], None)
        else:
            os.environ[ENV_VARS[0]] = self._old
        clear_config_cache()
