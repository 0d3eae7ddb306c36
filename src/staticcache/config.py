"""Option resolution for the ``staticcache`` CLI.

The middleware itself takes its options programmatically. The CLI
additionally reads a project-local ``staticcache.json`` so that a site's
cache root can be pinned next to its code::

    {"root": "public/cache", "index_file": "index.html"}

Precedence (high to low):
    1. CLI flags (``--root``, ``--index-file``)
    2. An explicit ``--config`` file, or ``./staticcache.json``

The ``clean`` key is ignored here: the CLI only cleans when asked to with
``staticcache clean``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from staticcache.exceptions import ConfigError
from staticcache.models import CacheOptions

PROJECT_CONFIG_FILENAME = "staticcache.json"


def load_project_config(path: Optional[str | Path] = None) -> Optional[dict[str, Any]]:
    """Load options from *path*, or from ``./staticcache.json``.

    Returns:
        The parsed JSON object, or ``None`` if no *path* was given and
        ``./staticcache.json`` does not exist.

    Raises:
        ConfigError: If an explicit *path* is missing, or the file is not a
            JSON object.
    """
    if path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME
        if not config_path.is_file():
            return None
    else:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {config_path} must be a JSON object")
    return data


def resolve_options(
    cli_root: Optional[str] = None,
    cli_index_file: Optional[str] = None,
    config_file: Optional[str | Path] = None,
) -> CacheOptions:
    """Merge CLI flags over the project config into :class:`CacheOptions`.

    Raises:
        ConfigError: If no root is configured anywhere, or a value is
            invalid.
    """
    data: dict[str, Any] = dict(load_project_config(config_file) or {})
    data.pop("clean", None)

    if cli_root:
        data["root"] = cli_root
    if cli_index_file:
        data["index_file"] = cli_index_file

    if not data.get("root"):
        raise ConfigError(
            f"No cache root configured. Pass --root or set \"root\" in {PROJECT_CONFIG_FILENAME}."
        )
    return CacheOptions.parse(data)
