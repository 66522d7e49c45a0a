"""Environment access for llm-relay settings.

Values come from the process environment unless the project ``.env`` sets
``RELAY_FORCE_ENV_OVERRIDE=true``, in which case the ``.env`` file is the
only source and the process environment is ignored.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

FORCE_OVERRIDE_VAR = "RELAY_FORCE_ENV_OVERRIDE"

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

_dotenv: dict[str, str | None] = {}
_dotenv_wins = False


def reload_env(dotenv_mapping: Mapping[str, str | None] | None = None) -> None:
    """Re-read ``.env`` and recompute whether it overrides the environment.

    Tests pass ``dotenv_mapping`` to stand in for the file; nothing is then
    loaded into ``os.environ``.
    """

    global _dotenv, _dotenv_wins

    if dotenv_mapping is None:
        _dotenv = dict(dotenv_values(_ENV_FILE)) if _ENV_FILE.exists() else {}
    else:
        _dotenv = dict(dotenv_mapping)
    _dotenv_wins = (_dotenv.get(FORCE_OVERRIDE_VAR) or "").strip().lower() == "true"

    if dotenv_mapping is None and _ENV_FILE.exists():
        load_dotenv(dotenv_path=_ENV_FILE, override=_dotenv_wins)


def env_override_enabled() -> bool:
    return _dotenv_wins


def get_env(key: str, default: str | None = None) -> str | None:
    if not env_override_enabled():
        return os.getenv(key, default)
    value = _dotenv.get(key)
    return default if value is None else value


def get_env_int(key: str, default: int) -> int:
    """Integer setting; blank or unparsable values fall back to ``default``."""

    raw_value = (get_env(key) or "").strip()
    try:
        return int(raw_value) if raw_value else default
    except ValueError:
        return default


reload_env()
