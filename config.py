"""
Configuration and constants for llm-relay

Settings are read once at import time through :mod:`utils.env`, so values
placed in the project ``.env`` file participate in the same override rules
as the rest of the codebase.
"""

import logging
import sys

from utils.env import get_env, get_env_int

# Version and metadata
__version__ = "0.3.0"
__updated__ = "2026-10-17"

# Logging
LOG_LEVEL = (get_env("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Provider used when a caller asks for a model that the catalogue does not know
DEFAULT_PROVIDER = (get_env("RELAY_DEFAULT_PROVIDER", "local") or "local").lower()
DEFAULT_MAX_TOKENS = get_env_int("RELAY_DEFAULT_MAX_TOKENS", 8192)

# Character-based token heuristic
DEFAULT_CHARS_PER_TOKEN = 4.0

# Cost estimation
COST_FALLBACK_MODEL = "gpt-3.5-turbo"
COST_PRECISION = 6
COST_CURRENCY = "USD"

# Optional JSON manifests (file paths)
MODEL_CATALOG_ENV_VAR = "MODEL_CATALOG_CONFIG_PATH"
MODEL_PRICING_ENV_VAR = "MODEL_PRICING_CONFIG_PATH"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stderr handler to the root logger.

    Calling this more than once does not stack handlers; the level is updated
    in place. Returns the root logger for convenience.
    """

    root = logging.getLogger()
    resolved = (level or LOG_LEVEL).upper()
    root.setLevel(getattr(logging, resolved, logging.INFO))

    for handler in root.handlers:
        if getattr(handler, "_relay_handler", False):
            handler.setLevel(root.level)
            return root

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(root.level)
    handler._relay_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
