"""Loading and lookup for JSON model manifests under ``conf/``."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from utils.env import get_env
from utils.file_utils import read_json_file

from ..shared import ModelCapabilities
from .schemas import ModelCatalogEntry

logger = logging.getLogger(__name__)

CONF_DIR = Path(__file__).resolve().parents[2] / "conf"


class RegistryLoadError(RuntimeError):
    """Raised when a manifest is unreadable or contains an invalid entry."""


class ManifestRegistry:
    """Model capabilities indexed by lower-cased name and alias.

    The manifest path is taken from ``config_path``, else the environment
    variable ``env_var_name``, else ``conf/<default_filename>`` shipped with
    the package (or under the working directory when running from a checkout).
    A missing manifest yields an empty registry; a malformed one raises
    :class:`RegistryLoadError`.
    """

    def __init__(self, *, env_var_name: str, default_filename: str, config_path: str | None = None) -> None:
        self._bundled_path = CONF_DIR / default_filename
        self._default_filename = default_filename

        override = config_path or get_env(env_var_name)
        self.config_path = Path(override).expanduser() if override else self._bundled_path

        self._by_name: dict[str, ModelCapabilities] = {}
        self._lookup: dict[str, str] = {}

    def reload(self) -> None:
        entries = [self._to_capabilities(raw) for raw in self._raw_models(self._read_manifest())]
        self._index(entry for entry in entries if entry is not None)
        logger.debug("Loaded %d models from %s", len(self._by_name), self.config_path)

    def list_models(self) -> list[str]:
        return list(self._by_name)

    def list_aliases(self) -> list[str]:
        return list(self._lookup)

    def resolve(self, name_or_alias: str) -> ModelCapabilities | None:
        """Case-insensitive lookup by canonical name or alias."""

        if not isinstance(name_or_alias, str):
            return None
        canonical = self._lookup.get(name_or_alias.lower())
        return self._by_name.get(canonical) if canonical else None

    def iter_entries(self) -> Iterator[tuple[str, ModelCapabilities]]:
        yield from self._by_name.items()

    def _read_manifest(self) -> Any:
        path = self.config_path
        if not path.exists() and path == self._bundled_path:
            checkout_copy = Path.cwd() / "conf" / self._default_filename
            if checkout_copy.exists():
                logger.debug("Bundled manifest missing, using %s", checkout_copy)
                self.config_path = path = checkout_copy

        try:
            return read_json_file(str(path))
        except json.JSONDecodeError as exc:
            raise RegistryLoadError(f"Invalid JSON in {path}: {exc}") from exc

    @staticmethod
    def _raw_models(data: Any) -> Iterator[Mapping[str, Any]]:
        if not isinstance(data, Mapping):
            return
        for raw in data.get("models") or []:
            if isinstance(raw, Mapping) and raw.get("model_name"):
                yield raw

    def _to_capabilities(self, raw: Mapping[str, Any]) -> ModelCapabilities:
        try:
            entry = ModelCatalogEntry.model_validate(raw)
        except ValidationError as exc:
            raise RegistryLoadError(f"Invalid model entry '{raw.get('model_name')}' in {self.config_path}: {exc}") from exc

        return ModelCapabilities(
            provider=entry.provider,
            model_name=entry.model_name,
            friendly_name=entry.friendly_name or entry.model_name,
            description=entry.description,
            aliases=list(entry.aliases),
            max_tokens=entry.max_tokens,
            chars_per_token=entry.chars_per_token,
        )

    def _index(self, entries) -> None:
        by_name: dict[str, ModelCapabilities] = {}
        lookup: dict[str, str] = {}

        for entry in entries:
            by_name[entry.model_name] = entry
            lookup.setdefault(entry.model_name.lower(), entry.model_name)

            for alias in entry.aliases:
                owner = lookup.get(alias.lower())
                if owner is not None and owner != entry.model_name:
                    raise RegistryLoadError(f"Duplicate alias '{alias}' found for models '{owner}' and '{entry.model_name}'")
                lookup[alias.lower()] = entry.model_name

        self._by_name = by_name
        self._lookup = lookup
