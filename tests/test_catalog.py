"""Tests for the JSON-backed model catalogue."""

import json

import pytest

import config
from providers.registries import ModelCatalog, RegistryLoadError, get_catalog, get_model_info
from providers.shared import ProviderType


def _write_catalog(tmp_path, models):
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"models": models}))
    return path


def test_bundled_catalogue_loads():
    catalog = get_catalog()

    assert "gpt-4" in catalog.list_models()
    assert "opus" in catalog.list_aliases()
    assert get_catalog() is catalog


@pytest.mark.parametrize(
    "name, provider, canonical",
    [
        ("gpt-4", ProviderType.OPENAI, "gpt-4"),
        ("GPT-4o", ProviderType.OPENAI, "gpt-4o"),
        ("claude-3-opus-20240229", ProviderType.ANTHROPIC, "claude-3-opus"),
        ("haiku", ProviderType.ANTHROPIC, "claude-3-haiku"),
        ("gemini-pro", ProviderType.GOOGLE, "gemini-pro"),
        ("mistral-small-latest", ProviderType.MISTRAL, "mistral-small-latest"),
        ("llama3-70b", ProviderType.LOCAL, "llama3-70b"),
    ],
)
def test_aliases_resolve_to_canonical_entry(name, provider, canonical):
    info = get_model_info(name)

    assert info.provider is provider
    assert info.model_name == canonical


def test_gpt4_uses_denser_token_ratio():
    assert get_model_info("gpt-4").chars_per_token == 3.5


def test_unknown_model_gets_default_entry():
    info = get_model_info("my-finetune")

    assert info.provider is ProviderType.LOCAL
    assert info.model_name == "my-finetune"
    assert info.max_tokens == config.DEFAULT_MAX_TOKENS
    assert info.chars_per_token == config.DEFAULT_CHARS_PER_TOKEN


def test_unknown_model_uses_configured_default_provider(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_PROVIDER", "mistral")

    assert get_model_info("mystery-model").provider is ProviderType.MISTRAL


def test_env_path_override(tmp_path, monkeypatch):
    path = _write_catalog(
        tmp_path,
        [{"model_name": "house-model", "provider": "claude", "aliases": "house, hm", "max_tokens": 1000}],
    )
    monkeypatch.setenv("MODEL_CATALOG_CONFIG_PATH", str(path))

    catalog = ModelCatalog()

    assert catalog.list_models() == ["house-model"]
    assert catalog.resolve("HM").provider is ProviderType.ANTHROPIC
    assert catalog.resolve("house").friendly_name == "house-model"


def test_missing_catalogue_file_is_empty(tmp_path):
    catalog = ModelCatalog(config_path=str(tmp_path / "absent.json"))

    assert catalog.list_models() == []
    assert catalog.get_model_info("gpt-4").provider is ProviderType.LOCAL


def test_duplicate_alias_rejected(tmp_path):
    path = _write_catalog(
        tmp_path,
        [
            {"model_name": "a", "provider": "openai", "aliases": ["shared"]},
            {"model_name": "b", "provider": "openai", "aliases": ["shared"]},
        ],
    )

    with pytest.raises(RegistryLoadError, match="Duplicate alias 'shared'"):
        ModelCatalog(config_path=str(path))


def test_unknown_provider_rejected(tmp_path):
    path = _write_catalog(tmp_path, [{"model_name": "x", "provider": "cohere"}])

    with pytest.raises(RegistryLoadError, match="Invalid model entry 'x'"):
        ModelCatalog(config_path=str(path))


def test_invalid_json_rejected(tmp_path):
    path = tmp_path / "models.json"
    path.write_text("{not json")

    with pytest.raises(RegistryLoadError, match="Invalid JSON"):
        ModelCatalog(config_path=str(path))


def test_entries_without_name_are_skipped(tmp_path):
    path = _write_catalog(tmp_path, [{"provider": "openai"}, "junk", {"model_name": "ok", "provider": "local"}])

    assert ModelCatalog(config_path=str(path)).list_models() == ["ok"]


def test_non_string_lookup_returns_none():
    assert get_catalog().resolve(None) is None
