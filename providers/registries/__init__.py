"""Registries backed by JSON manifests under ``conf/``."""

from .base import ManifestRegistry, RegistryLoadError
from .catalog import ModelCatalog, get_catalog, get_model_info, reset_catalog
from .schemas import ModelCatalogEntry, PricingEntry

__all__ = [
    "ManifestRegistry",
    "ModelCatalog",
    "ModelCatalogEntry",
    "PricingEntry",
    "RegistryLoadError",
    "get_catalog",
    "get_model_info",
    "reset_catalog",
]
