"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    DeductionAmounts,
    InsuranceRates,
    RegimeConfiguration,
    RegimeManifest,
    RegimeManifestEntry,
    TaxBracket,
    order_brackets,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"

_LOGGER = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_manifest() -> RegimeManifest:
    """Load and cache the configuration manifest."""

    if not MANIFEST_FILE.exists():
        raise FileNotFoundError("Configuration manifest not found")

    raw_manifest = _load_yaml(MANIFEST_FILE)

    try:
        return RegimeManifest.model_validate(raw_manifest)
    except ValidationError as error:
        raise ConfigurationError(f"Manifest validation failed: {error}") from error


def manifest_entries() -> Sequence[RegimeManifestEntry]:
    """Expose every manifest entry, whatever its status."""

    return load_manifest().regimes


@lru_cache(maxsize=8)
def load_regime_configuration(regime_id: str) -> RegimeConfiguration:
    """Load the constants for ``regime_id`` from disk."""

    try:
        manifest_entry = load_manifest().get_entry(regime_id)
    except KeyError as exc:
        raise FileNotFoundError(
            f"Configuration for regime '{regime_id}' not declared in manifest"
        ) from exc

    config_file = CONFIG_DIRECTORY / manifest_entry.resolved_filename
    if not config_file.exists():
        raise FileNotFoundError(
            f"Configuration file for regime '{regime_id}' missing: {config_file.name}"
        )

    raw_config = _load_yaml(config_file)
    raw_config.setdefault("id", regime_id)

    try:
        configuration = RegimeConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(
            f"Configuration validation failed for '{regime_id}': {error}"
        ) from error

    if configuration.id != regime_id:
        raise ConfigurationError(
            f"Configuration id mismatch: expected '{regime_id}', found '{configuration.id}'"
        )

    _LOGGER.debug("Loaded regime configuration %s from %s", regime_id, config_file.name)
    return configuration


def available_regimes() -> Sequence[str]:
    """Return the identifiers of the active regimes declared in the manifest.

    Entries with any other status (``draft`` or ``retired``, say) stay loadable
    by id but are left out of default listings and validation runs.
    """

    return load_manifest().active_regimes


def comparison_regimes() -> tuple[RegimeConfiguration, RegimeConfiguration]:
    """Return the ``(baseline, comparison)`` regimes declared in the manifest."""

    manifest = load_manifest()
    return (
        load_regime_configuration(manifest.baseline),
        load_regime_configuration(manifest.comparison),
    )


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "DeductionAmounts",
    "InsuranceRates",
    "MANIFEST_FILE",
    "RegimeConfiguration",
    "RegimeManifest",
    "RegimeManifestEntry",
    "TaxBracket",
    "available_regimes",
    "comparison_regimes",
    "load_manifest",
    "load_regime_configuration",
    "manifest_entries",
    "order_brackets",
]
