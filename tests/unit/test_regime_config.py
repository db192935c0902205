"""Unit coverage for regime configuration discovery and parsing utilities."""

from __future__ import annotations

from pathlib import Path
from shutil import copy2

import pytest
import yaml

from vntax.backend.config import regime_config
from vntax.backend.config.schema import ConfigurationError


@pytest.fixture()
def isolated_config_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary configuration directory patched into ``regime_config``."""

    original_directory = regime_config.CONFIG_DIRECTORY
    for filename in ("before_2026.yaml", "from_2026.yaml", "manifest.yaml"):
        copy2(original_directory / filename, tmp_path / filename)

    monkeypatch.setattr(regime_config, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(regime_config, "MANIFEST_FILE", tmp_path / "manifest.yaml")
    regime_config.load_regime_configuration.cache_clear()
    regime_config.load_manifest.cache_clear()

    yield tmp_path

    regime_config.load_regime_configuration.cache_clear()
    regime_config.load_manifest.cache_clear()


def _rewrite_yaml(path: Path, **updates: object) -> None:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    data.update(updates)
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")


def test_available_regimes_follow_manifest_order() -> None:
    assert tuple(regime_config.available_regimes()) == ("before_2026", "from_2026")


def test_regime_constants_match_published_values() -> None:
    before = regime_config.load_regime_configuration("before_2026")
    after = regime_config.load_regime_configuration("from_2026")

    assert before.label == "Trước 2026"
    assert before.personal_deduction == 11_000_000
    assert before.dependent_deduction == 4_400_000
    assert len(before.brackets) == 7
    assert after.label == "Từ 2026"
    assert after.personal_deduction == 15_500_000
    assert after.dependent_deduction == 6_200_000
    assert len(after.brackets) == 5
    for regime in (before, after):
        assert regime.employee_insurance_rate == 10.5
        assert regime.employer_insurance_rate == 21.5
        assert regime.basic_insurance_base == 5_310_000
        assert regime.brackets[-1].is_open_ended


def test_configuration_is_cached() -> None:
    first = regime_config.load_regime_configuration("from_2026")

    assert regime_config.load_regime_configuration("from_2026") is first


def test_comparison_regimes_returns_baseline_first() -> None:
    baseline, comparison = regime_config.comparison_regimes()

    assert (baseline.id, comparison.id) == ("before_2026", "from_2026")


def test_unknown_regime_raises_file_not_found(isolated_config_directory: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not declared"):
        regime_config.load_regime_configuration("from_2030")


def test_missing_regime_file_raises_file_not_found(isolated_config_directory: Path) -> None:
    (isolated_config_directory / "from_2026.yaml").unlink()

    with pytest.raises(FileNotFoundError, match="missing"):
        regime_config.load_regime_configuration("from_2026")


def test_new_regime_is_discovered_through_manifest(isolated_config_directory: Path) -> None:
    new_regime = isolated_config_directory / "draft_2027.yaml"
    copy2(isolated_config_directory / "from_2026.yaml", new_regime)
    _rewrite_yaml(new_regime, id="draft_2027", label="Dự thảo 2027")

    manifest_path = isolated_config_directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
    manifest["regimes"].append({"id": "draft_2027"})
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False), encoding="utf-8")
    regime_config.load_manifest.cache_clear()

    assert tuple(regime_config.available_regimes()) == (
        "before_2026",
        "from_2026",
        "draft_2027",
    )
    assert regime_config.load_regime_configuration("draft_2027").label == "Dự thảo 2027"


def test_non_contiguous_brackets_are_rejected(isolated_config_directory: Path) -> None:
    path = isolated_config_directory / "from_2026.yaml"
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    data["tax_brackets"][1]["from"] = 12_000_000
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")

    with pytest.raises(ConfigurationError, match="continuous"):
        regime_config.load_regime_configuration("from_2026")


def test_out_of_range_insurance_rate_is_rejected(isolated_config_directory: Path) -> None:
    path = isolated_config_directory / "before_2026.yaml"
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    data["insurance"]["employee_rate"] = 105
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Employee insurance rate"):
        regime_config.load_regime_configuration("before_2026")


def test_mismatched_regime_id_is_rejected(isolated_config_directory: Path) -> None:
    _rewrite_yaml(isolated_config_directory / "before_2026.yaml", id="something_else")

    with pytest.raises(ConfigurationError, match="id mismatch"):
        regime_config.load_regime_configuration("before_2026")


def test_manifest_rejects_duplicate_regimes(isolated_config_directory: Path) -> None:
    manifest_path = isolated_config_directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
    manifest["regimes"].append({"id": "from_2026"})
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False), encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Duplicate regime"):
        regime_config.load_manifest()


def test_manifest_requires_declared_comparison(isolated_config_directory: Path) -> None:
    _rewrite_yaml(isolated_config_directory / "manifest.yaml", comparison="from_2030")

    with pytest.raises(ConfigurationError, match="comparison regime 'from_2030'"):
        regime_config.load_manifest()


def test_draft_regimes_are_declared_but_not_listed(isolated_config_directory: Path) -> None:
    draft = isolated_config_directory / "draft_2027.yaml"
    copy2(isolated_config_directory / "from_2026.yaml", draft)
    _rewrite_yaml(draft, id="draft_2027")

    manifest_path = isolated_config_directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
    manifest["regimes"].append({"id": "draft_2027", "status": "draft"})
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False), encoding="utf-8")

    entries = {entry.id: entry for entry in regime_config.manifest_entries()}

    assert not entries["draft_2027"].is_active
    assert entries["from_2026"].is_active
    assert tuple(regime_config.available_regimes()) == ("before_2026", "from_2026")
    assert regime_config.load_regime_configuration("draft_2027").id == "draft_2027"


def test_manifest_requires_active_baseline(isolated_config_directory: Path) -> None:
    manifest_path = isolated_config_directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
    manifest["regimes"][0]["status"] = "retired"
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False), encoding="utf-8")

    with pytest.raises(ConfigurationError, match="baseline regime 'before_2026' must be active"):
        regime_config.load_manifest()
