"""Tests for concatcode.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from concatcode.config import ConcatConfig, ConfigError, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ConcatConfig)
    assert config.source_suffixes == [".swift"]
    assert config.auxiliary_files == ["Info.plist", "README.md", "PLAN.md"]
    assert config.exclude_files == []
    assert config.manifest_filename == "Package.swift"
    assert config.strict_packages is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".concatcode.yml"
    config_file.write_text(
        """
source_suffixes: [".swift", ".m"]
auxiliary_files:
  - README.md
exclude_files:
  - "Generated.swift"
  - "*Processor.swift"
manifest_filename: "Package.swift"
strict_packages: yes
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.source_suffixes == [".swift", ".m"]
    assert config.auxiliary_files == ["README.md"]
    assert config.exclude_files == ["Generated.swift", "*Processor.swift"]
    assert config.strict_packages is True


def test_load_config_accepts_single_string_for_lists(tmp_path: Path) -> None:
    (tmp_path / ".concatcode.yml").write_text("exclude_files: Huge.swift\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.exclude_files == ["Huge.swift"]


def test_load_config_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".concatcode.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.source_suffixes == [".swift"]


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".concatcode.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".concatcode.yml").write_text("exclude_files: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("filename", "accepted"),
    [
        ("App.swift", True),
        ("Info.plist", True),
        ("README.md", True),
        ("PLAN.md", True),
        ("Package.swift", False),
        ("notes.md", False),
        ("main.py", False),
        ("KewProcessor.swift", False),
        ("Skip.swift", False),
    ],
)
def test_accepts_applies_allow_list_manifest_and_denylist(
    filename: str, accepted: bool
) -> None:
    config = ConcatConfig(exclude_files=["*Processor.swift", "Skip.swift"])

    assert config.accepts(filename) is accepted
