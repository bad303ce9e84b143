"""Configuration loading for concatcode (.concatcode.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".concatcode.yml"

DEFAULT_SOURCE_SUFFIXES = (".swift",)
DEFAULT_AUXILIARY_FILES = ("Info.plist", "README.md", "PLAN.md")
DEFAULT_MANIFEST_FILENAME = "Package.swift"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ConcatConfig:
    """Represents the settings defined in .concatcode.yml."""

    source_suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_SUFFIXES))
    auxiliary_files: List[str] = field(default_factory=lambda: list(DEFAULT_AUXILIARY_FILES))
    exclude_files: List[str] = field(default_factory=list)
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME
    strict_packages: bool = False

    def is_excluded(self, filename: str) -> bool:
        """Return True when ``filename`` matches an entry of the denylist."""
        for pattern in self.exclude_files:
            if filename == pattern or fnmatchcase(filename, pattern):
                return True
        return False

    def accepts(self, filename: str) -> bool:
        """Return True when ``filename`` should be concatenated."""
        if filename == self.manifest_filename:
            return False
        if self.is_excluded(filename):
            return False
        if filename in self.auxiliary_files:
            return True
        return any(filename.endswith(suffix) for suffix in self.source_suffixes)


def load_config(config_path: Path) -> ConcatConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)

    if not config_file.exists():
        return ConcatConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ConcatConfig()

    if "source_suffixes" in data:
        config.source_suffixes = _as_str_list(data.get("source_suffixes"))
    if "auxiliary_files" in data:
        config.auxiliary_files = _as_str_list(data.get("auxiliary_files"))
    config.exclude_files = _as_str_list(data.get("exclude_files"))

    manifest = _as_str(data.get("manifest_filename"))
    if manifest:
        config.manifest_filename = manifest

    strict = _as_bool(data.get("strict_packages"))
    if strict is not None:
        config.strict_packages = strict

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConcatConfig", "ConfigError", "load_config"]
