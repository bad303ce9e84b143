"""Module-name resolution from package manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Optional

from .config import DEFAULT_MANIFEST_FILENAME
from .logging import get_logger

logger = get_logger("modules")

_NAME_PREFIX = "name:"
_VALUE_STRIP_CHARS = " \t\"',"


class NestedManifestError(RuntimeError):
    """Raised when a named package manifest is nested inside another package."""

    def __init__(self, inner: Path, outer: Path) -> None:
        super().__init__(f"Nested package manifest at {inner} (enclosing package at {outer})")
        self.inner = inner
        self.outer = outer


def extract_package_name(manifest_path: Path) -> Optional[str]:
    """Return the package name declared in ``manifest_path``, if any.

    The first line whose stripped form starts with ``name:`` wins. Surrounding
    whitespace, quote characters and a trailing comma are trimmed from the value.
    """
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read manifest %s: %s", manifest_path, exc)
        return None

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped.startswith(_NAME_PREFIX):
            continue
        value = stripped.split(":", 1)[1].strip(_VALUE_STRIP_CHARS)
        return value or None
    return None


def resolve_module_name(
    file_path: Path,
    root_path: Path,
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME,
) -> str:
    """Return the module name for ``file_path`` without caching."""
    return ModuleResolver(manifest_filename).resolve(file_path, root_path)


class ModuleResolver:
    """Resolves module names by walking from a file's directory up to its root.

    The nearest ancestor manifest with a declared name wins; the walk never goes
    above the root, and the root's base name is the fallback. Manifest lookups
    are cached per directory for the lifetime of the resolver.
    """

    def __init__(self, manifest_filename: str = DEFAULT_MANIFEST_FILENAME, *, strict: bool = False) -> None:
        self.manifest_filename = manifest_filename
        self.strict = strict
        self._names: Dict[Path, Optional[str]] = {}

    def resolve(self, file_path: Path, root_path: Path) -> str:
        found: Optional[tuple[Path, str]] = None
        for directory in self._ancestors(file_path.parent, root_path):
            name = self._manifest_name(directory)
            if name is None:
                continue
            if found is None:
                found = (directory, name)
                if not self.strict:
                    break
            else:
                raise NestedManifestError(
                    found[0] / self.manifest_filename,
                    directory / self.manifest_filename,
                )

        if found is not None:
            logger.debug("Resolved module %s for %s", found[1], file_path)
            return found[1]
        return root_path.name

    def _ancestors(self, start: Path, root_path: Path) -> Iterator[Path]:
        directory = start
        while directory.is_relative_to(root_path):
            yield directory
            if directory == root_path:
                return
            directory = directory.parent

    def _manifest_name(self, directory: Path) -> Optional[str]:
        if directory not in self._names:
            manifest = directory / self.manifest_filename
            self._names[directory] = extract_package_name(manifest) if manifest.is_file() else None
        return self._names[directory]


__all__ = [
    "ModuleResolver",
    "NestedManifestError",
    "extract_package_name",
    "resolve_module_name",
]
