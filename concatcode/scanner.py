"""Directory traversal and filename filtering."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List

from .config import ConcatConfig
from .logging import get_logger
from .models import CandidateFile

logger = get_logger("scanner")


class RootUnavailableError(OSError):
    """Raised when a root directory cannot be enumerated."""


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _iter_files(root: Path) -> Iterator[Path]:
    def _on_error(exc: OSError) -> None:
        if exc.filename is None or Path(exc.filename) == root:
            raise exc
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(name for name in dirnames if not _is_hidden(name))

        for filename in sorted(filenames):
            if _is_hidden(filename):
                continue
            path = current_dir / filename
            if path.is_file():
                yield path


class TreeScanner:
    """Walks a root directory and yields the files selected for concatenation."""

    def __init__(self, config: ConcatConfig) -> None:
        self.config = config

    def scan(self, root: Path) -> List[CandidateFile]:
        """Return the candidate files under ``root`` in deterministic order.

        Hidden files and directories are skipped. Files are ordered by their
        path components relative to ``root``.
        """
        if not root.exists():
            raise RootUnavailableError(f"Directory not found: {root}")
        if not root.is_dir():
            raise RootUnavailableError(f"Not a directory: {root}")

        candidates: List[CandidateFile] = []
        try:
            for path in _iter_files(root):
                if not self.config.accepts(path.name):
                    continue
                candidates.append(CandidateFile(path=path, root=root))
        except OSError as exc:
            raise RootUnavailableError(f"Could not enumerate {root}: {exc}") from exc

        candidates.sort(key=lambda candidate: candidate.path.relative_to(root).parts)
        logger.debug("Selected %d files under %s", len(candidates), root)
        return candidates


__all__ = ["RootUnavailableError", "TreeScanner"]
