"""Data models shared across concatcode components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class CandidateFile:
    """A regular file discovered under a root that passed the filename filter."""

    path: Path
    root: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def relative_path(self) -> str:
        return self.path.relative_to(self.root).as_posix()


@dataclass
class RootSummary:
    """Outcome of processing a single root directory."""

    root: Path
    written: int = 0
    skipped: bool = False


@dataclass
class ConcatResult:
    """Outcome of a full concatenation run."""

    output_path: Path
    roots: List[RootSummary] = field(default_factory=list)
    skipped_files: List[Path] = field(default_factory=list)

    @property
    def written(self) -> int:
        return sum(summary.written for summary in self.roots)
