"""Run orchestration: output setup, per-root traversal and emission."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, TextIO

from .config import ConcatConfig
from .emitter import BlockWriter
from .logging import get_logger
from .models import CandidateFile, ConcatResult, RootSummary
from .modules import ModuleResolver
from .scanner import RootUnavailableError, TreeScanner


class OutputSetupError(OSError):
    """Raised when the output file or its parent directory cannot be prepared."""


class Concatenator:
    """Concatenates the selected files of one or more roots into a single output file."""

    def __init__(
        self,
        config: ConcatConfig | None = None,
        scanner: TreeScanner | None = None,
        resolver: ModuleResolver | None = None,
    ) -> None:
        self.config = config or ConcatConfig()
        self.scanner = scanner or TreeScanner(self.config)
        self.resolver = resolver or ModuleResolver(
            self.config.manifest_filename, strict=self.config.strict_packages
        )
        self.logger = get_logger("concatenator")

    def run(self, root_paths: Sequence[str | Path], output_path: str | Path) -> ConcatResult:
        """Write every selected file under ``root_paths`` to ``output_path``.

        The output file is truncated before the first root is processed. Roots
        that cannot be enumerated and files that are not valid UTF-8 are skipped
        with a warning.
        """
        if not root_paths:
            raise ValueError("At least one directory is required")

        target = Path(output_path).expanduser()
        result = ConcatResult(output_path=target)

        with self._open_output(target) as stream:
            writer = BlockWriter(stream)
            output = target.resolve()
            for raw_root in root_paths:
                root = Path(raw_root).expanduser().resolve()
                result.roots.append(self._process_root(root, writer, result, output))

        self.logger.info(
            "Concatenated %d files from %d directories", result.written, len(result.roots)
        )
        return result

    def _open_output(self, target: Path) -> TextIO:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputSetupError(
                f"Could not create output directory {target.parent}: {exc}"
            ) from exc
        try:
            return target.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise OutputSetupError(f"Could not open output file {target}: {exc}") from exc

    def _process_root(
        self, root: Path, writer: BlockWriter, result: ConcatResult, output: Path
    ) -> RootSummary:
        summary = RootSummary(root=root)
        try:
            candidates = self.scanner.scan(root)
        except RootUnavailableError as exc:
            self.logger.warning("%s. Skipping.", exc)
            summary.skipped = True
            return summary

        self.logger.info("Processing directory tree at %s...", root)
        for candidate in candidates:
            if candidate.path.resolve() == output:
                self.logger.debug("Skipped output file %s", candidate.relative_path)
                continue
            content = self._read(candidate)
            if content is None:
                result.skipped_files.append(candidate.path)
                continue
            module_name = self.resolver.resolve(candidate.path, root)
            if writer.write(candidate.name, module_name, content):
                summary.written += 1
                self.logger.debug("Added %s (module %s)", candidate.relative_path, module_name)
            else:
                self.logger.debug("Skipped blank file %s", candidate.relative_path)
        return summary

    def _read(self, candidate: CandidateFile) -> str | None:
        try:
            return candidate.path.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError:
            self.logger.warning("Skipping %s: not valid UTF-8 text", candidate.path)
        except OSError as exc:
            self.logger.warning("Skipping %s: %s", candidate.path, exc)
        return None


__all__ = ["Concatenator", "OutputSetupError"]
