"""Rendering of annotated file blocks."""

from __future__ import annotations

import re
from typing import TextIO

_COMMENT_MARKER = "//"
_LINE_BREAK = re.compile(r"(?<=\n)")


def strip_line_comments(content: str) -> str:
    """Drop every line whose stripped form starts with ``//``.

    Lines are split on newline characters only. Line order, line endings and blank lines
    are preserved otherwise.
    """
    kept = [
        line
        for line in _LINE_BREAK.split(content)
        if not line.strip().startswith(_COMMENT_MARKER)
    ]
    return "".join(kept)


def render_block(file_name: str, module_name: str, content: str) -> str:
    """Return the annotated block for one file, or an empty string if blank."""
    body = strip_line_comments(content)
    if not body.strip():
        return ""
    if not body.endswith("\n"):
        body += "\n"
    return (
        f"// module: {module_name}\n"
        f"// file: {file_name}\n"
        f"{body}"
        f"// end of file: {file_name}\n"
        "\n"
    )


class BlockWriter:
    """Appends rendered blocks to an open text stream."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write(self, file_name: str, module_name: str, content: str) -> bool:
        """Write a block and return True when anything was emitted."""
        block = render_block(file_name, module_name, content)
        if not block:
            return False
        self.stream.write(block)
        return True


__all__ = ["BlockWriter", "render_block", "strip_line_comments"]
