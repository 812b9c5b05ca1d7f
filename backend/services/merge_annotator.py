"""
Merge Annotator - Render an edit script as one document with inline hunks

A hunk is rendered as:

    >>>OLD CODE<<<
    <old content>
    >>>==========<<<
    <new content>
    >>>FIXED CODE<<<

The region extractor detects hunks with these same constants.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from models.diff import DiffKind, DiffPart

OPEN_MARKER = ">>>OLD CODE<<<"
SEPARATOR = ">>>==========<<<"
CLOSE_MARKER = ">>>FIXED CODE<<<"

MARKERS = (OPEN_MARKER, SEPARATOR, CLOSE_MARKER)


class _HunkState(Enum):
    IDLE = "idle"
    AWAITING_NEW = "awaiting_new"  # old block and separator written, new block pending


def annotate(parts: Iterable[DiffPart]) -> str:
    """Fold the edit script into a merged document.

    Removed content opens a hunk and is followed by the separator; added
    content fills the new block of the open hunk, or opens a hunk with an
    empty old block when none is open. A hunk that only removed lines is
    closed with an empty new block.
    """
    out: list[str] = []
    state = _HunkState.IDLE

    def write_marker(marker: str):
        # Markers must sit on their own line even after an unterminated last line
        if out and not out[-1].endswith("\n"):
            out.append("\n")
        out.append(marker + "\n")

    for part in parts:
        if not part.text:
            continue

        if part.kind == DiffKind.UNCHANGED:
            if state is _HunkState.AWAITING_NEW:
                write_marker(CLOSE_MARKER)
                state = _HunkState.IDLE
            out.append(part.text)

        elif part.kind == DiffKind.REMOVED:
            if state is _HunkState.AWAITING_NEW:
                write_marker(CLOSE_MARKER)
            write_marker(OPEN_MARKER)
            out.append(part.text)
            write_marker(SEPARATOR)
            state = _HunkState.AWAITING_NEW

        elif part.kind == DiffKind.ADDED:
            if state is _HunkState.IDLE:
                write_marker(OPEN_MARKER)
                write_marker(SEPARATOR)
            out.append(part.text)
            write_marker(CLOSE_MARKER)
            state = _HunkState.IDLE

    if state is _HunkState.AWAITING_NEW:
        write_marker(CLOSE_MARKER)

    return "".join(out)


def find_marker_lines(text: str) -> list[int]:
    """1-indexed numbers of lines that would be read back as marker lines"""
    return [number for number, line in enumerate(text.split("\n"), start=1) if line in MARKERS]
