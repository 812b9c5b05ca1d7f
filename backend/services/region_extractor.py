"""
Region Extractor - Locate every hunk of an annotated document by line number
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from models.diff import ChangeRegion

from .exceptions import MalformedAnnotation
from .merge_annotator import CLOSE_MARKER, OPEN_MARKER, SEPARATOR


class ScanState(str, Enum):
    """Where the scan is relative to the current hunk"""

    IDLE = "idle"
    IN_OLD = "in_old"  # after the open marker
    IN_NEW = "in_new"  # after the separator


@dataclass
class _PendingHunk:
    start_line: int
    old_lines: list[int] = field(default_factory=list)
    merge_line: int | None = None
    new_lines: list[int] = field(default_factory=list)

    def close(self, end_line: int) -> ChangeRegion:
        return ChangeRegion(
            start_line=self.start_line,
            old_lines=self.old_lines,
            merge_line=self.merge_line,
            new_lines=self.new_lines,
            end_line=end_line,
        )


def annotated_lines(annotated: str) -> list[str]:
    """Split on newlines; a trailing newline does not start another line"""
    lines = annotated.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def extract_regions(annotated: str) -> list[ChangeRegion]:
    """Scan the annotated text once and return one region per hunk, in order.

    Line numbers are 1-indexed. Marker lines out of order, nested hunks and a
    hunk left open at the end raise MalformedAnnotation.
    """
    regions: list[ChangeRegion] = []
    state = ScanState.IDLE
    hunk: _PendingHunk | None = None

    for number, line in enumerate(annotated_lines(annotated), start=1):
        if line == OPEN_MARKER:
            if state is not ScanState.IDLE:
                raise MalformedAnnotation(
                    f"Open marker at line {number} inside the hunk opened at line {hunk.start_line}",
                    line_number=number,
                    state=state.value,
                )
            hunk = _PendingHunk(start_line=number)
            state = ScanState.IN_OLD

        elif line == SEPARATOR:
            if state is not ScanState.IN_OLD:
                raise MalformedAnnotation(
                    f"Separator at line {number} without an open hunk awaiting it",
                    line_number=number,
                    state=state.value,
                )
            hunk.merge_line = number
            state = ScanState.IN_NEW

        elif line == CLOSE_MARKER:
            if state is not ScanState.IN_NEW:
                raise MalformedAnnotation(
                    f"Close marker at line {number} before a separator",
                    line_number=number,
                    state=state.value,
                )
            regions.append(hunk.close(number))
            hunk = None
            state = ScanState.IDLE

        elif state is ScanState.IN_OLD:
            hunk.old_lines.append(number)

        elif state is ScanState.IN_NEW:
            hunk.new_lines.append(number)

    if hunk is not None:
        raise MalformedAnnotation(
            f"Hunk opened at line {hunk.start_line} is never closed",
            line_number=hunk.start_line,
            state=state.value,
        )

    return regions
