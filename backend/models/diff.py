"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DiffKind(str, Enum):
    """Classification of a run of lines in the edit script"""

    UNCHANGED = "unchanged"
    REMOVED = "removed"
    ADDED = "added"


class DiffPart(BaseModel):
    """A run of whole lines (verbatim, newline-terminated) sharing one kind"""

    text: str
    kind: DiffKind


class ChangeRegion(BaseModel):
    """Location of one hunk inside the annotated document (1-indexed lines)"""

    start_line: int  # open marker
    old_lines: list[int] = []
    merge_line: int  # separator
    new_lines: list[int] = []
    end_line: int  # close marker


class AnnotatedDiff(BaseModel):
    """Merged document with inline hunks plus the regions locating them"""

    annotated: str
    regions: list[ChangeRegion]
    parts: list[DiffPart] = []


class DiffResult(BaseModel):
    """Complete diff result for a file"""

    file_path: str
    merged_code: str  # Annotated document shown to the user
    code_changes: list[ChangeRegion]
    unified_diff: str  # Standard unified diff format
    preview_content: str  # Full file with changes applied
