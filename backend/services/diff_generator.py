"""
Diff Generator Service - Merge proposed fixes into the submitted code
"""

from __future__ import annotations

from difflib import unified_diff

from models.diff import AnnotatedDiff, DiffResult

from .exceptions import MarkerCollision
from .line_differ import diff_lines
from .merge_annotator import annotate, find_marker_lines
from .region_extractor import extract_regions


def check_marker_free(text: str, side: str):
    """Raise MarkerCollision if a line of text would be mistaken for a marker"""
    collisions = find_marker_lines(text)
    if collisions:
        raise MarkerCollision(
            f"The {side} code contains an annotation marker line at line {collisions[0]}; "
            "submit plain code, not a merged document",
            side=side,
            line_number=collisions[0],
        )


def diff_and_annotate(original: str, revised: str) -> AnnotatedDiff:
    """Diff two texts, render the merged document and locate its hunks.

    Texts holding a line identical to a marker are rejected with
    MarkerCollision, since the merged document could not be read back.
    """
    check_marker_free(original, "original")
    check_marker_free(revised, "revised")

    parts = diff_lines(original, revised)
    annotated = annotate(parts)
    return AnnotatedDiff(
        annotated=annotated,
        regions=extract_regions(annotated),
        parts=parts,
    )


class DiffGenerator:
    """Generate merged documents and unified diffs for code modifications"""

    def generate_diff(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
    ) -> DiffResult:
        """Generate structured diff from original and new content"""
        merged = diff_and_annotate(original_content, new_content)

        print(f"[DiffGenerator] {file_path}: {len(merged.regions)} change(s)")
        for region in merged.regions:
            print(
                f"[DiffGenerator]   lines {region.start_line}-{region.end_line}: "
                f"{len(region.old_lines)} removed, {len(region.new_lines)} added"
            )

        return DiffResult(
            file_path=file_path,
            merged_code=merged.annotated,
            code_changes=merged.regions,
            unified_diff=self.generate_unified_diff(original_content, new_content, file_path),
            preview_content=new_content,
        )

    def generate_unified_diff(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
    ) -> str:
        """Standard unified diff between the two versions"""
        original_lines = original_content.splitlines(keepends=True)
        new_lines = new_content.splitlines(keepends=True)

        # Ensure last lines have newlines for proper diff
        if original_lines and not original_lines[-1].endswith("\n"):
            original_lines[-1] += "\n"
        if new_lines and not new_lines[-1].endswith("\n"):
            new_lines[-1] += "\n"

        return "".join(
            unified_diff(
                original_lines,
                new_lines,
                fromfile=f"a/{file_path}",
                tofile=f"b/{file_path}",
            )
        )
