"""
Tests for services.region_extractor - locating hunks in an annotated document
"""

from __future__ import annotations

import pytest

from services.exceptions import MalformedAnnotation
from services.merge_annotator import CLOSE_MARKER, OPEN_MARKER, SEPARATOR
from services.region_extractor import ScanState, annotated_lines, extract_regions


def _doc(*lines: str) -> str:
    return "".join(line + "\n" for line in lines)


def test_annotated_lines_ignores_trailing_newline():
    assert annotated_lines("a\nb\n") == ["a", "b"]
    assert annotated_lines("a\nb") == ["a", "b"]
    assert annotated_lines("") == []


def test_no_markers_no_regions():
    assert extract_regions("a\nb\nc\n") == []
    assert extract_regions("") == []


def test_single_hunk_line_numbers():
    annotated = _doc("a", OPEN_MARKER, "b", SEPARATOR, "x", CLOSE_MARKER, "c")

    [region] = extract_regions(annotated)

    assert region.start_line == 2
    assert region.old_lines == [3]
    assert region.merge_line == 4
    assert region.new_lines == [5]
    assert region.end_line == 6


def test_empty_blocks():
    annotated = _doc(OPEN_MARKER, SEPARATOR, "new1", "new2", CLOSE_MARKER, OPEN_MARKER, "old", SEPARATOR, CLOSE_MARKER)

    insertion, deletion = extract_regions(annotated)

    assert insertion.old_lines == []
    assert insertion.merge_line == 2
    assert insertion.new_lines == [3, 4]
    assert deletion.old_lines == [7]
    assert deletion.merge_line == 8
    assert deletion.new_lines == []


def test_regions_in_document_order():
    annotated = _doc(
        OPEN_MARKER, "a", SEPARATOR, "b", CLOSE_MARKER,
        "same",
        OPEN_MARKER, "c", SEPARATOR, "d", CLOSE_MARKER,
    )

    first, second = extract_regions(annotated)

    assert first.end_line < second.start_line
    assert second.old_lines == [8]
    assert second.new_lines == [10]


def test_separator_while_idle():
    with pytest.raises(MalformedAnnotation, match="Separator at line 2") as exc_info:
        extract_regions(_doc("a", SEPARATOR))

    assert exc_info.value.line_number == 2
    assert exc_info.value.state == ScanState.IDLE.value


def test_close_before_separator():
    with pytest.raises(MalformedAnnotation) as exc_info:
        extract_regions(_doc(OPEN_MARKER, "a", CLOSE_MARKER))

    assert exc_info.value.line_number == 3
    assert exc_info.value.state == ScanState.IN_OLD.value


def test_close_while_idle():
    with pytest.raises(MalformedAnnotation):
        extract_regions(_doc("a", CLOSE_MARKER))


def test_nested_open():
    with pytest.raises(MalformedAnnotation, match="inside the hunk opened at line 1"):
        extract_regions(_doc(OPEN_MARKER, "a", SEPARATOR, OPEN_MARKER))


def test_second_separator():
    with pytest.raises(MalformedAnnotation) as exc_info:
        extract_regions(_doc(OPEN_MARKER, SEPARATOR, SEPARATOR, CLOSE_MARKER))

    assert exc_info.value.state == ScanState.IN_NEW.value


def test_unclosed_hunk():
    with pytest.raises(MalformedAnnotation, match="never closed") as exc_info:
        extract_regions(_doc("a", OPEN_MARKER, "b", SEPARATOR, "c"))

    assert exc_info.value.line_number == 2


def test_malformed_annotation_is_a_value_error():
    with pytest.raises(ValueError):
        extract_regions(_doc(SEPARATOR))


def test_marker_detection_is_exact_line_match():
    """Lines that merely contain marker text are ordinary content."""
    annotated = _doc(f"# {OPEN_MARKER}", f"{SEPARATOR} ", "x" + CLOSE_MARKER)

    assert extract_regions(annotated) == []


def test_extraction_is_idempotent():
    annotated = _doc("a", OPEN_MARKER, "b", SEPARATOR, "x", CLOSE_MARKER, OPEN_MARKER, SEPARATOR, "y", CLOSE_MARKER)

    assert extract_regions(annotated) == extract_regions(annotated)
