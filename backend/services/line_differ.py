"""
Line Differ - Line-level edit script between two versions of a source text
"""

from __future__ import annotations

from models.diff import DiffKind, DiffPart

_MATCH = "match"
_REMOVE = "remove"
_ADD = "add"


def split_lines(text: str) -> list[str]:
    """Split text on newlines, keeping each terminator. A final unterminated line is kept as is."""
    if not text:
        return []
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def _comparison_key(line: str) -> str:
    return line.strip()


# Half-width of the first diagonal band tried; doubled until the result is exact
_INITIAL_SLACK = 16


class _LcsBand:
    """Suffix LCS lengths over the diagonals (j - i) from dlo to dhi.

    Only paths that stay inside the band are counted; cells outside read as -1.
    The band always contains the diagonals of both corners.
    """

    def __init__(self, original: list[int], revised: list[int], slack: int):
        n, m = len(original), len(revised)
        delta = m - n
        self.dlo = min(0, delta) - slack
        self.dhi = max(0, delta) + slack
        self.los = [0] * (n + 1)
        self.rows: list[list[int]] = [[] for _ in range(n + 1)]
        self.cells = 0

        below: list[int] = []
        below_lo = 0
        for i in range(n, -1, -1):
            lo = max(0, i + self.dlo)
            hi = min(m, i + self.dhi)
            row = [0] * (hi - lo + 1)
            if i < n:
                key = original[i]
                below_len = len(below)
                for j in range(min(hi, m - 1), lo - 1, -1):
                    k = j - lo
                    if key == revised[j]:
                        row[k] = below[j + 1 - below_lo] + 1
                    else:
                        down = j - below_lo
                        from_below = below[down] if 0 <= down < below_len else -1
                        from_right = row[k + 1] if j < hi else -1
                        row[k] = from_below if from_below >= from_right else from_right
            self.rows[i] = row
            self.los[i] = lo
            self.cells += len(row)
            below, below_lo = row, lo

    def get(self, i: int, j: int) -> int:
        k = j - self.los[i]
        row = self.rows[i]
        if 0 <= k < len(row):
            return row[k]
        return -1


def _align(original: list[int], revised: list[int]) -> list[tuple[str, int, int]]:
    """LCS alignment over interned comparison keys.

    Returns (op, i, j) tuples in order. Equal heads are always matched, which
    yields the earliest possible match positions; on a tie between dropping an
    original line and taking a revised one, the original line goes first.

    The table only covers a band of diagonals around the corners. A band whose
    edit count fits inside it holds every optimal path, so the walk below makes
    the same choices a full table would; otherwise the band is doubled.
    """
    n, m = len(original), len(revised)

    slack = _INITIAL_SLACK
    while True:
        table = _LcsBand(original, revised, slack)
        edits = n + m - 2 * table.get(0, 0)
        if edits <= abs(m - n) + 2 * slack:
            break
        slack *= 2

    ops: list[tuple[str, int, int]] = []
    i = j = 0
    while i < n and j < m:
        if original[i] == revised[j]:
            ops.append((_MATCH, i, j))
            i += 1
            j += 1
        elif table.get(i + 1, j) >= table.get(i, j + 1):
            ops.append((_REMOVE, i, j))
            i += 1
        else:
            ops.append((_ADD, i, j))
            j += 1
    ops.extend((_REMOVE, k, m) for k in range(i, n))
    ops.extend((_ADD, n, k) for k in range(j, m))
    return ops


def diff_lines(original: str, revised: str) -> list[DiffPart]:
    """Compute the line-level edit script turning `original` into `revised`.

    Lines are aligned ignoring surrounding whitespace, but a pair is only
    reported as unchanged when both lines are byte-identical, so joining the
    non-added parts gives back `original` and joining the non-removed parts
    gives back `revised`. Within a changed run, removed lines precede added
    lines and consecutive parts never share a kind.
    """
    old_lines = split_lines(original)
    new_lines = split_lines(revised)

    prefix = 0
    while prefix < len(old_lines) and prefix < len(new_lines) and old_lines[prefix] == new_lines[prefix]:
        prefix += 1

    keys: dict[str, int] = {}
    ops = _align(
        [keys.setdefault(_comparison_key(line), len(keys)) for line in old_lines[prefix:]],
        [keys.setdefault(_comparison_key(line), len(keys)) for line in new_lines[prefix:]],
    )

    parts: list[DiffPart] = []
    unchanged: list[str] = list(old_lines[:prefix])
    removed: list[str] = []
    added: list[str] = []

    def flush_changes():
        if removed:
            parts.append(DiffPart(text="".join(removed), kind=DiffKind.REMOVED))
            removed.clear()
        if added:
            parts.append(DiffPart(text="".join(added), kind=DiffKind.ADDED))
            added.clear()

    def flush_unchanged():
        if unchanged:
            parts.append(DiffPart(text="".join(unchanged), kind=DiffKind.UNCHANGED))
            unchanged.clear()

    for op, i, j in ops:
        old_line = old_lines[prefix + i] if op != _ADD else None
        new_line = new_lines[prefix + j] if op != _REMOVE else None

        if op == _MATCH and old_line == new_line:
            flush_changes()
            unchanged.append(old_line)
            continue

        flush_unchanged()
        if old_line is not None:
            removed.append(old_line)
        if new_line is not None:
            added.append(new_line)

    flush_unchanged()
    flush_changes()
    return parts
