from __future__ import annotations

import pytest

from services.config_manager import ConfigManager
from services.merge_annotator import CLOSE_MARKER, OPEN_MARKER, SEPARATOR


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config singleton at a throwaway directory for every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("CODE_FIX_CONFIG_DIR", str(config_dir))
    ConfigManager.reset_instance()
    yield config_dir
    ConfigManager.reset_instance()


def _reconstruct(annotated: str, side: str) -> str:
    """Rebuild one side from an annotated document.

    side="original" keeps unchanged and old-content lines, side="revised"
    keeps unchanged and new-content lines.
    """
    pieces = annotated.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])

    kept = []
    block = None
    for line in lines:
        bare = line.rstrip("\n")
        if bare == OPEN_MARKER:
            block = "old"
        elif bare == SEPARATOR:
            block = "new"
        elif bare == CLOSE_MARKER:
            block = None
        elif block is None:
            kept.append(line)
        elif block == "old" and side == "original":
            kept.append(line)
        elif block == "new" and side == "revised":
            kept.append(line)
    return "".join(kept)


@pytest.fixture
def reconstruct():
    return _reconstruct
