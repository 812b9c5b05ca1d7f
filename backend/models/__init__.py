"""Models module - Pydantic data models"""

from .diff import AnnotatedDiff, ChangeRegion, DiffKind, DiffPart, DiffResult
from .fix import CodeRequest, CustomEditRequest, FixErrorRequest, FixResponse
from .workspace import (
    RunCommandRequest,
    RunCommandResponse,
    SaveFileRequest,
    SaveFileResponse,
)

__all__ = [
    # Diff models
    "AnnotatedDiff",
    "ChangeRegion",
    "DiffKind",
    "DiffPart",
    "DiffResult",
    # Fix models
    "CodeRequest",
    "CustomEditRequest",
    "FixErrorRequest",
    "FixResponse",
    # Workspace models
    "RunCommandRequest",
    "RunCommandResponse",
    "SaveFileRequest",
    "SaveFileResponse",
]
