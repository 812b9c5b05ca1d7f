"""Fix mode data models"""

from __future__ import annotations

from pydantic import BaseModel

from .diff import ChangeRegion


class FixErrorRequest(BaseModel):
    """Request to fix code given the stack trace it produced"""

    code: str
    stack_trace: str
    file_path: str | None = None


class CodeRequest(BaseModel):
    """Request carrying only the code (lint, optimize, document)"""

    code: str
    file_path: str | None = None


class CustomEditRequest(BaseModel):
    """Request with a free-form instruction"""

    code: str
    instruction: str
    file_path: str | None = None


class FixResponse(BaseModel):
    """Proposed fix rendered as a merged document"""

    merged_code: str
    code_changes: list[ChangeRegion]
    unified_diff: str
    preview_content: str
    instruction: str
    provider: str
