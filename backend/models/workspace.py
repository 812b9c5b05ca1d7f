"""Workspace data models - command execution and file saving"""

from __future__ import annotations

from pydantic import BaseModel


class RunCommandRequest(BaseModel):
    """Request to run a command from the client's terminal pane"""

    command: str
    curr_dir: str = ""


class RunCommandResponse(BaseModel):
    """Captured output of a command"""

    command: str
    stdout: str = ""
    stderr: str = ""
    return_code: int | None = None


class SaveFileRequest(BaseModel):
    """Request to save editor content, one entry per line"""

    code: list[str]
    file_path: str


class SaveFileResponse(BaseModel):
    """Outcome of a save"""

    success: bool
    path: str | None = None
    error: str | None = None
