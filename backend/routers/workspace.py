"""Workspace API endpoints - commands and file saving"""

from __future__ import annotations

from fastapi import APIRouter

from models.workspace import (
    RunCommandRequest,
    RunCommandResponse,
    SaveFileRequest,
    SaveFileResponse,
)
from services.config_manager import ConfigManager
from services.workspace import WorkspaceService

router = APIRouter()


@router.post("/run-command", response_model=RunCommandResponse)
async def run_command(request: RunCommandRequest) -> RunCommandResponse:
    """Run a command from the client's terminal pane"""
    config = ConfigManager.get_instance().get_config()
    return await WorkspaceService(config).run_command(request.command, request.curr_dir)


@router.post("/save-file", response_model=SaveFileResponse)
async def save_file(request: SaveFileRequest) -> SaveFileResponse:
    """Save editor content to disk"""
    config = ConfigManager.get_instance().get_config()
    return WorkspaceService(config).save_file(request.code, request.file_path)
