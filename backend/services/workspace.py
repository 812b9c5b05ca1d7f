"""
Workspace Service - Run commands and save files for the client
"""

from __future__ import annotations

import asyncio
import os
import shlex
from pathlib import Path
from typing import Any

from models.workspace import RunCommandResponse, SaveFileResponse


class WorkspaceService:
    """Command execution and file saving relative to a workspace root"""

    def __init__(self, config: dict[str, Any]):
        cfg = config.get("workspace", {})
        self.root = Path(os.path.expanduser(cfg.get("rootDir", "~")))
        self.command_timeout = cfg.get("commandTimeout", 30)

    def resolve(self, *parts: str) -> Path:
        """Resolve a path against the workspace root (absolute parts win)"""
        return Path(os.path.normpath(self.root.joinpath(*parts)))

    def build_argv(self, command: str, curr_dir: str = "") -> list[str]:
        """Tokenize a command; its first argument is a path relative to curr_dir"""
        argv = shlex.split(command)
        if len(argv) > 1:
            argv[1] = str(self.resolve(curr_dir, argv[1]))
        return argv

    async def run_command(self, command: str, curr_dir: str = "") -> RunCommandResponse:
        """Run a command without a shell and capture its output"""
        if command.strip() == "":
            return RunCommandResponse(command=command)

        try:
            argv = self.build_argv(command, curr_dir)
        except ValueError as e:
            return RunCommandResponse(command=command, stderr=f"Invalid command: {e}", return_code=-1)

        work_dir = self.resolve(curr_dir)
        print(f"[Workspace] Running: {' '.join(argv)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(work_dir) if work_dir.is_dir() else None,
            )
        except OSError as e:
            return RunCommandResponse(command=command, stderr=str(e), return_code=-1)

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.command_timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            return RunCommandResponse(
                command=command,
                stderr=f"Command timed out after {self.command_timeout}s",
                return_code=process.returncode if process.returncode is not None else -1,
            )

        return RunCommandResponse(
            command=command,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            return_code=process.returncode,
        )

    def save_file(self, code: list[str], file_path: str) -> SaveFileResponse:
        """Write editor lines to file_path, joined with newlines"""
        full_path = self.resolve(file_path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text("\n".join(code), encoding="utf-8")
        except OSError as e:
            print(f"[Workspace] Failed to save {full_path}: {e}")
            return SaveFileResponse(success=False, path=str(full_path), error=str(e))

        print(f"[Workspace] Saved {full_path}")
        return SaveFileResponse(success=True, path=str(full_path))
