"""
Tests for services.workspace - command execution and file saving
"""

from __future__ import annotations

import asyncio
import shlex
import sys

import pytest

from services.workspace import WorkspaceService


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "proj").mkdir()
    return WorkspaceService({"workspace": {"rootDir": str(tmp_path), "commandTimeout": 10}})


def _python(script: str) -> str:
    return f"{shlex.quote(sys.executable)} {script}"


def test_build_argv_resolves_first_argument(workspace, tmp_path):
    argv = workspace.build_argv("python main.py --verbose", "proj")

    assert argv == ["python", str(tmp_path / "proj" / "main.py"), "--verbose"]


def test_build_argv_keeps_absolute_paths(workspace, tmp_path):
    target = tmp_path / "elsewhere.py"

    assert workspace.build_argv(f"python {target}", "proj") == ["python", str(target)]


def test_build_argv_single_token(workspace):
    assert workspace.build_argv("ls") == ["ls"]


def test_run_command_captures_output(workspace, tmp_path):
    (tmp_path / "proj" / "boom.py").write_text("print('hi')\n1 / 0\n")

    result = asyncio.run(workspace.run_command(_python("boom.py"), "proj"))

    assert "hi" in result.stdout
    assert "ZeroDivisionError" in result.stderr
    assert result.return_code != 0


def test_run_command_success(workspace, tmp_path):
    (tmp_path / "proj" / "ok.py").write_text("print('fine')\n")

    result = asyncio.run(workspace.run_command(_python("ok.py"), "proj"))

    assert result.stdout.strip() == "fine"
    assert result.return_code == 0


def test_run_command_blank(workspace):
    result = asyncio.run(workspace.run_command(""))

    assert result.stdout == ""
    assert result.return_code is None


def test_run_command_missing_executable(workspace):
    result = asyncio.run(workspace.run_command("definitely-not-a-real-command-xyz"))

    assert result.return_code == -1
    assert result.stderr


def test_run_command_unbalanced_quotes(workspace):
    result = asyncio.run(workspace.run_command('echo "unterminated'))

    assert result.return_code == -1
    assert "Invalid command" in result.stderr


def test_run_command_timeout(tmp_path):
    (tmp_path / "slow.py").write_text("import time\ntime.sleep(30)\n")
    workspace = WorkspaceService({"workspace": {"rootDir": str(tmp_path), "commandTimeout": 0.5}})

    result = asyncio.run(workspace.run_command(_python("slow.py")))

    assert "timed out" in result.stderr
    assert result.return_code != 0


def test_save_file_joins_lines(workspace, tmp_path):
    result = workspace.save_file(["a = 1", "", "print(a)"], "proj/out.py")

    assert result.success is True
    assert result.path == str(tmp_path / "proj" / "out.py")
    assert (tmp_path / "proj" / "out.py").read_text() == "a = 1\n\nprint(a)"


def test_save_file_failure_is_reported(workspace, tmp_path):
    (tmp_path / "blocker").write_text("not a directory")

    result = workspace.save_file(["x"], "blocker/out.py")

    assert result.success is False
    assert result.error
