"""Routers module - FastAPI route handlers"""

from . import config, fix, workspace

__all__ = ["config", "fix", "workspace"]
