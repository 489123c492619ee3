"""Workspace and run-log helpers shared by quizkit commands."""

from __future__ import annotations

from .logging import LOGGER_NAME, JsonLogFormatter, RunLog, open_run_log
from .workspace import (
    WORKSPACE_ENV,
    Workspace,
    WorkspaceError,
    open_workspace,
)

__all__ = [
    "LOGGER_NAME",
    "JsonLogFormatter",
    "RunLog",
    "open_run_log",
    "WORKSPACE_ENV",
    "Workspace",
    "WorkspaceError",
    "open_workspace",
]
