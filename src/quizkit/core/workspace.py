"""Locate and prepare the quizkit data directory.

Everything a quiz run keeps between invocations lives under one root::

    ~/.quizkit-data/
        config/quizzer.toml      quiz settings
        logs/quiz.log            JSON-lines run log
        documents/               last questions/answers documents

``QUIZKIT_DATA_HOME`` or an explicit path moves the root. Only the default
location falls back to the temp directory when it cannot be written.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

__all__ = [
    "WORKSPACE_ENV",
    "DEFAULT_WORKSPACE",
    "CONFIG_FILENAME",
    "LOG_FILENAME",
    "WorkspaceError",
    "Workspace",
    "open_workspace",
]

WORKSPACE_ENV = "QUIZKIT_DATA_HOME"
DEFAULT_WORKSPACE = Path.home() / ".quizkit-data"
CONFIG_FILENAME = "quizzer.toml"
LOG_FILENAME = "quiz.log"

AREAS = ("config", "logs", "documents")


class WorkspaceError(RuntimeError):
    """Raised when no usable workspace directory can be prepared."""


@dataclass(frozen=True)
class Workspace:
    """A prepared workspace root.

    ``created`` names the directories (``home`` and the areas) that did not
    exist before :func:`open_workspace` ran.
    """

    home: Path
    created: frozenset[str] = frozenset()

    @property
    def config_dir(self) -> Path:
        return self.home / "config"

    @property
    def logs_dir(self) -> Path:
        return self.home / "logs"

    @property
    def documents_dir(self) -> Path:
        return self.home / "documents"

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def log_file(self) -> Path:
        return self.logs_dir / LOG_FILENAME

    def areas(self) -> tuple[tuple[str, Path], ...]:
        return tuple((name, self.home / name) for name in AREAS)


def open_workspace(
    *,
    env: Optional[Mapping[str, str]] = None,
    path: Optional[Path] = None,
) -> Workspace:
    """Create the workspace directories if needed and return the workspace.

    ``path`` wins over ``QUIZKIT_DATA_HOME`` in ``env`` (``os.environ`` by
    default), which wins over :data:`DEFAULT_WORKSPACE`.
    """
    env_map = os.environ if env is None else env
    home, pinned = _choose_home(env_map, path)
    candidates = [home] if pinned else [home, _fallback_home()]

    failure: Optional[PermissionError] = None
    for candidate in candidates:
        try:
            return _prepare(candidate)
        except PermissionError as exc:
            failure = exc
    raise WorkspaceError(f"Unable to prepare workspace at {home}") from failure


def _choose_home(
    env: Mapping[str, str], path: Optional[Path]
) -> tuple[Path, bool]:
    if path is not None:
        return path.expanduser().resolve(), True
    configured = (env.get(WORKSPACE_ENV) or "").strip()
    if configured:
        return Path(configured).expanduser().resolve(), True
    return DEFAULT_WORKSPACE.expanduser().resolve(), False


def _fallback_home() -> Path:
    return Path(tempfile.gettempdir()) / "quizkit-data"


def _prepare(home: Path) -> Workspace:
    targets = [("home", home)] + [(name, home / name) for name in AREAS]
    created: set[str] = set()
    for name, target in targets:
        if target.is_dir():
            continue
        if target.exists():
            raise WorkspaceError(
                f"Expected a directory for '{name}' but found a file: "
                f"{target}"
            )
        target.mkdir(parents=True, exist_ok=True)
        try:
            target.chmod(0o700)
        except PermissionError:  # pragma: no cover - depends on filesystem
            pass
        created.add(name)
    return Workspace(home=home, created=frozenset(created))
