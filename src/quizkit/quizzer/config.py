"""Configuration loader for quiz sessions."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from quizkit.core import workspace as workspace_mod
from quizkit.core.workspace import CONFIG_FILENAME

from .sampler import SAMPLE_SIZE

__all__ = [
    "CONFIG_FILENAME",
    "ENV_PREFIX",
    "CONFIG_TEMPLATE",
    "QuizConfigError",
    "Interface",
    "QuizConfig",
    "ConfigOverrides",
    "LoadResult",
    "load_config",
    "write_config_template",
]

ENV_PREFIX = "QUIZKIT_QUIZ_"

_DEFAULT_LOG_LEVEL = "INFO"

CONFIG_TEMPLATE = """\
# quizkit quiz configuration

[quiz]
# Questions drawn per session; the score is always out of this number.
sample_size = 50
# Keep the last questions/answers documents for the next run.
remember_documents = true
# "console" (Rich prompt) or "tui" (Textual app).
interface = "console"

[logging]
level = "INFO"
"""


class QuizConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


class Interface(Enum):
    """Front ends able to run a quiz session."""

    CONSOLE = "console"
    TUI = "tui"

    @classmethod
    def from_value(cls, value: str) -> "Interface":
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise QuizConfigError(
            f"Unknown interface '{value}'. Expected one of: {expected}."
        )


@dataclass(frozen=True)
class QuizConfig:
    """Fully resolved configuration for a quiz run."""

    sample_size: int
    remember_documents: bool
    interface: Interface
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    sample_size: Optional[int] = None
    remember_documents: Optional[bool] = None
    interface: Optional[Interface] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    """Result of loading configuration, including workspace context."""

    config: QuizConfig
    workspace: workspace_mod.Workspace
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        workspace = workspace_mod.open_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise QuizConfigError(str(exc)) from exc
    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=workspace.config_file,
    )

    options = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        loaded_path = requested_path
        _apply_file(options, requested_path)
    elif config_path is not None or _parse_env_string(env_map, "CONFIG"):
        raise QuizConfigError(f"Config file not found: {requested_path}")

    sample_size = _resolve_sample_size(
        _pick_first(
            overrides.sample_size,
            _parse_env_string(env_map, "SAMPLE_SIZE"),
            options["quiz"]["sample_size"],
        )
    )
    remember = _resolve_bool(
        "quiz.remember_documents",
        _pick_first(
            overrides.remember_documents,
            _parse_env_string(env_map, "REMEMBER_DOCUMENTS"),
            options["quiz"]["remember_documents"],
        ),
    )
    interface = _resolve_interface(
        _pick_first(
            overrides.interface,
            _parse_env_string(env_map, "INTERFACE"),
            options["quiz"]["interface"],
        )
    )
    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _parse_env_string(env_map, "LOG_LEVEL"),
            options["logging"]["level"],
        )
    )

    config = QuizConfig(
        sample_size=sample_size,
        remember_documents=remember,
        interface=interface,
        log_level=log_level,
    )
    return LoadResult(
        config=config, workspace=workspace, config_path=loaded_path
    )


def write_config_template(path: Path, *, overwrite: bool = False) -> Path:
    """Write the commented default configuration to ``path``."""

    if path.exists() and not overwrite:
        raise QuizConfigError(f"Config already exists: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        raise QuizConfigError(f"Cannot write config {path}: {exc}") from exc
    return path


def _apply_file(
    options: MutableMapping[str, MutableMapping[str, object]], path: Path
) -> None:
    """Overlay the tables of the TOML file at ``path`` onto ``options``.

    Only the sections and keys present in ``options`` are accepted.
    """
    try:
        with path.open("rb") as handle:
            document: dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise QuizConfigError(f"Cannot read config {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise QuizConfigError(f"Invalid TOML in {path}: {exc}") from exc

    for section, values in document.items():
        if section not in options:
            raise QuizConfigError(f"Unknown configuration key '{section}'.")
        if not isinstance(values, dict):
            raise QuizConfigError(
                f"Expected table for '{section}', found "
                f"{type(values).__name__}."
            )
        table = options[section]
        for key, value in values.items():
            if key not in table:
                raise QuizConfigError(
                    f"Unknown configuration key '{section}.{key}'."
                )
            table[key] = value


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "quiz": {
            "sample_size": SAMPLE_SIZE,
            "remember_documents": True,
            "interface": Interface.CONSOLE.value,
        },
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _parse_env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_sample_size(value: object) -> int:
    if isinstance(value, bool):
        raise QuizConfigError("quiz.sample_size must be an integer.")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise QuizConfigError(
                f"quiz.sample_size must be an integer, got '{value}'."
            ) from exc
    if not isinstance(value, int):
        raise QuizConfigError("quiz.sample_size must be an integer.")
    if value <= 0:
        raise QuizConfigError("quiz.sample_size must be greater than zero.")
    return value


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _resolve_bool(key: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise QuizConfigError(f"{key} must be a boolean.")


def _resolve_interface(value: object) -> Interface:
    if isinstance(value, Interface):
        return value
    if isinstance(value, str):
        return Interface.from_value(value)
    raise QuizConfigError("quiz.interface must be a string.")


def _resolve_log_level(value: object) -> str:
    if not isinstance(value, str):
        raise QuizConfigError("logging.level must be a string.")
    level = value.strip()
    if not level:
        raise QuizConfigError("logging.level must be a non-empty string.")
    return level.upper()


def _parse_env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
