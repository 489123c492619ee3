from __future__ import annotations

from pathlib import Path

import pytest

from quizkit.core.workspace import WORKSPACE_ENV
from quizkit.quizzer.config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    Interface,
    QuizConfigError,
    load_config,
    write_config_template,
)


def _env(root: Path, **extra: str) -> dict[str, str]:
    env = {WORKSPACE_ENV: str(root)}
    env.update(extra)
    return env


def _write_config(root: Path, body: str) -> Path:
    path = root / "config" / CONFIG_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path):
    loaded = load_config(env=_env(tmp_path / "ws"))

    assert loaded.config.sample_size == 50
    assert loaded.config.remember_documents is True
    assert loaded.config.interface is Interface.CONSOLE
    assert loaded.config.log_level == "INFO"
    assert loaded.config_path is None
    assert loaded.workspace.home == (tmp_path / "ws").resolve()
    assert loaded.workspace.documents_dir.is_dir()


def test_toml_values_are_applied(tmp_path):
    root = tmp_path / "ws"
    path = _write_config(
        root,
        "[quiz]\nsample_size = 10\nremember_documents = false\n"
        "interface = \"tui\"\n\n[logging]\nlevel = \"debug\"\n",
    )

    loaded = load_config(env=_env(root))

    assert loaded.config_path is not None
    assert loaded.config_path.name == path.name
    assert loaded.config.sample_size == 10
    assert loaded.config.remember_documents is False
    assert loaded.config.interface is Interface.TUI
    assert loaded.config.log_level == "DEBUG"


def test_env_overrides_toml(tmp_path):
    root = tmp_path / "ws"
    _write_config(root, "[quiz]\nsample_size = 10\n")

    loaded = load_config(
        env=_env(
            root,
            QUIZKIT_QUIZ_SAMPLE_SIZE="25",
            QUIZKIT_QUIZ_REMEMBER_DOCUMENTS="no",
            QUIZKIT_QUIZ_INTERFACE="TUI",
        )
    )

    assert loaded.config.sample_size == 25
    assert loaded.config.remember_documents is False
    assert loaded.config.interface is Interface.TUI


def test_cli_overrides_env(tmp_path):
    loaded = load_config(
        env=_env(tmp_path / "ws", QUIZKIT_QUIZ_SAMPLE_SIZE="25"),
        overrides=ConfigOverrides(
            sample_size=5,
            remember_documents=True,
            interface=Interface.CONSOLE,
            log_level="warning",
        ),
    )

    assert loaded.config.sample_size == 5
    assert loaded.config.log_level == "WARNING"


def test_explicit_config_path(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text("[quiz]\nsample_size = 3\n", encoding="utf-8")

    loaded = load_config(config_path=path, env=_env(tmp_path / "ws"))

    assert loaded.config.sample_size == 3


def test_config_path_from_env(tmp_path):
    path = tmp_path / "env.toml"
    path.write_text("[quiz]\nsample_size = 4\n", encoding="utf-8")

    loaded = load_config(
        env=_env(tmp_path / "ws", QUIZKIT_QUIZ_CONFIG=str(path))
    )

    assert loaded.config.sample_size == 4


def test_missing_explicit_config_is_an_error(tmp_path):
    with pytest.raises(QuizConfigError, match="not found"):
        load_config(
            config_path=tmp_path / "absent.toml", env=_env(tmp_path / "ws")
        )


def test_unknown_key_is_rejected(tmp_path):
    root = tmp_path / "ws"
    _write_config(root, "[quiz]\nshuffle = true\n")

    with pytest.raises(QuizConfigError, match="quiz.shuffle"):
        load_config(env=_env(root))


def test_non_table_section_is_rejected(tmp_path):
    root = tmp_path / "ws"
    _write_config(root, "quiz = 5\n")

    with pytest.raises(QuizConfigError, match="Expected table for 'quiz'"):
        load_config(env=_env(root))


def test_unknown_section_is_rejected(tmp_path):
    root = tmp_path / "ws"
    _write_config(root, "[display]\ncolor = true\n")

    with pytest.raises(QuizConfigError, match="'display'"):
        load_config(env=_env(root))


def test_invalid_toml_is_reported(tmp_path):
    root = tmp_path / "ws"
    _write_config(root, "[quiz\n")

    with pytest.raises(QuizConfigError, match="Invalid TOML"):
        load_config(env=_env(root))


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_invalid_sample_size_from_env(tmp_path, value):
    with pytest.raises(QuizConfigError, match="sample_size"):
        load_config(
            env=_env(tmp_path / "ws", QUIZKIT_QUIZ_SAMPLE_SIZE=value)
        )


def test_boolean_sample_size_is_rejected(tmp_path):
    root = tmp_path / "ws"
    _write_config(root, "[quiz]\nsample_size = true\n")

    with pytest.raises(QuizConfigError, match="sample_size"):
        load_config(env=_env(root))


def test_invalid_boolean_and_interface(tmp_path):
    root = tmp_path / "ws"
    with pytest.raises(QuizConfigError, match="remember_documents"):
        load_config(env=_env(root, QUIZKIT_QUIZ_REMEMBER_DOCUMENTS="maybe"))
    with pytest.raises(QuizConfigError, match="Unknown interface"):
        load_config(env=_env(root, QUIZKIT_QUIZ_INTERFACE="web"))


def test_workspace_path_argument_wins(tmp_path):
    loaded = load_config(
        env=_env(tmp_path / "env-ws"), workspace_path=tmp_path / "cli-ws"
    )

    assert loaded.workspace.home == (tmp_path / "cli-ws").resolve()


def test_workspace_file_conflict_is_config_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(QuizConfigError):
        load_config(env=_env(blocker))


def test_write_config_template_round_trips(tmp_path):
    root = tmp_path / "ws"
    target = load_config(env=_env(root)).workspace.config_file

    written = write_config_template(target)
    loaded = load_config(env=_env(root))

    assert written == target
    assert loaded.config_path is not None
    assert loaded.config.sample_size == 50
    with pytest.raises(QuizConfigError, match="already exists"):
        write_config_template(target)
    assert write_config_template(target, overwrite=True) == target


def test_write_config_template_creates_parent(tmp_path):
    target = tmp_path / "nested" / "quiz.toml"

    assert write_config_template(target) == target
    assert "sample_size = 50" in target.read_text(encoding="utf-8")
