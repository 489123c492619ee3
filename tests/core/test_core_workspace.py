from __future__ import annotations

from pathlib import Path

import pytest

from quizkit.core import workspace


@pytest.fixture
def env_root(tmp_path, monkeypatch):
    root = tmp_path / "quizkit-data"
    monkeypatch.setenv(workspace.WORKSPACE_ENV, str(root))
    return root


def test_creates_quiz_directories(env_root):
    ws = workspace.open_workspace()

    assert ws.home == env_root.resolve()
    assert [name for name, _ in ws.areas()] == [
        "config",
        "logs",
        "documents",
    ]
    assert all(path.is_dir() for _, path in ws.areas())
    assert ws.created == {"home", "config", "logs", "documents"}


def test_quiz_files_live_in_their_areas(env_root):
    ws = workspace.open_workspace()

    assert ws.config_file == ws.config_dir / "quizzer.toml"
    assert ws.log_file == ws.logs_dir / "quiz.log"
    assert ws.documents_dir == env_root.resolve() / "documents"
    assert not ws.config_file.exists()


def test_second_open_reports_nothing_created(env_root):
    workspace.open_workspace()

    assert workspace.open_workspace().created == frozenset()


def test_missing_area_is_recreated(env_root):
    workspace.open_workspace()
    (env_root / "logs").rmdir()

    assert workspace.open_workspace().created == {"logs"}


def test_path_argument_overrides_env(env_root, tmp_path):
    custom = tmp_path / "elsewhere"

    ws = workspace.open_workspace(path=custom)

    assert ws.home == custom.resolve()
    assert not env_root.exists()


def test_env_mapping_is_honoured(tmp_path):
    home = tmp_path / "mapped"

    ws = workspace.open_workspace(env={workspace.WORKSPACE_ENV: str(home)})

    assert ws.documents_dir == home.resolve() / "documents"


def test_file_in_place_of_workspace(env_root):
    env_root.write_text("not a directory", encoding="utf-8")

    with pytest.raises(workspace.WorkspaceError, match="'home'"):
        workspace.open_workspace()


def test_file_in_place_of_area(env_root):
    env_root.mkdir()
    (env_root / "logs").write_text("oops", encoding="utf-8")

    with pytest.raises(workspace.WorkspaceError, match="'logs'"):
        workspace.open_workspace()


def test_default_workspace_falls_back_on_permission(tmp_path, monkeypatch):
    fallback = tmp_path / "fallback"
    real_prepare = workspace._prepare

    def guarded(home: Path):
        if home == workspace.DEFAULT_WORKSPACE.resolve():
            raise PermissionError("read-only home")
        return real_prepare(home)

    monkeypatch.delenv(workspace.WORKSPACE_ENV, raising=False)
    monkeypatch.setattr(workspace, "_fallback_home", lambda: fallback)
    monkeypatch.setattr(workspace, "_prepare", guarded)

    ws = workspace.open_workspace(env={})

    assert ws.home == fallback
    assert ws.config_dir.is_dir()


def test_pinned_workspace_does_not_fall_back(tmp_path, monkeypatch):
    def deny(home: Path):
        raise PermissionError("nope")

    monkeypatch.setattr(workspace, "_prepare", deny)

    with pytest.raises(workspace.WorkspaceError, match="Unable to prepare"):
        workspace.open_workspace(path=tmp_path / "pinned")
