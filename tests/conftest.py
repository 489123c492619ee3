from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Ensure src/ is importable when the package is not installed
ROOT = TESTS_DIR.parent
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from fixtures import ANSWERS_TEXT, QUESTIONS_TEXT  # noqa: E402
from quizkit.core.workspace import WORKSPACE_ENV  # noqa: E402

_QUIZ_ENV_KEYS = (
    "QUIZKIT_QUIZ_CONFIG",
    "QUIZKIT_QUIZ_SAMPLE_SIZE",
    "QUIZKIT_QUIZ_REMEMBER_DOCUMENTS",
    "QUIZKIT_QUIZ_INTERFACE",
    "QUIZKIT_QUIZ_LOG_LEVEL",
)


@pytest.fixture
def workspace_root(tmp_path: Path, monkeypatch) -> Iterator[Path]:
    """Point the quizkit workspace at a per-test directory."""

    root = tmp_path / "quizkit-data"
    monkeypatch.setenv(WORKSPACE_ENV, str(root))
    for key in _QUIZ_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield root


@pytest.fixture
def write_docs(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Write a questions/answers pair of text documents to disk."""

    def _write(
        questions: str = QUESTIONS_TEXT, answers: str = ANSWERS_TEXT
    ) -> tuple[Path, Path]:
        q_path = tmp_path / "questions.txt"
        a_path = tmp_path / "answers.txt"
        q_path.write_text(questions, encoding="utf-8")
        a_path.write_text(answers, encoding="utf-8")
        return q_path, a_path

    return _write
