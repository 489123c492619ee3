"""Shared testing fixtures for the quizkit test suite."""

from .documents import (  # noqa: F401
    ANSWERS_TEXT,
    QUESTIONS_TEXT,
    build_answers,
    build_questions,
    fake_extractor,
    text_document,
)

__all__ = [
    "ANSWERS_TEXT",
    "QUESTIONS_TEXT",
    "build_answers",
    "build_questions",
    "fake_extractor",
    "text_document",
]
