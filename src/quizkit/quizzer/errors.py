"""Exceptions raised by the quiz engine and its collaborators."""

from __future__ import annotations

__all__ = [
    "QuizError",
    "ExtractionFailure",
    "DependencyError",
    "EmptyQuestionBank",
    "MissingDocuments",
    "InvalidTransition",
]

FORMAT_HINT = (
    "Questions must start with a number and a period (e.g. '12.') and "
    "options with a letter A-D and a closing parenthesis (e.g. 'B)')."
)


class QuizError(RuntimeError):
    """Base class for quiz errors surfaced to the user."""


class ExtractionFailure(QuizError):
    """Raised when document bytes cannot be decoded into text."""


class DependencyError(ExtractionFailure):
    """Raised when the library backing a document format is unavailable."""


class EmptyQuestionBank(QuizError):
    """Raised when the questions document yields no usable question."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or f"No valid questions found. {FORMAT_HINT}"
        )


class MissingDocuments(QuizError):
    """Raised when a quiz is started without both source documents."""


class InvalidTransition(QuizError):
    """Raised when a session action is not allowed in the current state."""
