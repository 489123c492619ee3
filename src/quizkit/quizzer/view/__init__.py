"""Textual front end for quiz sessions."""

from .quiz import QuizApp, QuestionView, ResultsView

__all__ = ["QuizApp", "QuestionView", "ResultsView"]
