"""Grade a finished session against the answer key."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Sequence

from .parser import AnswerEntry, Question
from .sampler import SAMPLE_SIZE

__all__ = [
    "UNANSWERED",
    "IncorrectAnswer",
    "GradeResult",
    "grade",
    "question_number",
    "correct_answer_text",
    "score_band",
]

UNANSWERED = "unanswered"

ScoreBand = Literal["high", "medium", "low"]

_LEADING_NUMBER = re.compile(r"^(\d+)\.", re.ASCII)


@dataclass(frozen=True)
class IncorrectAnswer:
    """A missed or unanswered question as shown in the results."""

    question_header: str
    correct_answer_text: str
    user_answer_text: str


@dataclass(frozen=True)
class GradeResult:
    """Outcome of grading one session."""

    correct_count: int
    incorrect: tuple[IncorrectAnswer, ...]
    sample_size: int = SAMPLE_SIZE
    skipped: int = 0

    @property
    def percentage(self) -> float:
        # Out of the configured sample size, never out of the graded count.
        if self.sample_size <= 0:
            return 0.0
        return self.correct_count / self.sample_size * 100

    @property
    def band(self) -> ScoreBand:
        return score_band(self.percentage)


def score_band(percentage: float) -> ScoreBand:
    if percentage >= 80:
        return "high"
    if percentage >= 60:
        return "medium"
    return "low"


def question_number(header: str) -> Optional[str]:
    """Return the digits before the first ``.`` of ``header``, if any."""
    match = _LEADING_NUMBER.match(header)
    return match.group(1) if match else None


def correct_answer_text(question: Question, letter: str) -> str:
    """Resolve ``letter`` to the text of the matching option.

    The option must start with ``letter`` directly followed by ``)``; its
    text after the parenthesis is returned trimmed. Falls back to ``letter``.
    """
    prefix = f"{letter})"
    for option in question.options:
        if option.startswith(prefix):
            return option[option.index(")") + 1 :].strip()
    return letter


def _find_entry(
    answer_key: Sequence[AnswerEntry], number: str
) -> Optional[AnswerEntry]:
    for entry in answer_key:
        if entry.question_number == number:
            return entry
    return None


def grade(
    questions: Sequence[Question],
    answer_key: Sequence[AnswerEntry],
    selections: Mapping[int, str],
    *,
    sample_size: int = SAMPLE_SIZE,
) -> GradeResult:
    """Grade ``selections`` (sampled index -> chosen option) for ``questions``.

    Questions without a leading number or without an answer-key entry are
    skipped: they count neither as correct nor as incorrect. A selection is
    correct when the key's letter occurs anywhere in the chosen option text.
    """
    correct = 0
    skipped = 0
    incorrect: list[IncorrectAnswer] = []

    for index, question in enumerate(questions):
        number = question_number(question.raw_header)
        if number is None:
            skipped += 1
            continue
        entry = _find_entry(answer_key, number)
        if entry is None:
            skipped += 1
            continue
        user_answer = selections.get(index)
        if user_answer and entry.correct_letter in user_answer:
            correct += 1
            continue
        incorrect.append(
            IncorrectAnswer(
                question_header=question.raw_header,
                correct_answer_text=correct_answer_text(
                    question, entry.correct_letter
                ),
                user_answer_text=user_answer if user_answer else UNANSWERED,
            )
        )

    return GradeResult(
        correct_count=correct,
        incorrect=tuple(incorrect),
        sample_size=sample_size,
        skipped=skipped,
    )
