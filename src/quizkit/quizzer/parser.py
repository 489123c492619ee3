"""Build a question bank and an answer key from extracted document text."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .classifier import LineKind, classify_line

__all__ = [
    "Question",
    "AnswerEntry",
    "parse_question_bank",
    "parse_answer_key",
    "iter_trimmed_lines",
]

_LOG = logging.getLogger("quizkit.quizzer")


@dataclass(frozen=True)
class Question:
    """A committed question: its verbatim header and full option lines."""

    raw_header: str
    options: tuple[str, ...]


@dataclass(frozen=True)
class AnswerEntry:
    """One answer-key line split into question number and letter."""

    question_number: str
    correct_letter: str


@dataclass
class _PendingQuestion:
    header: str
    options: list[str] = field(default_factory=list)

    def is_complete(self) -> bool:
        return bool(self.header) and bool(self.options)

    def freeze(self) -> Question:
        return Question(raw_header=self.header, options=tuple(self.options))


def iter_trimmed_lines(text: str) -> Iterator[str]:
    """Yield each newline-separated line of ``text``, trimmed."""
    for line in text.split("\n"):
        yield line.strip()


def parse_question_bank(text: str) -> tuple[Question, ...]:
    """Parse the questions document into an ordered question bank.

    Lines are folded left to right. A question start commits the pending
    question when it has a header and at least one option; option lines
    attach to the pending question (or are dropped before the first
    question); anything else is ignored. The last pending question is
    committed with the same rule once input ends.
    """
    bank: list[Question] = []
    pending: _PendingQuestion | None = None
    dropped = 0

    for line in iter_trimmed_lines(text):
        classified = classify_line(line)
        if classified.kind is LineKind.QUESTION_START:
            if pending is not None:
                if pending.is_complete():
                    bank.append(pending.freeze())
                else:
                    dropped += 1
            pending = _PendingQuestion(classified.text)
        elif classified.kind is LineKind.OPTION_LINE:
            if pending is None:
                continue
            pending.options.append(classified.text)

    if pending is not None:
        if pending.is_complete():
            bank.append(pending.freeze())
        else:
            dropped += 1

    _LOG.debug(
        "Parsed question bank",
        extra={"question_count": len(bank), "dropped_headers": dropped},
    )
    return tuple(bank)


def parse_answer_key(text: str) -> tuple[AnswerEntry, ...]:
    """Parse the answers document into answer entries.

    Each non-blank line is split on its first ``.``; the number and letter
    are trimmed but otherwise unchecked. Lines without any ``.`` carry no
    number and are skipped.
    """
    entries: list[AnswerEntry] = []
    for line in iter_trimmed_lines(text):
        if not line:
            continue
        number, sep, letter = line.partition(".")
        if not sep:
            _LOG.debug("Skipping answer line without '.'", extra={"raw": line})
            continue
        entries.append(
            AnswerEntry(
                question_number=number.strip(),
                correct_letter=letter.strip(),
            )
        )
    return tuple(entries)
