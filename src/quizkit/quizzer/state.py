"""Quiz session state machine shared by the console and TUI front ends.

A session moves ``IDLE -> IN_PROGRESS -> FINISHED`` and back to ``IDLE`` on
``reset``. Loaded documents survive resets so a new ``start`` can reshuffle
immediately. Starting is split into ``begin_start``/``complete_start`` so
text extraction may run elsewhere; every ``begin_start`` and ``reset``
advances a generation counter, as does a successful completion, and
completions carrying an older ticket are discarded.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .errors import EmptyQuestionBank, InvalidTransition, MissingDocuments
from .extract import Extractor, SourceDocument
from .grader import GradeResult, grade
from .parser import (
    AnswerEntry,
    Question,
    parse_answer_key,
    parse_question_bank,
)
from .sampler import SAMPLE_SIZE, sample_questions

__all__ = ["SessionStatus", "StartTicket", "QuizSession"]


class SessionStatus(Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class StartTicket:
    """Handle identifying one ``begin_start`` call."""

    generation: int


@dataclass
class QuizSession:
    """Mutable state of one quiz, owned by a single front end."""

    sample_size: int = SAMPLE_SIZE
    rng: Optional[random.Random] = None
    logger: Union[logging.Logger, logging.LoggerAdapter] = field(
        default_factory=lambda: logging.getLogger("quizkit.quizzer")
    )
    questions_document: Optional[SourceDocument] = None
    answers_document: Optional[SourceDocument] = None
    status: SessionStatus = SessionStatus.IDLE
    question_bank: tuple[Question, ...] = ()
    answer_key: tuple[AnswerEntry, ...] = ()
    sampled: tuple[Question, ...] = ()
    selections: dict[int, str] = field(default_factory=dict)
    result: Optional[GradeResult] = None
    _generation: int = field(default=0, init=False, repr=False, compare=False)

    # documents

    def load_documents(
        self,
        *,
        questions: Optional[SourceDocument] = None,
        answers: Optional[SourceDocument] = None,
    ) -> None:
        if questions is not None:
            self.questions_document = questions
        if answers is not None:
            self.answers_document = answers

    @property
    def has_documents(self) -> bool:
        return (
            self.questions_document is not None
            and self.answers_document is not None
        )

    # lifecycle

    def begin_start(self) -> StartTicket:
        """Discard any previous quiz and reserve a new start."""
        self._require_documents()
        self._clear()
        return StartTicket(self._generation)

    def complete_start(
        self,
        ticket: StartTicket,
        questions_text: str,
        answers_text: str,
    ) -> bool:
        """Adopt extracted text for ``ticket``.

        Returns ``False`` without touching the session when a newer start, a
        reset or an earlier completion of the same ticket happened since
        ``ticket`` was issued.
        """
        if ticket.generation != self._generation:
            self.logger.info(
                "Discarding stale quiz start",
                extra={
                    "ticket": ticket.generation,
                    "generation": self._generation,
                },
            )
            return False

        bank = parse_question_bank(questions_text)
        if not bank:
            self.logger.warning("Questions document produced no questions")
            raise EmptyQuestionBank()
        answer_key = parse_answer_key(answers_text)
        sampled = sample_questions(bank, self.sample_size, rng=self.rng)

        # A ticket is good for one completion only.
        self._generation += 1
        self.selections = {}
        self.result = None
        self.question_bank = bank
        self.answer_key = answer_key
        self.sampled = tuple(sampled)
        self.status = SessionStatus.IN_PROGRESS
        self.logger.info(
            "Quiz started",
            extra={
                "bank_size": len(bank),
                "answer_count": len(answer_key),
                "sampled": len(self.sampled),
                "sample_size": self.sample_size,
            },
        )
        return True

    def start(self, extract: Extractor) -> None:
        """Extract both documents and start a freshly shuffled quiz."""
        questions, answers = self._require_documents()
        ticket = self.begin_start()
        questions_text = extract(questions)
        answers_text = extract(answers)
        self.complete_start(ticket, questions_text, answers_text)

    def select_option(self, index: int, option: str) -> None:
        self._require(SessionStatus.IN_PROGRESS, "select an option")
        if not 0 <= index < len(self.sampled):
            raise IndexError(f"No question at position {index}.")
        self.selections[index] = option

    def finish(self) -> GradeResult:
        self._require(SessionStatus.IN_PROGRESS, "finish")
        self.result = grade(
            self.sampled,
            self.answer_key,
            self.selections,
            sample_size=self.sample_size,
        )
        self.status = SessionStatus.FINISHED
        self.logger.info(
            "Quiz finished",
            extra={
                "correct": self.result.correct_count,
                "incorrect": len(self.result.incorrect),
                "skipped": self.result.skipped,
                "percentage": self.result.percentage,
            },
        )
        return self.result

    def reset(self) -> None:
        """Return to ``IDLE`` keeping the loaded documents."""
        self._clear()

    # queries

    def selection_for(self, index: int) -> Optional[str]:
        return self.selections.get(index)

    def answered_count(self) -> int:
        return len(self.selections)

    def _clear(self) -> None:
        self._generation += 1
        self.status = SessionStatus.IDLE
        self.question_bank = ()
        self.answer_key = ()
        self.sampled = ()
        self.selections = {}
        self.result = None

    def _require_documents(self) -> tuple[SourceDocument, SourceDocument]:
        if self.questions_document is None or self.answers_document is None:
            raise MissingDocuments(
                "Load both the questions and the answers documents first."
            )
        return self.questions_document, self.answers_document

    def _require(self, status: SessionStatus, action: str) -> None:
        if self.status is not status:
            raise InvalidTransition(
                f"Cannot {action} while the quiz is {self.status.value}."
            )
