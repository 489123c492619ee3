from ._main import build_arg_parser
from .classifier import ClassifiedLine, LineKind, classify_line
from .errors import (
    DependencyError,
    EmptyQuestionBank,
    ExtractionFailure,
    InvalidTransition,
    MissingDocuments,
    QuizError,
)
from .extract import SourceDocument, build_extractor
from .grader import (
    UNANSWERED,
    GradeResult,
    IncorrectAnswer,
    grade,
)
from .parser import (
    AnswerEntry,
    Question,
    parse_answer_key,
    parse_question_bank,
)
from .sampler import SAMPLE_SIZE, sample_questions
from .session import run_quiz_session, SessionOutcome
from .state import QuizSession, SessionStatus, StartTicket
from .store import DocumentStore

__all__ = [
    "build_arg_parser",
    "ClassifiedLine",
    "LineKind",
    "classify_line",
    "QuizError",
    "ExtractionFailure",
    "DependencyError",
    "EmptyQuestionBank",
    "MissingDocuments",
    "InvalidTransition",
    "SourceDocument",
    "build_extractor",
    "UNANSWERED",
    "GradeResult",
    "IncorrectAnswer",
    "grade",
    "AnswerEntry",
    "Question",
    "parse_answer_key",
    "parse_question_bank",
    "SAMPLE_SIZE",
    "sample_questions",
    "run_quiz_session",
    "SessionOutcome",
    "QuizSession",
    "SessionStatus",
    "StartTicket",
    "DocumentStore",
]
