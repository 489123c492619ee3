"""Line classification for question documents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = ["LineKind", "ClassifiedLine", "classify_line"]

_QUESTION_START = re.compile(r"^\d+\.", re.ASCII)
_OPTION_LINE = re.compile(r"^[A-D]\)")


class LineKind(Enum):
    """Kinds of lines recognised in a questions document."""

    QUESTION_START = "question_start"
    OPTION_LINE = "option_line"
    OTHER = "other"


@dataclass(frozen=True)
class ClassifiedLine:
    """A trimmed line tagged with its kind; ``text`` is kept verbatim."""

    kind: LineKind
    text: str


def classify_line(line: str) -> ClassifiedLine:
    """Classify an already-trimmed line.

    Only the start of the line is inspected: ``12.`` marks a question start
    and ``A)``..``D)`` an option. Everything else, blank lines included, is
    ``OTHER``.
    """
    if _QUESTION_START.match(line):
        return ClassifiedLine(LineKind.QUESTION_START, line)
    if _OPTION_LINE.match(line):
        return ClassifiedLine(LineKind.OPTION_LINE, line)
    return ClassifiedLine(LineKind.OTHER, line)
