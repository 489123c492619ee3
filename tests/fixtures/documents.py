"""Document builders shared by the quiz tests."""

from __future__ import annotations

from quizkit.quizzer.extract import SourceDocument

QUESTIONS_TEXT = "1. Capital?\nA) London\nB) Paris\n2. 2+2?\nA) 3\nB) 4"
ANSWERS_TEXT = "1.B\n2.B"


def build_questions(count: int) -> str:
    """Return a questions document with ``count`` two-option questions."""

    lines = []
    for number in range(1, count + 1):
        lines.append(f"{number}. Question number {number}?")
        lines.append(f"A) wrong {number}")
        lines.append(f"B) right {number}")
    return "\n".join(lines)


def build_answers(count: int, letter: str = "B") -> str:
    return "\n".join(f"{number}.{letter}" for number in range(1, count + 1))


def text_document(name: str, text: str) -> SourceDocument:
    return SourceDocument(name=name, data=text.encode("utf-8"))


def fake_extractor(document: SourceDocument) -> str:
    """Extractor stand-in that treats every document as UTF-8 text."""

    return document.data.decode("utf-8")
