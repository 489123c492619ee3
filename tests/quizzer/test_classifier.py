from __future__ import annotations

import pytest

from quizkit.quizzer.classifier import ClassifiedLine, LineKind, classify_line


@pytest.mark.parametrize(
    "line",
    ["7.", "12. What is the capital?", "003.Leading zeros", "1.A) tricky"],
)
def test_question_start_lines(line):
    assert classify_line(line) == ClassifiedLine(LineKind.QUESTION_START, line)


@pytest.mark.parametrize("line", ["A) London", "B)Paris", "C) ", "D) 4"])
def test_option_lines(line):
    assert classify_line(line).kind is LineKind.OPTION_LINE
    assert classify_line(line).text == line


@pytest.mark.parametrize(
    "line",
    [
        "",
        "E) out of range",
        "a) lowercase",
        "A. period not paren",
        "(A) wrapped",
        "12 no period",
        "Question 1. not anchored",
        "١٢. arabic-indic digits",
    ],
)
def test_other_lines(line):
    assert classify_line(line).kind is LineKind.OTHER
