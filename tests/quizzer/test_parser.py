from __future__ import annotations

from collections.abc import Iterator

from fixtures import QUESTIONS_TEXT

from quizkit.quizzer.parser import (
    AnswerEntry,
    Question,
    iter_trimmed_lines,
    parse_answer_key,
    parse_question_bank,
)


def test_parse_question_bank_example():
    bank = parse_question_bank(QUESTIONS_TEXT)

    assert bank == (
        Question("1. Capital?", ("A) London", "B) Paris")),
        Question("2. 2+2?", ("A) 3", "B) 4")),
    )


def test_iter_trimmed_lines_is_lazy_and_strips():
    lines = iter_trimmed_lines("  1. Header \r\n\tA) x\n\n")

    assert isinstance(lines, Iterator)
    assert list(lines) == ["1. Header", "A) x", "", ""]


def test_parse_question_bank_trims_and_keeps_full_option_text():
    text = "  3. Spaced header  \r\n\tA) first answer \r\n   B) second\r\n"

    bank = parse_question_bank(text)

    assert bank == (
        Question("3. Spaced header", ("A) first answer", "B) second")),
    )


def test_parse_question_bank_flushes_trailing_question():
    text = "1. First\nA) a\n2. Last\nC) only option"

    bank = parse_question_bank(text)

    assert [q.raw_header for q in bank] == ["1. First", "2. Last"]
    assert bank[-1].options == ("C) only option",)


def test_parse_question_bank_discards_header_without_options():
    text = (
        "1. No options here\nSome prose\n2. Has options\nA) yes\n3. Dangling"
    )

    bank = parse_question_bank(text)

    assert [q.raw_header for q in bank] == ["2. Has options"]


def test_parse_question_bank_drops_options_before_first_question():
    text = "A) orphan\nB) orphan too\n1. Real\nA) kept"

    bank = parse_question_bank(text)

    assert bank == (Question("1. Real", ("A) kept",)),)


def test_parse_question_bank_ignores_other_lines():
    text = (
        "Title of the test\n\n1. Q\nexplanation line\nA) x\n"
        "E) not an option"
    )

    bank = parse_question_bank(text)

    assert bank == (Question("1. Q", ("A) x",)),)


def test_parse_question_bank_never_emits_empty_questions():
    text = "\n".join(
        ["1.", "2. x", "A) a", "3. y", "", "4. z", "B) b", "5.", "D) d"]
    )

    bank = parse_question_bank(text)

    assert bank
    assert all(q.raw_header and q.options for q in bank)


def test_parse_question_bank_empty_input():
    assert parse_question_bank("") == ()
    assert parse_question_bank("no numbered lines at all") == ()


def test_parse_answer_key_splits_on_first_period():
    text = "1.B\n 2 . C \n\n10.A. extra\n   \n"

    entries = parse_answer_key(text)

    assert entries == (
        AnswerEntry("1", "B"),
        AnswerEntry("2", "C"),
        AnswerEntry("10", "A. extra"),
    )


def test_parse_answer_key_is_permissive():
    entries = parse_answer_key("07.Z\nabc.def\n5.")

    assert entries == (
        AnswerEntry("07", "Z"),
        AnswerEntry("abc", "def"),
        AnswerEntry("5", ""),
    )


def test_parse_answer_key_skips_lines_without_period():
    entries = parse_answer_key("Answer key\n1.A\n2 B")

    assert entries == (AnswerEntry("1", "A"),)
