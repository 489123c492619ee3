from typing import Callable, List, Optional

from rich.text import Text
from textual.app import App, ComposeResult, ScreenStackError
from textual.containers import Container, Vertical
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Button, Static

from ..errors import QuizError
from ..grader import GradeResult
from ..parser import Question
from ..session import BAND_STYLES, option_for_letter
from ..state import QuizSession, SessionStatus

Restart = Callable[[QuizSession], None]


class QuizApp(App):
    CSS_PATH = None
    CSS = """
#choices Button.selected { background: $accent; color: black; }
#footer { height: auto; }
#footer Button { margin-right: 1; }
"""
    BINDINGS = [
        ("n", "next", "Next"),
        ("p", "prev", "Prev"),
        ("a", "select_a", "Select A"),
        ("b", "select_b", "Select B"),
        ("c", "select_c", "Select C"),
        ("d", "select_d", "Select D"),
        ("f", "finish", "Finish"),
        ("r", "reset", "New quiz"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, session: QuizSession, restart: Restart):
        super().__init__()
        self._session = session
        self._restart = restart
        self._index = 0

    def compose(self) -> ComposeResult:
        with Container(id="stage"):
            yield from self._stage_widgets()
        with Container(id="footer"):
            yield Button("Prev", id="prev")
            yield Button("Next", id="next")
            yield Button("Finish", id="finish")
            yield Button("New quiz", id="reset")
            yield Static(self._answered_text(), id="answered")

    # Pure helpers for navigation and selection (testable without running App)
    def current_question(self) -> Optional[Question]:
        if self._session.status is not SessionStatus.IN_PROGRESS:
            return None
        return self._session.sampled[self._index]

    def next_question(self) -> int:
        if self._index + 1 < len(self._session.sampled):
            self._index += 1
        self._update_stage()
        return self._index

    def prev_question(self) -> int:
        if self._index > 0:
            self._index -= 1
        self._update_stage()
        return self._index

    def select_answer(self, letter: str) -> bool:
        question = self.current_question()
        if question is None:
            return False
        option = option_for_letter(question, letter)
        if option is None:
            return False
        self._session.select_option(self._index, option)
        self._update_stage()
        return True

    def select_option_at(self, position: int) -> bool:
        question = self.current_question()
        if question is None or not 0 <= position < len(question.options):
            return False
        self._session.select_option(self._index, question.options[position])
        self._update_stage()
        return True

    def finish_quiz(self) -> Optional[GradeResult]:
        if self._session.status is not SessionStatus.IN_PROGRESS:
            return self._session.result
        result = self._session.finish()
        self._update_stage()
        return result

    def reset_quiz(self) -> None:
        self._session.reset()
        self._index = 0
        try:
            self._restart(self._session)
        finally:
            self._update_stage()

    def answered_count(self) -> int:
        return self._session.answered_count()

    def _answered_text(self) -> str:
        return (
            f"Answered: {self._session.answered_count()}"
            f"/{len(self._session.sampled)}"
        )

    def _stage_widgets(self) -> List[Widget]:
        session = self._session
        if session.result is not None:
            return [ResultsView(session.result, session.answered_count())]
        question = self.current_question()
        if question is None:
            return [Static("No questions.", id="empty")]
        return [
            QuestionView(
                question,
                index=self._index + 1,
                total=len(session.sampled),
                selected=session.selection_for(self._index),
            )
        ]

    def _update_stage(self) -> None:
        if not self.is_running:
            return
        try:
            stage = self.query_one("#stage", Container)
            answered = self.query_one("#answered", Static)
        except (NoMatches, ScreenStackError):
            return
        stage.remove_children()
        stage.mount(*self._stage_widgets())
        answered.update(self._answered_text())

    def action_next(self) -> None:
        self.next_question()

    def action_prev(self) -> None:
        self.prev_question()

    def action_select_a(self) -> None:
        self.select_answer("A")

    def action_select_b(self) -> None:
        self.select_answer("B")

    def action_select_c(self) -> None:
        self.select_answer("C")

    def action_select_d(self) -> None:
        self.select_answer("D")

    def action_finish(self) -> None:
        self.finish_quiz()

    def action_reset(self) -> None:
        try:
            self.reset_quiz()
        except QuizError as exc:
            self.notify(str(exc), severity="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = getattr(event.button, "id", "") or ""
        if bid.startswith("choice-"):
            self.select_option_at(int(bid.rsplit("-", 1)[-1]))
        elif bid == "finish":
            self.action_finish()
        elif bid == "reset":
            self.action_reset()
        elif bid == "next":
            self.action_next()
        elif bid == "prev":
            self.action_prev()


class QuestionView(Widget):
    """A single question with one button per option, progress and status."""

    DEFAULT_CSS = "QuestionView { height: auto; }"

    def __init__(
        self,
        question: Question,
        index: int,
        total: int,
        *,
        selected: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.question = question
        self.index = index
        self.total = total
        self.selected = selected

    def compose(self) -> ComposeResult:
        yield Static(Text(self.question.raw_header), id="stem")
        with Vertical(id="choices"):
            for position, option in enumerate(self.question.options):
                btn = Button(Text(option), id=f"choice-{position}")
                if option == self.selected:
                    btn.add_class("selected")
                yield btn
        yield Static(f"{self.index}/{self.total}", id="progress")
        yield Static(Text(self.status_text()), id="feedback")

    def status_text(self) -> str:
        return f"Selected: {self.selected}" if self.selected else ""


class ResultsView(Widget):
    """Score and missed questions of a finished quiz."""

    DEFAULT_CSS = "ResultsView { height: auto; }"

    def __init__(self, result: GradeResult, answered: int) -> None:
        super().__init__()
        self.result = result
        self.answered = answered

    def compose(self) -> ComposeResult:
        style = BAND_STYLES[self.result.band]
        yield Static(Text(self.score_text(), style=style))
        yield Static(f"Answered: {self.answered}")
        for line in self.missed_lines():
            yield Static(Text(line))

    def score_text(self) -> str:
        result = self.result
        return (
            f"Correct: {result.correct_count}/{result.sample_size} "
            f"({result.percentage:.1f}%)"
        )

    def missed_lines(self) -> List[str]:
        if not self.result.incorrect:
            return ["No mistakes."]
        lines: List[str] = []
        for item in self.result.incorrect:
            lines.append(
                f"{item.question_header}\n"
                f"  Correct answer: {item.correct_answer_text}\n"
                f"  Your answer: {item.user_answer_text}"
            )
        return lines
