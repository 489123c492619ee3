"""Rich-powered console front end for a quiz session.

The loop renders the current question of a started :class:`QuizSession`,
reads one command per prompt and forwards selections, finishing and
resetting to the session. Rendering and command parsing are kept as small
helpers so they can be tested without a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import QuizError
from .grader import GradeResult
from .parser import Question
from .state import QuizSession, SessionStatus

InputProvider = Callable[[], str]
Restart = Callable[[QuizSession], None]
ExitAction = Literal["finished", "quit"]

BAND_STYLES = {
    "high": "bold green",
    "medium": "bold yellow",
    "low": "bold red",
}


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["next", "prev", "finish", "reset", "quit", "select"]
    choice: Optional[str] = None


@dataclass(frozen=True)
class SessionOutcome:
    """Return value from ``run_quiz_session``."""

    exit_action: ExitAction
    result: Optional[GradeResult]
    rounds: int


@dataclass
class _Cursor:
    index: int = 0


def parse_session_command(raw: Optional[str]) -> Optional[SessionCommand]:
    """Parse raw user input into a structured command."""

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in {"n", "next"}:
        return SessionCommand("next")
    if lowered in {"p", "prev", "previous"}:
        return SessionCommand("prev")
    if lowered in {"f", "finish", "s", "submit"}:
        return SessionCommand("finish")
    if lowered in {"r", "reset", "restart"}:
        return SessionCommand("reset")
    if lowered in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if len(text) == 1 and text.isalpha():
        return SessionCommand("select", text.upper())
    return None


def option_for_letter(question: Question, letter: str) -> Optional[str]:
    """Return the option line of ``question`` labelled ``letter``."""

    prefix = f"{letter.strip().upper()[:1]})"
    for option in question.options:
        if option.startswith(prefix):
            return option
    return None


def run_quiz_session(
    session: QuizSession,
    console: Console,
    input_provider: InputProvider,
    *,
    restart: Restart,
) -> SessionOutcome:
    """Drive ``session`` from console input until the user quits.

    ``restart`` is called with the session after a reset to start a freshly
    shuffled quiz from the same documents.
    """

    cursor = _Cursor()
    rounds = 1
    summary_shown = False

    while True:
        if session.status is SessionStatus.IN_PROGRESS:
            render_question(console, session, cursor.index)
        elif session.result is not None and not summary_shown:
            render_summary(console, session.result, session.answered_count())
            console.print(
                Text("Commands: r (new quiz), q (quit)", style="dim")
            )
            summary_shown = True

        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            break
        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue

        if command.type == "quit":
            if session.status is SessionStatus.IN_PROGRESS:
                console.print(
                    "\n[bold yellow]Ending session without finishing.[/]"
                )
            break
        if command.type == "reset":
            session.reset()
            try:
                restart(session)
            except QuizError as exc:
                console.print(Text(str(exc), style="red"))
                break
            cursor.index = 0
            rounds += 1
            summary_shown = False
            console.print("[bold cyan]New quiz started.[/]")
            continue
        if session.status is not SessionStatus.IN_PROGRESS:
            console.print("[red]The quiz is over. Use r or q.[/red]")
            continue
        _apply_command(command, session, cursor, console)

    exit_action: ExitAction = (
        "finished" if session.status is SessionStatus.FINISHED else "quit"
    )
    return SessionOutcome(exit_action, session.result, rounds)


def _apply_command(
    command: SessionCommand,
    session: QuizSession,
    cursor: _Cursor,
    console: Console,
) -> None:
    total = len(session.sampled)
    if command.type == "select" and command.choice:
        question = session.sampled[cursor.index]
        option = option_for_letter(question, command.choice)
        if option is None:
            console.print(
                "[red]'%s' is not a valid choice for this question.[/red]"
                % command.choice,
            )
            return
        session.select_option(cursor.index, option)
        console.print(Text.assemble("Selected ", (option, "bold"), "."))
        if cursor.index + 1 < total:
            cursor.index += 1
        return
    if command.type == "next":
        if cursor.index + 1 < total:
            cursor.index += 1
        return
    if command.type == "prev":
        if cursor.index > 0:
            cursor.index -= 1
        return
    if command.type == "finish":
        session.finish()


def render_question(
    console: Console, session: QuizSession, index: int
) -> None:
    question = session.sampled[index]
    total = len(session.sampled)
    header = Text.assemble(
        (f"Question {index + 1}", "bold cyan"),
        (f" / {total}", "dim"),
    )
    console.print()
    console.rule(header)
    console.print(Text(question.raw_header, style="bold"))

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("", width=1)
    table.add_column("Option")

    selected = session.selection_for(index)
    for option in question.options:
        chosen = option == selected
        option_text = Text(option)
        if chosen:
            option_text.stylize("bold green")
        table.add_row("•" if chosen else " ", option_text)

    console.print(table)
    console.print(
        Text(
            f"Answered {session.answered_count()}/{total} | Commands: option "
            "letter, n (next), p (prev), finish, reset, quit",
            style="dim",
        )
    )


def render_summary(
    console: Console, result: GradeResult, answered: int
) -> None:
    console.print()
    console.rule(Text("Results", style="bold magenta"))

    overview = Table(
        show_header=False,
        box=box.MINIMAL_DOUBLE_HEAD,
        expand=False,
    )
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Answered", str(answered))
    overview.add_row(
        "Correct", f"{result.correct_count} / {result.sample_size}"
    )
    overview.add_row(
        "Score",
        Text(f"{result.percentage:.1f}%", style=BAND_STYLES[result.band]),
    )
    if result.skipped:
        overview.add_row("Not graded", str(result.skipped))
    console.print(overview)

    if not result.incorrect:
        console.print(
            Panel(
                "No mistakes.",
                title="Missed questions",
                border_style="green",
            )
        )
        return

    missed = Table(title="Missed questions", box=box.SIMPLE, expand=True)
    missed.add_column("#", justify="right")
    missed.add_column("Question", overflow="fold")
    missed.add_column("Correct answer", style="green")
    missed.add_column("Your answer", style="red")
    for idx, item in enumerate(result.incorrect, start=1):
        missed.add_row(
            str(idx),
            item.question_header,
            item.correct_answer_text,
            item.user_answer_text,
        )
    console.print(missed)
