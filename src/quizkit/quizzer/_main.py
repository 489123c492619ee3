"""CLI entry point for quiz sessions."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from quizkit.core.logging import RunLog, open_run_log

from .config import (
    ConfigOverrides,
    Interface,
    LoadResult,
    QuizConfigError,
    load_config,
    write_config_template,
)
from .errors import FORMAT_HINT, QuizError
from .extract import Extractor, SourceDocument, build_extractor
from .grader import question_number
from .parser import parse_answer_key, parse_question_bank
from .session import run_quiz_session
from .state import QuizSession
from .store import SLOTS, DocumentStore


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML config file (defaults to the workspace config).",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root (config, logs, documents).",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quizkit quiz",
        description=(
            "Self-graded multiple-choice quiz from a questions document and "
            "an answer key document."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sub = p.add_subparsers(dest="command", required=True)

    sp_start = sub.add_parser("start", help="Start a quiz session")
    sp_start.add_argument(
        "questions",
        nargs="?",
        type=Path,
        help="Questions document (.docx, .pdf, .txt, .md)",
    )
    sp_start.add_argument(
        "answers",
        nargs="?",
        type=Path,
        help="Answer key document (one '<number>.<letter>' per line)",
    )
    _add_common_arguments(sp_start)
    sp_start.add_argument(
        "--sample-size",
        type=int,
        help="Questions per session; the score denominator",
    )
    sp_start.add_argument(
        "--tui",
        dest="interface",
        action="store_const",
        const=Interface.TUI,
        help="Use the Textual app instead of the console prompt",
    )
    sp_start.add_argument(
        "--no-remember",
        dest="remember",
        action="store_false",
        default=None,
        help="Do not store the documents for the next run",
    )
    sp_start.add_argument("--log-level", help="Logging level for the run")
    sp_start.add_argument(
        "--verbose", action="store_true", help="Also log to stderr"
    )

    sp_inspect = sub.add_parser(
        "inspect", help="Parse documents and report what was found"
    )
    sp_inspect.add_argument("questions", type=Path)
    sp_inspect.add_argument("answers", type=Path)

    sp_docs = sub.add_parser("documents", help="Show remembered documents")
    _add_common_arguments(sp_docs)
    sp_docs.add_argument(
        "--clear", action="store_true", help="Forget remembered documents"
    )

    sp_cfg = sub.add_parser("config", help="Configuration helpers")
    cfg_sub = sp_cfg.add_subparsers(dest="action", required=True)
    sp_cfg_init = cfg_sub.add_parser(
        "init", help="Write the default quizzer.toml"
    )
    _add_common_arguments(sp_cfg_init)
    sp_cfg_init.add_argument(
        "--force", action="store_true", help="Overwrite an existing file"
    )
    return p


def _error(message: str) -> None:
    sys.stderr.write(f"Error: {message}\n")


def _load(
    args: argparse.Namespace, overrides: Optional[ConfigOverrides] = None
) -> LoadResult:
    return load_config(
        config_path=args.config,
        overrides=overrides,
        workspace_path=args.workspace,
    )


def _read_document(path: Path) -> SourceDocument:
    resolved = path.expanduser()
    return SourceDocument(name=resolved.name, data=resolved.read_bytes())


def _resolve_documents(
    args: argparse.Namespace,
    store: DocumentStore,
    *,
    remember: bool,
    logger: RunLog,
) -> Optional[tuple[SourceDocument, SourceDocument]]:
    if args.questions is not None and args.answers is not None:
        questions = _read_document(args.questions)
        answers = _read_document(args.answers)
        if remember:
            store.save("questions", questions)
            store.save("answers", answers)
            logger.info(
                "Remembered quiz documents",
                extra={"questions": questions.name, "answers": answers.name},
            )
        return questions, answers
    if args.questions is not None:
        _error("Provide both the questions and the answers documents.")
        return None
    questions_doc = store.load("questions")
    answers_doc = store.load("answers")
    if questions_doc is None or answers_doc is None:
        _error(
            "No remembered documents. Run 'quizkit quiz start QUESTIONS "
            "ANSWERS' first."
        )
        return None
    logger.info(
        "Using remembered quiz documents",
        extra={"questions": questions_doc.name, "answers": answers_doc.name},
    )
    return questions_doc, answers_doc


def _cmd_start(
    args: argparse.Namespace,
    *,
    extractor: Optional[Extractor] = None,
    console: Optional[Console] = None,
) -> int:
    overrides = ConfigOverrides(
        sample_size=args.sample_size,
        remember_documents=args.remember,
        interface=args.interface,
        log_level=args.log_level,
    )
    try:
        loaded = _load(args, overrides)
    except QuizConfigError as exc:
        _error(str(exc))
        return 2
    config = loaded.config

    logger, log_path = open_run_log(
        loaded.workspace.log_file,
        level=config.log_level,
        verbose=bool(args.verbose),
    )
    logger.debug(
        "quiz start invoked",
        extra={
            "log_path": str(log_path),
            "sample_size": config.sample_size,
            "interface": config.interface.value,
        },
    )

    store = DocumentStore(loaded.workspace.documents_dir)
    try:
        documents = _resolve_documents(
            args, store, remember=config.remember_documents, logger=logger
        )
    except OSError as exc:
        _error(f"Cannot read document: {exc}")
        return 1
    if documents is None:
        return 2

    session = QuizSession(sample_size=config.sample_size, logger=logger)
    session.load_documents(questions=documents[0], answers=documents[1])
    extract = extractor or build_extractor()

    def restart(target: QuizSession) -> None:
        target.start(extract)

    try:
        restart(session)
    except QuizError as exc:
        logger.error("Quiz start failed", extra={"reason": str(exc)})
        _error(str(exc))
        return 1

    if config.interface is Interface.TUI:
        from .view.quiz import QuizApp

        QuizApp(session, restart).run()
        return 0

    console = console or Console()
    outcome = run_quiz_session(
        session,
        console,
        lambda: console.input("[bold]> [/]"),
        restart=restart,
    )
    logger.info(
        "Quiz session ended",
        extra={
            "exit_action": outcome.exit_action,
            "rounds": outcome.rounds,
            "status": session.status.value,
        },
    )
    return 0


def _cmd_inspect(
    args: argparse.Namespace, *, extractor: Optional[Extractor] = None
) -> int:
    extract = extractor or build_extractor()
    try:
        questions_text = extract(_read_document(args.questions))
        answers_text = extract(_read_document(args.answers))
    except OSError as exc:
        _error(f"Cannot read document: {exc}")
        return 1
    except QuizError as exc:
        _error(str(exc))
        return 1

    bank = parse_question_bank(questions_text)
    answer_key = parse_answer_key(answers_text)
    known = {entry.question_number for entry in answer_key}
    unmatched = [
        number
        for number in (question_number(q.raw_header) for q in bank)
        if number is not None and number not in known
    ]

    lines = [
        "quiz inspect summary:",
        f"  questions: {len(bank)}",
        f"  answers:   {len(answer_key)}",
        "  without answer: {0}".format(", ".join(unmatched) or "none"),
    ]
    sys.stdout.write("\n".join(lines) + "\n")
    if not bank:
        _error(f"No valid questions found. {FORMAT_HINT}")
        return 1
    return 0


def _cmd_documents(args: argparse.Namespace) -> int:
    try:
        loaded = _load(args)
    except QuizConfigError as exc:
        _error(str(exc))
        return 2
    store = DocumentStore(loaded.workspace.documents_dir)
    if args.clear:
        removed = store.clear()
        print(f"Forgot {removed} document(s).")
        return 0
    for slot in SLOTS:
        stored = store.describe(slot)
        if stored is None:
            print(f"{slot}: (none)")
        else:
            print(
                f"{slot}: {stored.name} ({stored.size} bytes, "
                f"saved {stored.saved_at})"
            )
    return 0


def _cmd_config_init(args: argparse.Namespace) -> int:
    try:
        if args.config is not None:
            target = args.config.expanduser()
        else:
            target = _load(args).workspace.config_file
        path = write_config_template(target, overwrite=bool(args.force))
    except QuizConfigError as exc:
        _error(str(exc))
        return 2
    print(f"Created template {path}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.command == "start":
        return _cmd_start(args)
    if args.command == "inspect":
        return _cmd_inspect(args)
    if args.command == "documents":
        return _cmd_documents(args)
    if args.command == "config" and args.action == "init":
        return _cmd_config_init(args)
    parser.print_help()  # pragma: no cover - argparse enforces commands
    return 2


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
