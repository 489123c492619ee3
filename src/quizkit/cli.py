"""Unified CLI entry point for quizkit."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class CommandSpec:
    """A quizkit subcommand backed by a module exposing ``main(argv)``."""

    name: str
    summary: str
    module: str
    is_tui: bool = False


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="init",
        summary="Create the workspace for quiz config, logs and documents.",
        module="quizkit.workspace.cli",
    ),
    CommandSpec(
        name="quiz",
        summary="Run a self-graded quiz from question and answer documents.",
        module="quizkit.quizzer._main",
        is_tui=True,
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {
    spec.name: spec for spec in _COMMAND_SPECS
}


def format_command_table() -> str:
    """Return a formatted command table for help output."""

    width = max(len(spec.name) for spec in _COMMAND_SPECS)
    lines = ["Available commands:"]
    for spec in _COMMAND_SPECS:
        suffix = " (TUI)" if spec.is_tui else ""
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}{suffix}")
    return "\n".join(lines)


def format_usage() -> str:
    return "\n".join(
        [
            "Usage: quizkit <command> [args...]",
            "Run `quizkit list` for commands or `quizkit help <name>` for "
            "details.",
            "",
            format_command_table(),
        ]
    )


def _unknown(command: str) -> int:
    print(f"Unknown command '{command}'.", file=sys.stderr)
    print(format_command_table(), file=sys.stderr)
    return 2


def _handle_version() -> int:
    try:
        version = metadata.version("quizkit")
    except metadata.PackageNotFoundError:
        version = "unknown"
    print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        print(format_usage())
        return 0
    spec = COMMANDS.get(argv[0])
    if spec is None:
        return _unknown(argv[0])
    print(f"{spec.name}: {spec.summary}")
    print(f"Run `quizkit {spec.name} --help` for command options.")
    return 0


def _dispatch(spec: CommandSpec, argv: Sequence[str]) -> int:
    entry = import_module(spec.module).main
    try:
        result = entry(list(argv))
    except SystemExit as exc:
        return _exit_code(exc)
    return result if isinstance(result, int) else 0


def _exit_code(exc: SystemExit) -> int:
    # argparse exits with 0 for --help and 2 for usage errors.
    if exc.code is None:
        return 0
    if isinstance(exc.code, int):
        return exc.code
    print(exc.code, file=sys.stderr)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])

    if not args:
        print(format_usage())
        return 2

    head, *tail = args

    if head in ("-h", "--help"):
        print(format_usage())
        return 0
    if head in ("-V", "--version", "version"):
        return _handle_version()
    if head == "list":
        print(format_command_table())
        return 0
    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is None:
        return _unknown(head)
    return _dispatch(spec, tail)


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
