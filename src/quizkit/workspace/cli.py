"""CLI entry points for shared workspace management."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from quizkit.core import workspace as workspace_mod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizkit init",
        description=(
            "Bootstrap the quizkit workspace (config, logs and remembered "
            "documents)."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to QUIZKIT_DATA_HOME "
            "or ~/.quizkit-data)."
        ),
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _status(workspace: workspace_mod.Workspace, name: str) -> str:
    return "created" if name in workspace.created else "exists"


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        workspace = workspace_mod.open_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    if args.quiet:
        return 0

    areas = workspace.areas()
    width = max(len(name) for name, _ in areas)
    lines = [
        f"Workspace ready at {workspace.home} "
        f"({_status(workspace, 'home')})",
        "Subdirectories:",
    ]
    for name, directory in areas:
        status = _status(workspace, name)
        lines.append(f"  {name.ljust(width)}  {directory} ({status})")
    lines.append(f"Config file: {workspace.config_file}")

    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
