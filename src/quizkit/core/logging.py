"""JSON-lines run log for quiz commands."""

from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
import uuid
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, MutableMapping

__all__ = [
    "LOGGER_NAME",
    "JsonLogFormatter",
    "RunLog",
    "open_run_log",
]

LOGGER_NAME = "quizkit.quizzer"

_MAX_BYTES = 2 * 1024 * 1024
_BACKUP_COUNT = 3

# Attributes every LogRecord carries; anything else came in through extra=.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class RunLog(logging.LoggerAdapter):
    """Logger adapter stamping each record with the id of one quiz run.

    Unlike the stock adapter, per-call ``extra`` values are merged with the
    run fields instead of replacing them.
    """

    @property
    def run_id(self) -> str:
        return str(self.extra["run"])

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def open_run_log(
    log_file: Path,
    *,
    level: str = "INFO",
    verbose: bool = False,
    name: str = LOGGER_NAME,
) -> tuple[RunLog, Path]:
    """Point the quiz logger at ``log_file`` and start a new run.

    Returns the run adapter and the file actually written to, which is in
    the temp directory when ``log_file`` cannot be opened. ``verbose`` adds
    a stderr handler and logs everything down to DEBUG.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    handler = _attach_file_handler(logger, log_file)
    handler.setLevel(logging.DEBUG if verbose else _level(level))
    _toggle_stderr(logger, enabled=verbose)

    run = RunLog(logger, {"run": uuid.uuid4().hex[:12]})
    return run, Path(handler.baseFilename)


def _attach_file_handler(
    logger: logging.Logger, log_file: Path
) -> RotatingFileHandler:
    wanted = os.path.abspath(log_file)
    for handler in list(logger.handlers):
        if not isinstance(handler, RotatingFileHandler):
            continue
        if handler.baseFilename == wanted:
            return handler
        logger.removeHandler(handler)
        handler.close()

    try:
        handler = _rotating_handler(Path(log_file))
    except OSError:
        handler = _rotating_handler(_fallback_dir() / Path(log_file).name)
    logger.addHandler(handler)
    return handler


def _rotating_handler(path: Path) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(JsonLogFormatter())
    return handler


def _toggle_stderr(logger: logging.Logger, *, enabled: bool) -> None:
    # RotatingFileHandler subclasses StreamHandler; match the exact type.
    current = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    if enabled and not current:
        console = logging.StreamHandler(stream=sys.stderr)
        console.setLevel(logging.DEBUG)
        console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(console)
    elif not enabled:
        for handler in current:
            logger.removeHandler(handler)
            handler.close()


def _level(name: str) -> int:
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return repr(value)


def _fallback_dir() -> Path:
    return Path(tempfile.gettempdir()) / "quizkit-logs"
