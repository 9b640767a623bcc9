"""
Console logging for batch runs.

Every record is stamped with the current ``run_id`` so the lines of one run
can be grouped. Structured fields passed as ``extra={"extra_data": {...}}``
(output paths, scores, row counts) are emitted under ``"data"`` in JSON mode
and appended as ``key=value`` pairs in text mode.
"""
from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import PurePath
from typing import Any, Mapping

run_id: ContextVar[str] = ContextVar("run_id", default="")

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] [run %(run_id)s] %(message)s"


def new_run_id() -> str:
    rid = uuid.uuid4().hex[:12]
    run_id.set(rid)
    return rid


def _structured_data(record: logging.LogRecord) -> dict[str, Any]:
    data = getattr(record, "extra_data", None)
    if not isinstance(data, Mapping):
        return {}
    # paths render as plain strings in both formats
    return {k: (str(v) if isinstance(v, PurePath) else v) for k, v in data.items()}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": run_id.get(""),
        }
        data = _structured_data(record)
        if data:
            entry["data"] = data
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        data = _structured_data(record)
        if not data:
            return line
        fields = " ".join(f"{k}={v}" for k, v in data.items())
        head, sep, tail = line.partition("\n")
        return f"{head} | {fields}{sep}{tail}"


class RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = run_id.get("") or "-"
        return True


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RunIdFilter())
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
