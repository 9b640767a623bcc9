"""
Submission exporter.

File layout, one entry per line: identity, identifier, fit-quality score,
model label, then one prediction per test row in input order.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable

from carprice.data_models import SubmissionRecord

logger = logging.getLogger(__name__)


def format_value(value: float) -> str:
    return repr(float(value))


def build_submission(
    identity: str,
    identifier: str,
    score: float,
    predictions: Iterable[float],
    model_label: str = "Random Forest",
) -> SubmissionRecord:
    return SubmissionRecord(
        identity=identity,
        identifier=identifier,
        score=float(score),
        model_label=model_label,
        predictions=tuple(float(p) for p in predictions),
    )


def submission_lines(record: SubmissionRecord) -> list[str]:
    header = [record.identity, record.identifier, format_value(record.score), record.model_label]
    return header + [format_value(p) for p in record.predictions]


def _target_mode(target: Path) -> int:
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_submission(record: SubmissionRecord, path: str | Path) -> Path:
    """
    Write ``record`` to ``path``, replacing any existing file.

    Lines go to a temporary sibling first and are moved into place only once
    the handle is closed, so a failed write leaves no partial submission.
    """
    target = Path(path)
    handle = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="\n",
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(handle.name)
    try:
        with handle:
            for line in submission_lines(record):
                handle.write(line + "\n")
        # NamedTemporaryFile is created 0600; match an ordinary new or replaced file.
        os.chmod(tmp_path, _target_mode(target))
        tmp_path.replace(target)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Wrote submission file to: %s", target)
    return target
