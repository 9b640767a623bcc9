from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from carprice.schema import DEFAULT_SCHEMA, InputSchema, validate_columns

logger = logging.getLogger(__name__)


def load_listings(
    path: str | Path,
    schema: InputSchema = DEFAULT_SCHEMA,
    with_response: bool = True,
) -> pd.DataFrame:
    frame = pd.read_csv(path, encoding="utf-8-sig", low_memory=False)
    validate_columns(frame, schema, with_response=with_response)
    logger.info("Loaded %d rows x %d columns from %s", len(frame), frame.shape[1], path)
    return frame
