"""
Field normalizer: turns raw listing text into clean numeric and categorical
columns.

Nothing here raises on malformed values. Unparsable numbers and dates become
missing and are handled downstream by median / "Unknown" imputation.
"""
from __future__ import annotations

import math
import re
from typing import Any, Sequence

import numpy as np
import pandas as pd

from carprice.config import TrainingConfig
from carprice.errors import SchemaError
from carprice.schema import InputSchema

_NUMBER_PATTERN = re.compile(r"[-+]?(?:\d[\d,]*(?:\.\d*)?|\.\d+)")
_YMD_PATTERN = r"^\s*(\d{4})\D?(\d{1,2})\D?(\d{1,2})"


def parse_first_number(value: Any) -> float:
    """Return the first number found in ``value`` ("35.4 in" -> 35.4), NaN if none."""
    if value is None:
        return math.nan
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
    else:
        match = _NUMBER_PATTERN.search(str(value))
        if match is None:
            return math.nan
        try:
            number = float(match.group(0).replace(",", ""))
        except ValueError:
            return math.nan
    return number if math.isfinite(number) else math.nan


def normalize_numeric_text(series: pd.Series) -> pd.Series:
    if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series):
        return series.astype(float).replace([np.inf, -np.inf], np.nan)
    return series.map(parse_first_number).astype(float)


def normalize_numeric(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").astype(float).replace([np.inf, -np.inf], np.nan)


def parse_listing_dates(series: pd.Series) -> pd.Series:
    """Year-month-day with any or no separator ("2020-09-01", "2020/9/1", "20200901")."""
    if pd.api.types.is_datetime64_any_dtype(series):
        return series
    parts = series.astype("string").str.extract(_YMD_PATTERN)
    text = parts[0] + "-" + parts[1].str.zfill(2) + "-" + parts[2].str.zfill(2)
    return pd.to_datetime(text, format="%Y-%m-%d", errors="coerce")


def normalize_missing_tokens(series: pd.Series, tokens: Sequence[str] = ("--", "")) -> pd.Series:
    missing = set(tokens)

    def _clean(value: Any) -> Any:
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return np.nan
        text = str(value).strip()
        return np.nan if text in missing else text

    return series.map(_clean).astype(object)


def normalize_fields(frame: pd.DataFrame, schema: InputSchema, config: TrainingConfig) -> pd.DataFrame:
    out = frame.copy()
    for col in schema.columns:
        if col.name not in out.columns:
            if col.kind == "response":
                continue
            raise SchemaError(f"Column {col.name!r} is declared but absent from the input")
        column = out[col.name]
        if col.kind == "date":
            out[col.name] = parse_listing_dates(column)
        elif col.kind == "mixed_numeric":
            out[col.name] = normalize_numeric_text(column)
        elif col.kind in ("numeric", "response"):
            out[col.name] = normalize_numeric(column)
        else:
            out[col.name] = normalize_missing_tokens(column, config.missing_tokens)
    return out
