"""
Imputer / encoder with an explicit fit-on-train, apply-anywhere split.

``fit_preprocessing`` learns medians, category vocabularies and the set of
zero-variance columns from training data only and returns them as a plain
``PreprocessingState`` value. ``apply_preprocessing`` uses that state
unchanged on training or test data, so both share one column schema.
"""
from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd
from sklearn.feature_selection import VarianceThreshold
from sklearn.preprocessing import OneHotEncoder

from carprice.config import TrainingConfig
from carprice.data_models import EncodedMatrix
from carprice.errors import ConfigurationError, SchemaError
from carprice.feature_engineering import predictor_columns
from carprice.schema import InputSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessingState:
    numeric_columns: tuple[str, ...]
    medians: Mapping[str, float]
    categorical_levels: Mapping[str, tuple[str, ...]]
    feature_columns: tuple[str, ...] = ()
    dropped_columns: tuple[str, ...] = ()
    unknown_level: str = "Unknown"
    response_column: str | None = None

    @property
    def input_columns(self) -> tuple[str, ...]:
        return tuple(self.numeric_columns) + tuple(self.categorical_levels)

    def to_dict(self) -> dict[str, Any]:
        return {
            "numeric_columns": list(self.numeric_columns),
            "medians": {k: (None if math.isnan(v) else v) for k, v in self.medians.items()},
            "categorical_levels": {k: list(v) for k, v in self.categorical_levels.items()},
            "feature_columns": list(self.feature_columns),
            "dropped_columns": list(self.dropped_columns),
            "unknown_level": self.unknown_level,
            "response_column": self.response_column,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> PreprocessingState:
        return cls(
            numeric_columns=tuple(payload["numeric_columns"]),
            medians={k: (math.nan if v is None else float(v)) for k, v in payload["medians"].items()},
            categorical_levels={k: tuple(v) for k, v in payload["categorical_levels"].items()},
            feature_columns=tuple(payload["feature_columns"]),
            dropped_columns=tuple(payload["dropped_columns"]),
            unknown_level=payload["unknown_level"],
            response_column=payload["response_column"],
        )


def _require_columns(frame: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise SchemaError(f"Preprocessing expected columns that are absent: {missing}")


def _categorical_frame(frame: pd.DataFrame, columns: Sequence[str], unknown_level: str) -> pd.DataFrame:
    return frame.loc[:, list(columns)].astype(object).fillna(unknown_level).astype(str)


def _one_hot(
    levels: Mapping[str, tuple[str, ...]],
    categorical: pd.DataFrame,
) -> pd.DataFrame:
    columns = list(levels)
    if not columns:
        return pd.DataFrame(index=categorical.index)
    # Categories are fixed, so fitting on a stub row only binds the stored vocabulary.
    # Levels outside it encode as all zeros.
    encoder = OneHotEncoder(
        categories=[list(levels[c]) for c in columns],
        handle_unknown="ignore",
        sparse_output=False,
        dtype=float,
    )
    encoder.fit(pd.DataFrame({c: [levels[c][0]] for c in columns}))
    names = encoder.get_feature_names_out(columns)
    if categorical.empty:
        return pd.DataFrame(columns=names, index=categorical.index, dtype=float)
    encoded = encoder.transform(categorical[columns])
    return pd.DataFrame(encoded, columns=names, index=categorical.index)


def _encode(state: PreprocessingState, frame: pd.DataFrame) -> pd.DataFrame:
    numeric = frame.loc[:, list(state.numeric_columns)].astype(float)
    numeric = numeric.fillna(value=dict(state.medians))
    categorical = _categorical_frame(frame, list(state.categorical_levels), state.unknown_level)
    return pd.concat([numeric, _one_hot(state.categorical_levels, categorical)], axis=1)


def fit_preprocessing(
    frame: pd.DataFrame,
    schema: InputSchema,
    config: TrainingConfig,
) -> PreprocessingState:
    if frame.empty:
        raise ConfigurationError("Cannot fit preprocessing on an empty training set")
    numeric_cols, categorical_cols = predictor_columns(schema, config)
    _require_columns(frame, numeric_cols + categorical_cols)

    medians = {c: float(frame[c].astype(float).median()) for c in numeric_cols}
    levels: dict[str, tuple[str, ...]] = {}
    if categorical_cols:
        vocabulary = OneHotEncoder(handle_unknown="ignore", sparse_output=False)
        vocabulary.fit(_categorical_frame(frame, categorical_cols, config.unknown_level))
        for col, observed in zip(categorical_cols, vocabulary.categories_):
            levels[col] = tuple(sorted({str(v) for v in observed} | {config.unknown_level}))

    provisional = PreprocessingState(
        numeric_columns=numeric_cols,
        medians=medians,
        categorical_levels=levels,
        unknown_level=config.unknown_level,
    )
    encoded = _encode(provisional, frame)
    selector = VarianceThreshold(threshold=0.0)
    try:
        with warnings.catch_warnings():
            # all-missing numeric columns have NaN variance and are dropped
            warnings.simplefilter("ignore", RuntimeWarning)
            selector.fit(encoded.to_numpy(dtype=float))
    except ValueError as exc:
        raise ConfigurationError("No predictors remain after preprocessing") from exc
    support = selector.get_support()
    features = tuple(c for c, keep in zip(encoded.columns, support) if keep)
    constant = tuple(c for c, keep in zip(encoded.columns, support) if not keep)
    if not features:
        raise ConfigurationError("No predictors remain after preprocessing")

    response = config.log_response_column if config.log_response_column in frame.columns else None
    logger.info(
        "Preprocessing fitted on %d rows: %d predictors kept, %d zero-variance columns dropped",
        len(frame), len(features), len(constant),
    )
    return PreprocessingState(
        numeric_columns=numeric_cols,
        medians=medians,
        categorical_levels=levels,
        feature_columns=features,
        dropped_columns=constant,
        unknown_level=config.unknown_level,
        response_column=response,
    )


def apply_preprocessing(state: PreprocessingState, frame: pd.DataFrame) -> EncodedMatrix:
    _require_columns(frame, state.input_columns)
    encoded = _encode(state, frame)
    features = encoded.loc[:, list(state.feature_columns)]
    response = None
    if state.response_column is not None and state.response_column in frame.columns:
        response = frame[state.response_column].astype(float)
    return EncodedMatrix(features=features, response=response)
