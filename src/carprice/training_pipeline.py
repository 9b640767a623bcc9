from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from carprice.config import TrainingConfig
from carprice.errors import ConfigurationError, SchemaError
from carprice.feature_engineering import attach_log_response, synthesize_features
from carprice.metrics import r_squared
from carprice.model_components import ForestModel
from carprice.normalization import normalize_fields
from carprice.preprocessing import PreprocessingState, apply_preprocessing, fit_preprocessing
from carprice.schema import DEFAULT_SCHEMA, InputSchema

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    state: PreprocessingState
    model: ForestModel
    train_response: np.ndarray
    train_predictions: np.ndarray
    test_predictions: np.ndarray
    r_squared: float
    n_predictors: int


def prepare_frames(
    train_raw: pd.DataFrame,
    test_raw: pd.DataFrame,
    config: TrainingConfig,
    schema: InputSchema = DEFAULT_SCHEMA,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    train = normalize_fields(train_raw, schema, config)
    train = attach_log_response(synthesize_features(train, config), config)
    test = synthesize_features(normalize_fields(test_raw, schema, config), config)
    return train, test


def run_pipeline(
    train_raw: pd.DataFrame,
    test_raw: pd.DataFrame,
    config: TrainingConfig | None = None,
    schema: InputSchema = DEFAULT_SCHEMA,
) -> PipelineResult:
    config = config or TrainingConfig()
    if train_raw.empty:
        raise ConfigurationError("Training data is empty")
    if schema.response != config.response_column:
        raise ConfigurationError(
            f"Schema response '{schema.response}' does not match configured response '{config.response_column}'"
        )

    train, test = prepare_frames(train_raw, test_raw, config, schema)
    state = fit_preprocessing(train, schema, config)
    train_matrix = apply_preprocessing(state, train)
    test_matrix = apply_preprocessing(state, test)
    if list(train_matrix.features.columns) != list(test_matrix.features.columns):
        raise SchemaError("Encoded training and test matrices do not share a column schema")
    if train_matrix.response is None:
        raise ConfigurationError("Encoded training matrix carries no response")

    model = ForestModel(config)
    model.fit(train_matrix.features, train_matrix.response)
    train_predictions = model.predict(train_matrix.features)
    test_predictions = model.predict(test_matrix.features) if len(test_matrix.features) else np.empty(0)
    y = train_matrix.response.to_numpy(dtype=float)
    score = r_squared(y, train_predictions)
    logger.info(
        "Training R^2 = %.4f over %d rows and %d predictors, %d test predictions",
        score, len(y), train_matrix.n_predictors, len(test_predictions),
    )
    return PipelineResult(
        state=state,
        model=model,
        train_response=y,
        train_predictions=train_predictions,
        test_predictions=test_predictions,
        r_squared=score,
        n_predictors=train_matrix.n_predictors,
    )
