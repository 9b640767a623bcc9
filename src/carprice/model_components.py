from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestRegressor

from carprice.config import TrainingConfig
from carprice.errors import ConfigurationError, SchemaError

logger = logging.getLogger(__name__)


def resolve_mtry(n_predictors: int, mtry: int | None = None) -> int:
    if n_predictors < 1:
        raise ConfigurationError("Random forest needs at least one predictor")
    if mtry is None:
        return max(1, math.floor(math.sqrt(n_predictors)))
    if not 1 <= mtry <= n_predictors:
        raise ConfigurationError(f"mtry must lie in [1, {n_predictors}], got {mtry}")
    return mtry


@dataclass
class ForestModel:
    config: TrainingConfig

    def __post_init__(self) -> None:
        self.regressor: RandomForestRegressor | None = None
        self.feature_columns: tuple[str, ...] = ()

    def fit(self, X: pd.DataFrame, y: pd.Series) -> None:
        if X.shape[0] == 0:
            raise ConfigurationError("Cannot fit a forest on an empty training matrix")
        mtry = resolve_mtry(X.shape[1], self.config.mtry)
        self.regressor = RandomForestRegressor(
            n_estimators=self.config.n_trees,
            max_features=mtry,
            min_samples_split=self.config.min_node_size,
            bootstrap=True,
            n_jobs=self.config.n_jobs,
            random_state=self.config.random_seed,
        )
        logger.info(
            "Fitting random forest: %d trees, mtry=%d, min node size=%d, seed=%d on %d x %d",
            self.config.n_trees, mtry, self.config.min_node_size, self.config.random_seed,
            X.shape[0], X.shape[1],
        )
        self.regressor.fit(X.to_numpy(dtype=float), np.asarray(y, dtype=float))
        self.feature_columns = tuple(X.columns)

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        if self.regressor is None:
            raise RuntimeError("ForestModel is not fitted")
        if tuple(X.columns) != self.feature_columns:
            raise SchemaError("Prediction matrix columns differ from the columns the forest was fitted on")
        return self.regressor.predict(X.to_numpy(dtype=float))
