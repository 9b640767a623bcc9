from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class EncodedMatrix:
    features: pd.DataFrame
    response: pd.Series | None = None

    @property
    def n_predictors(self) -> int:
        return int(self.features.shape[1])


@dataclass(frozen=True)
class SubmissionRecord:
    identity: str
    identifier: str
    score: float
    model_label: str
    predictions: tuple[float, ...]
