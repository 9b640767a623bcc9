from __future__ import annotations

from typing import Sequence

import numpy as np
from sklearn.metrics import r2_score


def _paired(y_true: Sequence[float], y_pred: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    arr_true = np.asarray(y_true, dtype=float)
    arr_pred = np.asarray(y_pred, dtype=float)
    if arr_true.shape != arr_pred.shape:
        raise ValueError(f"Shape mismatch: {arr_true.shape} vs {arr_pred.shape}")
    return arr_true, arr_pred


def mae(y_true: Sequence[float], y_pred: Sequence[float]) -> float:
    """Mean absolute error in log-price units."""
    arr_true, arr_pred = _paired(y_true, y_pred)
    return float(np.mean(np.abs(arr_true - arr_pred)))


def rmse(y_true: Sequence[float], y_pred: Sequence[float]) -> float:
    arr_true, arr_pred = _paired(y_true, y_pred)
    return float(np.sqrt(np.mean(np.square(arr_true - arr_pred))))


def r_squared(y_true: Sequence[float], y_pred: Sequence[float]) -> float:
    """Coefficient of determination, 1 - SSE / SST."""
    return float(r2_score(*_paired(y_true, y_pred)))
