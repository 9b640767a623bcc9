from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from carprice.metrics import mae, r_squared, rmse  # noqa: E402

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticReport:
    r_squared: float
    mae: float
    rmse: float
    n_rows: int


def build_diagnostics(y_true: Sequence[float], y_pred: Sequence[float]) -> DiagnosticReport:
    return DiagnosticReport(
        r_squared=r_squared(y_true, y_pred),
        mae=mae(y_true, y_pred),
        rmse=rmse(y_true, y_pred),
        n_rows=len(y_true),
    )


def render_calibration_plot(
    y_true: Sequence[float],
    y_pred: Sequence[float],
    path: str | Path,
    title: str = "Training set: y vs ŷ",
) -> Path:
    """Scatter of truth against in-sample prediction with the y = x reference line."""
    target = Path(path)
    arr_true = np.asarray(y_true, dtype=float)
    arr_pred = np.asarray(y_pred, dtype=float)

    fig, ax = plt.subplots(figsize=(9, 6.5), dpi=100)
    try:
        ax.scatter(arr_true, arr_pred, s=4, marker="o", color="black", edgecolors="none")
        ax.axline((0.0, 0.0), slope=1.0, color="red", linewidth=3)
        ax.set_xlabel("y (log price)")
        ax.set_ylabel("ŷ (predicted log price)")
        ax.set_title(title)
        fig.savefig(target)
    finally:
        plt.close(fig)
    logger.info("Saved calibration plot to: %s", target)
    return target
