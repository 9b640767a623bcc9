from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from carprice.data_loading import load_listings
from carprice.diagnostics import DiagnosticReport, build_diagnostics, render_calibration_plot
from carprice.schema import DEFAULT_SCHEMA, InputSchema
from carprice.submission import build_submission, write_submission
from carprice.training_pipeline import run_pipeline
from runner.settings import RunSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchOutputs:
    submission_path: Path
    plot_path: Path
    diagnostics: DiagnosticReport
    n_predictions: int


def run_batch(settings: RunSettings, schema: InputSchema = DEFAULT_SCHEMA) -> BatchOutputs:
    config = settings.to_training_config()
    train_raw = load_listings(settings.train_path, schema, with_response=True)
    test_raw = load_listings(settings.test_path, schema, with_response=False)

    result = run_pipeline(train_raw, test_raw, config, schema)

    settings.output_dir.mkdir(parents=True, exist_ok=True)
    record = build_submission(
        identity=settings.submission_identity,
        identifier=settings.submission_identifier,
        score=result.r_squared,
        predictions=result.test_predictions,
        model_label=config.model_label,
    )
    submission_path = write_submission(record, settings.submission_path)

    report = build_diagnostics(result.train_response, result.train_predictions)
    plot_path = render_calibration_plot(result.train_response, result.train_predictions, settings.plot_path)
    logger.info(
        "Run complete: R^2=%.4f MAE=%.4f RMSE=%.4f",
        report.r_squared, report.mae, report.rmse,
        extra={"extra_data": {
            "submission_path": submission_path,
            "plot_path": plot_path,
            "r_squared": report.r_squared,
            "n_predictions": len(record.predictions),
        }},
    )
    return BatchOutputs(
        submission_path=submission_path,
        plot_path=plot_path,
        diagnostics=report,
        n_predictions=len(record.predictions),
    )
