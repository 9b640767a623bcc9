from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrainingConfig:
    n_trees: int = 700
    min_node_size: int = 10
    mtry: int | None = None  # None: floor(sqrt(n_predictors))
    n_jobs: int = -1
    random_seed: int = 626
    missing_tokens: tuple[str, ...] = ("--", "")
    unknown_level: str = "Unknown"
    displacement_per_liter: float = 1000.0  # engine_displacement is recorded in cc
    response_column: str = "price"
    log_response_column: str = "log_price"
    model_label: str = "Random Forest"
    drop_columns: tuple[str, ...] = (
        "listed_date",
        "wheel_system_display",
        "year",
        "major_options",
        "engine_cylinders",
        "exterior_color",
        "interior_color",
        "city",
        "trim_name",
        "model_name",
        "make_name",
        "torque",
        "power",
    )
