from __future__ import annotations

import numpy as np
import pandas as pd

from carprice.config import TrainingConfig
from carprice.errors import ConfigurationError, SchemaError
from carprice.schema import InputSchema

ENGINEERED_COLUMNS: tuple[str, ...] = ("age", "power_density", "avg_mpg", "vehicle_footprint")

_SOURCE_COLUMNS: tuple[str, ...] = (
    "listed_date",
    "year",
    "horsepower",
    "engine_displacement",
    "city_fuel_economy",
    "highway_fuel_economy",
    "length",
    "width",
)


def synthesize_features(frame: pd.DataFrame, config: TrainingConfig) -> pd.DataFrame:
    missing = [c for c in _SOURCE_COLUMNS if c not in frame.columns]
    if missing:
        raise SchemaError(f"Cannot derive engineered features, missing columns {missing}")

    out = frame.copy()
    listing_year = pd.to_datetime(out["listed_date"], errors="coerce").dt.year.astype(float)
    out["age"] = listing_year - out["year"].astype(float)

    horsepower = out["horsepower"].astype(float)
    displacement = out["engine_displacement"].astype(float)
    liters = displacement / config.displacement_per_liter
    valid_power = horsepower.notna() & displacement.notna() & (displacement > 0)
    out["power_density"] = (horsepower / liters.where(valid_power)).where(valid_power)

    city = out["city_fuel_economy"].astype(float)
    highway = out["highway_fuel_economy"].astype(float)
    out["avg_mpg"] = ((city + highway) / 2).where(city.notna() & highway.notna())

    length = out["length"].astype(float)
    width = out["width"].astype(float)
    out["vehicle_footprint"] = (length * width).where(length.notna() & width.notna())

    engineered = list(ENGINEERED_COLUMNS)
    out[engineered] = out[engineered].replace([np.inf, -np.inf], np.nan)

    drop = [c for c in config.drop_columns if c in out.columns]
    return out.drop(columns=drop)


def attach_log_response(frame: pd.DataFrame, config: TrainingConfig) -> pd.DataFrame:
    """Replace the raw price with its natural log, the regression target."""
    if config.response_column not in frame.columns:
        raise SchemaError(f"Training data has no {config.response_column!r} column")
    price = pd.to_numeric(frame[config.response_column], errors="coerce").astype(float)
    invalid = int((price.isna() | (price <= 0)).sum())
    if invalid:
        raise ConfigurationError(
            f"{invalid} training rows have a missing or non-positive {config.response_column!r}"
        )
    out = frame.drop(columns=[config.response_column])
    out[config.log_response_column] = np.log(price)
    return out


def predictor_columns(schema: InputSchema, config: TrainingConfig) -> tuple[tuple[str, ...], tuple[str, ...]]:
    dropped = set(config.drop_columns)
    numeric = [
        c.name for c in schema.columns
        if c.kind in ("mixed_numeric", "numeric") and c.name not in dropped
    ]
    numeric.extend(c for c in ENGINEERED_COLUMNS if c not in dropped)
    categorical = [
        c.name for c in schema.columns
        if c.kind == "categorical" and c.name not in dropped
    ]
    return tuple(numeric), tuple(categorical)
