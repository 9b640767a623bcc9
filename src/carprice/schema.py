from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

from carprice.errors import SchemaError

ColumnKind = Literal["response", "date", "mixed_numeric", "numeric", "categorical"]


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    kind: ColumnKind


@dataclass(frozen=True)
class InputSchema:
    columns: tuple[ColumnSpec, ...]

    def names(self, kind: ColumnKind) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns if c.kind == kind)

    def expected_columns(self, with_response: bool) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns if with_response or c.kind != "response")

    @property
    def response(self) -> str:
        names = self.names("response")
        if len(names) != 1:
            raise SchemaError(f"Schema must declare exactly one response column, found {len(names)}")
        return names[0]


def _specs(kind: ColumnKind, *names: str) -> tuple[ColumnSpec, ...]:
    return tuple(ColumnSpec(name, kind) for name in names)


DEFAULT_SCHEMA = InputSchema(
    columns=(
        *_specs("response", "price"),
        *_specs("date", "listed_date"),
        *_specs(
            "mixed_numeric",
            "back_legroom",
            "front_legroom",
            "fuel_tank_volume",
            "height",
            "length",
            "width",
            "wheelbase",
            "maximum_seating",
        ),
        *_specs(
            "numeric",
            "year",
            "horsepower",
            "engine_displacement",
            "city_fuel_economy",
            "highway_fuel_economy",
            "mileage",
            "daysonmarket",
            "owner_count",
            "seller_rating",
        ),
        *_specs(
            "categorical",
            "body_type",
            "fuel_type",
            "transmission",
            "wheel_system",
            "wheel_system_display",
            "engine_cylinders",
            "exterior_color",
            "interior_color",
            "listing_color",
            "city",
            "trim_name",
            "model_name",
            "make_name",
            "torque",
            "power",
            "major_options",
            "is_new",
            "franchise_dealer",
        ),
    )
)


def validate_columns(frame: pd.DataFrame, schema: InputSchema, with_response: bool) -> None:
    """
    Fail fast unless ``frame`` carries exactly the declared columns.

    Column order is not significant; names are.
    """
    expected = schema.expected_columns(with_response)
    present = [str(c) for c in frame.columns]
    missing = [c for c in expected if c not in present]
    unexpected = [c for c in present if c not in expected]
    duplicated = sorted({c for c in present if present.count(c) > 1})
    problems = []
    if missing:
        problems.append(f"missing columns {missing}")
    if unexpected:
        problems.append(f"unexpected columns {unexpected}")
    if duplicated:
        problems.append(f"duplicated columns {duplicated}")
    if problems:
        raise SchemaError("Input schema mismatch: " + "; ".join(problems))
