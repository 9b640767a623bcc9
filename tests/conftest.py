from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from carprice.config import TrainingConfig

MAKES = {
    "Ford": ["F-150", "Escape"],
    "Honda": ["Civic", "CR-V"],
    "Toyota": ["Camry", "RAV4"],
}


def _synthetic_listings(n: int = 150, seed: int = 42, with_price: bool = True) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []
    for _ in range(n):
        make = str(rng.choice(list(MAKES)))
        year = int(rng.integers(2008, 2021))
        horsepower = float(rng.integers(120, 400))
        displacement = float(rng.choice([1500.0, 2000.0, 2500.0, 3500.0]))
        city_mpg = float(rng.integers(15, 35))
        mileage = float(rng.integers(0, 150_000))
        body_type = str(rng.choice(["SUV / Crossover", "Sedan", "Pickup Truck"]))
        row = {
            "listed_date": f"2020-{int(rng.integers(1, 13)):02d}-{int(rng.integers(1, 28)):02d}",
            "back_legroom": "--" if rng.random() < 0.1 else f"{rng.uniform(33, 40):.1f} in",
            "front_legroom": f"{rng.uniform(40, 45):.1f} in",
            "fuel_tank_volume": f"{rng.uniform(11, 26):.1f} gal",
            "height": f"{rng.uniform(55, 75):.1f} in",
            "length": "--" if rng.random() < 0.05 else f"{rng.uniform(170, 230):.1f} in",
            "width": f"{rng.uniform(70, 80):.1f} in",
            "wheelbase": f"{rng.uniform(100, 145):.1f} in",
            "maximum_seating": f"{int(rng.choice([5, 7, 8]))} seats",
            "year": year,
            "horsepower": horsepower,
            "engine_displacement": displacement,
            "city_fuel_economy": city_mpg,
            "highway_fuel_economy": np.nan if rng.random() < 0.1 else city_mpg + 7.0,
            "mileage": mileage,
            "daysonmarket": int(rng.integers(1, 200)),
            "owner_count": np.nan if rng.random() < 0.3 else float(rng.integers(1, 4)),
            "seller_rating": float(rng.uniform(2.5, 5.0)),
            "body_type": body_type,
            "fuel_type": str(rng.choice(["Gasoline", "Hybrid", ""])),
            "transmission": str(rng.choice(["A", "M", "CVT", "--"])),
            "wheel_system": str(rng.choice(["FWD", "AWD", "4WD"])),
            "wheel_system_display": "Front-Wheel Drive",
            "engine_cylinders": "I4",
            "exterior_color": str(rng.choice(["Black", "White", "Silver"])),
            "interior_color": "Black",
            "listing_color": "BLACK",
            "city": str(rng.choice(["Houston", "Columbus"])),
            "trim_name": "Base",
            "model_name": str(rng.choice(MAKES[make])),
            "make_name": make,
            "torque": "200 lb-ft @ 4,000 RPM",
            "power": "170 hp @ 6,000 RPM",
            "major_options": "['Backup Camera']",
            "is_new": bool(rng.random() < 0.2),
            "franchise_dealer": bool(rng.random() < 0.5),
        }
        if with_price:
            age = 2020 - year
            log_price = 10.4 - 0.06 * age - 0.000004 * mileage + 0.001 * horsepower
            if body_type == "Pickup Truck":
                log_price += 0.15
            row = {"price": float(np.exp(log_price + rng.normal(0, 0.05))), **row}
        rows.append(row)
    return pd.DataFrame(rows)


@pytest.fixture
def make_listings():
    return _synthetic_listings


@pytest.fixture
def fast_config() -> TrainingConfig:
    return TrainingConfig(n_trees=25, n_jobs=1, random_seed=626)
