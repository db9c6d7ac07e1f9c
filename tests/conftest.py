# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from statlearn.config.app_config import AppConfig


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


# -----------------------------------------------------------------------------
# small matrices
# -----------------------------------------------------------------------------
@pytest.fixture
def scenario_X() -> np.ndarray:
    return np.array(
        [[1, 0], [2, 0], [3, 0], [10, 1], [11, 1], [12, 1]], dtype=float
    )


@pytest.fixture
def scenario_y() -> np.ndarray:
    return np.array([1, 2, 3, 10, 11, 12], dtype=float)


@pytest.fixture
def scenario_grid() -> list[float]:
    return [100.0, 10.0, 1.0, 0.1]


@pytest.fixture
def regression_data():
    """
    n=80, p=6; only x0, x1, x3 carry signal
    """
    rng = np.random.default_rng(7)
    X = rng.normal(size=(80, 6))
    X[:, 2] = 3.0 * X[:, 2] + 5.0
    y = 4.0 + 2.0 * X[:, 0] - 1.5 * X[:, 1] + 0.8 * X[:, 3] + rng.normal(scale=0.5, size=80)
    return X, y


@pytest.fixture
def blobs() -> np.ndarray:
    rng = np.random.default_rng(3)
    centers = np.array([[0.0, 0.0], [8.0, 0.0], [4.0, 8.0]])
    return np.vstack([rng.normal(c, 0.6, size=(40, 2)) for c in centers])


# -----------------------------------------------------------------------------
# csv inputs
# -----------------------------------------------------------------------------
@pytest.fixture
def birthweight_csv(tmp_path: Path) -> Path:
    """
    birthwt-shaped table, written the way R's write.csv does
    (leading unnamed row-index column).
    """
    rng = np.random.default_rng(11)
    n = 120

    age = rng.integers(15, 40, size=n)
    lwt = rng.integers(90, 220, size=n)
    race = rng.choice([1, 2, 3], size=n)
    smoke = rng.integers(0, 2, size=n)
    ptl = rng.choice([0, 0, 0, 1, 2], size=n)
    ht = rng.choice([0, 0, 0, 0, 1], size=n)
    ui = rng.choice([0, 0, 0, 1], size=n)
    ftv = rng.integers(0, 4, size=n)

    bwt = (
        2400
        + 6.0 * lwt
        - 280.0 * smoke
        - 350.0 * (race == 2)
        - 200.0 * (race == 3)
        - 450.0 * ui
        + rng.normal(scale=250.0, size=n)
    ).round()

    df = pd.DataFrame(
        {
            "low": (bwt < 2500).astype(int),
            "age": age,
            "lwt": lwt,
            "race": race,
            "smoke": smoke,
            "ptl": ptl,
            "ht": ht,
            "ui": ui,
            "ftv": ftv,
            "bwt": bwt,
        },
        index=np.arange(1, n + 1),
    )
    path = tmp_path / "birthweight.csv"
    df.to_csv(path)
    return path


@pytest.fixture
def pokemon_csv(tmp_path: Path) -> Path:
    rng = np.random.default_rng(5)
    groups = [(45, 50), (95, 60), (70, 120)]

    rows = []
    for g, (attack, defense) in enumerate(groups):
        for i in range(30):
            rows.append(
                {
                    "Name": f"mon_{g}_{i}",
                    "Type 1": ["Grass", "Fire", "Rock"][g],
                    "Type 2": None if i % 2 else "Flying",
                    "HP": int(rng.integers(40, 90)),
                    "Attack": float(round(rng.normal(attack, 6))),
                    "Defense": float(round(rng.normal(defense, 6))),
                    "Speed": int(rng.integers(30, 110)),
                    "Legendary": False,
                }
            )
    path = tmp_path / "pokemon.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


@pytest.fixture
def make_config(tmp_path: Path, birthweight_csv: Path, pokemon_csv: Path):
    """
    Factory fixture for AppConfig (testing only).

    All paths live under tmp_path; grids and folds are kept small.
    """

    def _make(**overrides) -> AppConfig:
        raw = {
            "log": {"dir": str(tmp_path / "logs")},
            "data": {
                "birthweight": {
                    "path": str(birthweight_csv),
                    "response": "bwt",
                    "drop_columns": ["low"],
                    "categorical_columns": ["race"],
                    "reference_levels": {"race": "white"},
                    "labels": {"race": {"1": "white", "2": "black", "3": "other"}},
                    "sample_size": 100,
                    "sample_seed": 1,
                },
                "pokemon": {"path": str(pokemon_csv)},
            },
            "lasso": {"n_lambdas": 20, "n_folds": 5, "cv_seed": 3},
            "kmeans": {"feature_columns": ["Attack", "Defense"], "k": 3, "seed": 9},
            "output": {"dir": str(tmp_path / "output")},
        }
        for section, values in overrides.items():
            raw.setdefault(section, {}).update(values)
        return AppConfig(**raw)

    return _make
