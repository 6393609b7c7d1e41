import os
import sys

import numpy as np
import pandas as pd
import pytest

# Add the project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from utils.constants import FEATURE_COLS

# Species means of the Palmer data, in FEATURE_COLS order
SPECIES_PROFILES = {
    "Adelie": {"n": 150, "island": "Torgersen", "mean": [38.79, 18.35, 189.95, 3700.66]},
    "Chinstrap": {"n": 68, "island": "Dream", "mean": [48.83, 18.42, 195.82, 3733.09]},
    "Gentoo": {"n": 122, "island": "Biscoe", "mean": [47.50, 14.98, 217.19, 5076.02]},
}

# Whole-table standard deviations and correlations of the Palmer data
PALMER_SD = np.array([5.46, 1.97, 14.06, 801.95])
PALMER_CORR = np.array([
    [1.000, -0.235, 0.656, 0.595],
    [-0.235, 1.000, -0.584, -0.472],
    [0.656, -0.584, 1.000, 0.871],
    [0.595, -0.472, 0.871, 1.000],
])


def pooled_within_covariance():
    """Within-species covariance that, added to the spread of the species means,
    gives back the whole-table covariance of the Palmer data."""
    counts = np.array([p["n"] for p in SPECIES_PROFILES.values()], dtype=float)
    means = np.array([p["mean"] for p in SPECIES_PROFILES.values()])
    weights = counts / counts.sum()
    centred = means - weights @ means
    between = (centred * weights[:, None]).T @ centred
    return np.outer(PALMER_SD, PALMER_SD) * PALMER_CORR - between


@pytest.fixture
def penguin_frame():
    """340 complete penguin-shaped records plus two with missing measurements."""
    rng = np.random.default_rng(7)
    within = pooled_within_covariance()
    parts = []
    for species, profile in SPECIES_PROFILES.items():
        values = rng.multivariate_normal(profile["mean"], within, size=profile["n"])
        part = pd.DataFrame(values, columns=FEATURE_COLS)
        part.insert(0, "island", profile["island"])
        part.insert(0, "species", species)
        part["sex"] = np.where(np.arange(profile["n"]) % 2 == 0, "Male", "Female")
        parts.append(part)

    incomplete = pd.DataFrame({
        "species": ["Adelie", "Gentoo"],
        "island": ["Torgersen", "Biscoe"],
        "bill_length_mm": [np.nan, 46.1],
        "bill_depth_mm": [np.nan, 13.2],
        "flipper_length_mm": [np.nan, np.nan],
        "body_mass_g": [np.nan, 4500.0],
        "sex": [np.nan, np.nan],
    })
    parts.insert(1, incomplete)
    return pd.concat(parts, ignore_index=True)


@pytest.fixture
def correlated_frame():
    """Gaussian data with a known, non-trivial correlation structure."""
    rng = np.random.default_rng(42)
    latent = rng.normal(size=(200, 5))
    mixing = np.array([
        [1.0, 0.8, 0.3, 0.0, 0.1],
        [0.0, 0.5, 1.0, 0.2, 0.0],
        [0.4, 0.0, 0.2, 1.0, 0.3],
        [0.2, 0.1, 0.0, 0.3, 1.0],
        [0.9, 0.7, 0.2, 0.1, 0.0],
    ])
    data = latent @ mixing * np.array([1.0, 10.0, 0.1, 1000.0, 3.0]) + np.array([5, -2, 0, 40, 7])
    return pd.DataFrame(data, columns=["a", "b", "c", "d", "e"])
