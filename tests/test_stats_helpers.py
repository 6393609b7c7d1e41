import numpy as np
import pandas as pd
import pytest

from utils.constants import FEATURE_COLS
from utils.stats_helpers import (
    correlation_matrix,
    correlation_pvalues,
    descriptive_stats,
    missing_summary,
    species_summary,
)


class TestDescriptiveStats:
    """Tests for single-series summaries"""

    def test_basic_values(self):
        s = pd.Series([1.0, 2.0, 3.0, 4.0, np.nan])
        out = descriptive_stats(s)
        assert out["count"] == 4
        assert out["mean"] == pytest.approx(2.5)
        assert out["median"] == pytest.approx(2.5)
        assert out["iqr"] == pytest.approx(out["q75"] - out["q25"])


class TestGroupSummaries:
    """Tests for per-species and missing-value summaries"""

    def test_species_summary_shape(self, penguin_frame):
        out = species_summary(penguin_frame, FEATURE_COLS)
        assert list(out.index) == ["Adelie", "Chinstrap", "Gentoo"]
        assert out.shape == (3, 8)
        assert out[("body_mass_g", "mean")]["Gentoo"] > out[("body_mass_g", "mean")]["Adelie"]

    def test_missing_summary(self, penguin_frame):
        out = missing_summary(penguin_frame)
        assert out.loc["flipper_length_mm", "Missing"] == 2
        assert out.loc["species", "Missing"] == 0
        assert out.loc["flipper_length_mm", "Percent"] == pytest.approx(2 / len(penguin_frame) * 100)


class TestCorrelation:
    """Tests for correlation matrices and p-values"""

    def test_matrix_is_symmetric_with_unit_diagonal(self, penguin_frame):
        corr = correlation_matrix(penguin_frame, FEATURE_COLS)
        np.testing.assert_allclose(corr.to_numpy(), corr.to_numpy().T)
        np.testing.assert_allclose(np.diag(corr.to_numpy()), 1.0)

    def test_default_uses_numeric_columns(self, penguin_frame):
        corr = correlation_matrix(penguin_frame)
        assert list(corr.columns) == FEATURE_COLS

    @pytest.mark.parametrize("method", ["pearson", "spearman"])
    def test_pvalues_symmetric_and_in_range(self, penguin_frame, method):
        pvals = correlation_pvalues(penguin_frame, FEATURE_COLS, method=method)
        np.testing.assert_allclose(pvals.to_numpy(), pvals.to_numpy().T)
        assert ((pvals >= 0) & (pvals <= 1)).all().all()

    def test_strong_relationship_is_significant(self, penguin_frame):
        pvals = correlation_pvalues(penguin_frame, FEATURE_COLS)
        assert pvals.loc["flipper_length_mm", "body_mass_g"] < 1e-6

    def test_too_few_pairs_give_nan(self):
        frame = pd.DataFrame({"x": [1.0, 2.0, np.nan], "y": [1.0, np.nan, 3.0]})
        pvals = correlation_pvalues(frame, ["x", "y"])
        assert np.isnan(pvals.loc["x", "y"])
