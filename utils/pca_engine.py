"""Principal Component Analysis on standardized columns.

Everything here is pure: a table goes in, an immutable ``PCAResult`` comes out.
The decomposition itself is ``numpy.linalg.svd``; this module only handles the
cleaning, scaling, ordering and sign bookkeeping around it.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


class DataError(ValueError):
    """Raised when a table cannot be decomposed as requested."""


def _as_frame(table):
    if isinstance(table, pd.DataFrame):
        return table
    return pd.DataFrame(list(table))


def _numeric_columns(frame, columns):
    columns = list(columns)
    if not columns:
        raise DataError("Select at least one numeric column for PCA.")
    absent = [c for c in columns if c not in frame.columns]
    if absent:
        raise DataError(f"Column(s) not found in table: {', '.join(map(str, absent))}")
    repeated = sorted({str(c) for c in columns if columns.count(c) > 1})
    if repeated:
        raise DataError(f"Column(s) selected more than once: {', '.join(repeated)}")

    numeric = {}
    for col in columns:
        try:
            numeric[col] = pd.to_numeric(frame[col], errors="raise").astype(float)
        except (TypeError, ValueError) as exc:
            raise DataError(f"Column '{col}' contains non-numeric values") from exc
        # NaN means missing and is dropped later; infinities are not.
        if np.isinf(numeric[col].to_numpy()).any():
            raise DataError(f"Column '{col}' contains infinite values")
    return pd.DataFrame(numeric, index=frame.index, columns=columns)


def _complete_rows(frame, columns):
    numeric = _numeric_columns(frame, columns)
    keep = numeric.notna().all(axis=1).to_numpy()
    return numeric[keep], keep


def clean_table(table, columns) -> Tuple[pd.DataFrame, int]:
    """Return the selected columns with incomplete records removed, and how many were removed."""
    clean, keep = _complete_rows(_as_frame(table), columns)
    return clean, int((~keep).sum())


@dataclass(frozen=True, eq=False)
class Standardization:
    """A standardized matrix together with the parameters that produced it."""

    matrix: pd.DataFrame
    means: pd.Series
    scales: pd.Series


def _standardize_clean(clean: pd.DataFrame) -> Standardization:
    means = clean.mean()
    scales = clean.std(ddof=1)
    # NaN scales come from a single record; treat them as zero variance too.
    flat = [str(c) for c in scales.index[~(scales > 0)]]
    if flat:
        raise DataError(
            f"Zero variance in column(s) {', '.join(flat)}: "
            "a constant variable cannot be scaled to unit variance."
        )
    return Standardization(matrix=(clean - means) / scales, means=means, scales=scales)


def standardize(table, columns) -> Standardization:
    """Center each column on its mean and divide by its sample standard deviation."""
    clean, _ = clean_table(table, columns)
    if clean.empty:
        raise DataError("No complete records left to standardize.")
    return _standardize_clean(clean)


def unstandardize(matrix, means, scales) -> pd.DataFrame:
    """Undo ``standardize``: multiply by the original scale and add the mean back."""
    if not isinstance(matrix, pd.DataFrame):
        matrix = pd.DataFrame(matrix, columns=means.index)
    return matrix * scales + means


def _component_names(k):
    return [f"PC{i + 1}" for i in range(k)]


@dataclass(frozen=True, eq=False)
class PCAResult:
    columns: Tuple[str, ...]
    variances: pd.Series
    loadings: pd.DataFrame
    scores: pd.DataFrame
    means: pd.Series
    scales: pd.Series
    labels: Optional[pd.Series] = None
    n_dropped: int = 0

    @property
    def n_components(self) -> int:
        return len(self.variances)

    @property
    def std_devs(self) -> pd.Series:
        return np.sqrt(self.variances)

    @property
    def explained_variance_ratio(self) -> pd.Series:
        return self.variances / self.variances.sum()

    @property
    def cumulative_variance_ratio(self) -> pd.Series:
        return self.explained_variance_ratio.cumsum()

    @property
    def correlation_loadings(self) -> pd.DataFrame:
        """Correlation between each original variable and each component."""
        return self.loadings * self.std_devs

    def summary(self) -> pd.DataFrame:
        """Importance of components, one row per measure and one column per component."""
        return pd.DataFrame(
            [self.std_devs, self.explained_variance_ratio, self.cumulative_variance_ratio],
            index=["Standard deviation", "Proportion of Variance", "Cumulative Proportion"],
        )

    def transform(self, table) -> pd.DataFrame:
        """Project new records onto the fitted components."""
        clean, _ = clean_table(table, self.columns)
        z = (clean - self.means) / self.scales
        return z @ self.loadings

    def reconstruct(self, n_components: Optional[int] = None) -> pd.DataFrame:
        """Map the scores back to original units, keeping only the first ``n_components``."""
        k = self.n_components if n_components is None else n_components
        if not 1 <= k <= self.n_components:
            raise DataError(f"n_components must be between 1 and {self.n_components}, got {k}")
        kept = self.loadings.iloc[:, :k]
        z = self.scores.iloc[:, :k] @ kept.T
        return unstandardize(z, self.means, self.scales)


def compute_pca(table, columns: Sequence[str], label: Optional[str] = None) -> PCAResult:
    """Run PCA on ``columns`` of ``table`` after dropping incomplete records.

    Columns are standardized with the sample standard deviation, so the
    component variances sum to the number of columns. Components come back in
    descending order of variance; exact ties keep the SVD's order. Each
    component is signed so that its largest-magnitude loading is positive.

    Raises ``DataError`` when a column is missing, repeated, non-numeric,
    infinite or constant, or when fewer complete records than columns remain.
    """
    frame = _as_frame(table)
    columns = list(columns)
    if label is not None and label not in frame.columns:
        raise DataError(f"Label column '{label}' not found in table")
    clean, keep = _complete_rows(frame, columns)
    n_dropped = int((~keep).sum())

    n, p = clean.shape
    if n < p:
        raise DataError(
            f"Only {n} complete record(s) remain for {p} column(s); "
            f"PCA needs at least {p}."
        )

    std = _standardize_clean(clean)
    _, s, vt = np.linalg.svd(std.matrix.to_numpy(), full_matrices=False)
    variances = s ** 2 / (n - 1)

    order = np.argsort(-variances, kind="stable")
    variances = variances[order]
    v = vt[order].T

    pivots = np.argmax(np.abs(v), axis=0)
    signs = np.sign(v[pivots, np.arange(v.shape[1])])
    signs[signs == 0] = 1.0
    v = v * signs

    names = _component_names(v.shape[1])
    loadings = pd.DataFrame(v, index=columns, columns=names)
    scores = pd.DataFrame(std.matrix.to_numpy() @ v, index=clean.index, columns=names)

    labels = frame[label][keep] if label is not None else None

    logger.debug(
        "PCA on %d records x %d columns (%d dropped); variance ratios %s",
        n, p, n_dropped, np.round(variances / variances.sum(), 4).tolist(),
    )
    return PCAResult(
        columns=tuple(columns),
        variances=pd.Series(variances, index=names),
        loadings=loadings,
        scores=scores,
        means=std.means,
        scales=std.scales,
        labels=labels,
        n_dropped=n_dropped,
    )


def reconstruction_errors(result: PCAResult) -> pd.DataFrame:
    """Mean squared reconstruction error, in standardized units, for k = 1..p components."""
    z = result.scores @ result.loadings.T
    rows = []
    for k in range(1, result.n_components + 1):
        approx = result.scores.iloc[:, :k] @ result.loadings.iloc[:, :k].T
        rows.append({"Components": k, "MSE": float(np.mean((z - approx).to_numpy() ** 2))})
    return pd.DataFrame(rows)
