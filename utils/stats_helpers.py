"""Reusable statistics computation helpers."""
import numpy as np
import pandas as pd
from scipy import stats


def descriptive_stats(series):
    """Compute comprehensive descriptive statistics for a numeric series."""
    series = series.dropna()
    return {
        "count": len(series),
        "mean": series.mean(),
        "median": series.median(),
        "std": series.std(),
        "min": series.min(),
        "max": series.max(),
        "q25": series.quantile(0.25),
        "q75": series.quantile(0.75),
        "iqr": series.quantile(0.75) - series.quantile(0.25),
        "skewness": series.skew(),
        "kurtosis": series.kurtosis(),
    }


def species_summary(df, features, group="species"):
    """Mean and standard deviation of each feature per group."""
    return df.groupby(group)[features].agg(["mean", "std"])


def missing_summary(df):
    """Count and percentage of missing values per column."""
    counts = df.isnull().sum()
    return pd.DataFrame({
        "Missing": counts,
        "Percent": (counts / len(df) * 100) if len(df) else counts * 0.0,
    })


def correlation_matrix(df, columns=None, method="pearson"):
    """Compute correlation matrix for numeric columns."""
    numeric = df[columns] if columns is not None else df.select_dtypes(include=[np.number])
    return numeric.corr(method=method)


def correlation_pvalues(df, columns, method="pearson"):
    """Two-sided p-values for every pair of columns, using pairwise-complete rows."""
    test = stats.pearsonr if method == "pearson" else stats.spearmanr
    pvals = pd.DataFrame(0.0, index=columns, columns=columns)
    for i, a in enumerate(columns):
        for b in columns[i + 1:]:
            pair = df[[a, b]].dropna()
            if len(pair) < 3:
                p = np.nan
            else:
                _, p = test(pair[a], pair[b])
            pvals.loc[a, b] = pvals.loc[b, a] = p
    return pvals
