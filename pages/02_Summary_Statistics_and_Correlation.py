"""Chapter 2: Summary Statistics & Correlation -- describe(), per-species summaries, correlation matrices."""
import streamlit as st
import numpy as np

from utils.data_loader import load_data, sidebar_filters
from utils.plotting import heatmap_chart, scatter_matrix_chart
from utils.constants import FEATURE_COLS, FEATURE_LABELS, FEATURE_UNITS, LABEL_COL
from utils.stats_helpers import (
    correlation_matrix, correlation_pvalues, descriptive_stats, species_summary,
)
from utils.ui_components import (
    chapter_header, concept_box, formula_box, insight_box, warning_box, error_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(2)
st.markdown(
    "PCA is, underneath, a machine for summarising correlations. If the four "
    "measurements were completely unrelated, there would be nothing to compress and "
    "PCA would hand you back four equally boring axes. So before running it, we "
    "should check two things: how spread out each measurement is, and **how strongly "
    "the measurements move together**."
)

try:
    df = load_data()
except FileNotFoundError as e:
    error_box(e)
fdf = sidebar_filters(df)

# ── 2.1 Describe ─────────────────────────────────────────────────────────────
st.header("2.1  Summary Statistics")

desc = fdf[FEATURE_COLS].describe().T.rename(index=FEATURE_LABELS).round(2)
st.dataframe(desc, use_container_width=True)

feature = st.selectbox(
    "Look closer at one measurement",
    FEATURE_COLS,
    format_func=lambda c: FEATURE_LABELS.get(c, c),
    key="desc_feat",
)
stats_dict = descriptive_stats(fdf[feature])
c1, c2, c3, c4 = st.columns(4)
unit = FEATURE_UNITS[feature]
c1.metric("Mean", f"{stats_dict['mean']:.1f} {unit}")
c2.metric("Std Dev", f"{stats_dict['std']:.1f} {unit}")
c3.metric("IQR", f"{stats_dict['iqr']:.1f} {unit}")
c4.metric("Skewness", f"{stats_dict['skewness']:.2f}")

warning_box(
    "Body mass is measured in grams and sits in the thousands. Bill depth is measured in "
    "millimetres and sits around 17. Their standard deviations differ by a factor of "
    "several hundred. Run PCA on the raw numbers and body mass wins every component "
    "simply for having the biggest digits. That is why the next chapter standardizes first."
)

# ── 2.2 Per species ──────────────────────────────────────────────────────────
st.header("2.2  Per-Species Summary")

per_species = species_summary(fdf, FEATURE_COLS, group=LABEL_COL).round(1)
per_species.columns = [f"{FEATURE_LABELS[f]} {stat}" for f, stat in per_species.columns]
st.dataframe(per_species, use_container_width=True)

insight_box(
    "Gentoo penguins are the heavyweights with the longest flippers but the shallowest "
    "bills. Adelie and Chinstrap weigh about the same but differ in bill length. Keep "
    "those two contrasts in mind. They will come back as PC1 and PC2."
)

# ── 2.3 Correlation ──────────────────────────────────────────────────────────
st.header("2.3  Correlation Matrix")

formula_box(
    "Pearson Correlation (r)",
    r"r = \frac{\sum (x_i - \bar{x})(y_i - \bar{y})}"
    r"{\sqrt{\sum (x_i - \bar{x})^2 \sum (y_i - \bar{y})^2}}",
    "Correlation is covariance after standardizing both variables. Hold onto that: "
    "PCA on standardized data is the eigen-decomposition of exactly this matrix.",
)

method = st.radio("Method", ["pearson", "spearman"], horizontal=True,
                  format_func=str.title, key="corr_method")

corr = correlation_matrix(fdf, FEATURE_COLS, method=method)
pvals = correlation_pvalues(fdf, FEATURE_COLS, method=method)
corr_named = corr.rename(index=FEATURE_LABELS, columns=FEATURE_LABELS)

fig_corr = heatmap_chart(
    corr_named, title=f"{method.title()} Correlation Between Measurements",
    text=np.round(corr_named.values, 2), zmid=0, height=500,
)
st.plotly_chart(fig_corr, use_container_width=True)

with st.expander("p-values"):
    st.dataframe(
        pvals.rename(index=FEATURE_LABELS, columns=FEATURE_LABELS).map(lambda p: f"{p:.2e}"),
        use_container_width=True,
    )

strongest = (
    corr.where(np.triu(np.ones(corr.shape, dtype=bool), k=1))
    .stack()
    .abs()
    .sort_values(ascending=False)
)
if not strongest.empty:
    (a, b), r = strongest.index[0], strongest.iloc[0]
    st.markdown(
        f"The strongest relationship is between **{FEATURE_LABELS[a]}** and "
        f"**{FEATURE_LABELS[b]}** (|r| = {r:.2f})."
    )

concept_box(
    "Why Correlation Is PCA's Raw Material",
    "Flipper length and body mass correlate at around 0.87 in the full dataset. That "
    "means knowing one tells you most of the other, so storing both separately is "
    "partly redundant. PCA finds these redundancies and folds them into a single axis. "
    "The more strongly your variables correlate, the fewer components you need."
)

code_example(
    """features = ["bill_length_mm", "bill_depth_mm", "flipper_length_mm", "body_mass_g"]
corr = df[features].corr(method="pearson")

from scipy import stats
r, p = stats.pearsonr(df["flipper_length_mm"], df["body_mass_g"])
"""
)

# ── 2.4 Pairwise scatter ─────────────────────────────────────────────────────
st.header("2.4  Every Pair at Once")

fig_pairs = scatter_matrix_chart(
    fdf.dropna(subset=FEATURE_COLS), FEATURE_COLS, color=LABEL_COL,
    title="Pairwise Scatter Plots",
)
st.plotly_chart(fig_pairs, use_container_width=True)

st.markdown(
    "Six panels, and each one shows a different slice. Notice that bill depth is "
    "*negatively* correlated with body mass overall, yet within each species the "
    "relationship is positive. That sign flip is Simpson's paradox, and it is a good "
    "reminder that a correlation matrix summarises the whole table, species and all."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "If all four measurements were perfectly uncorrelated, what would PCA on "
    "standardized data produce?",
    [
        "One component holding all the variance",
        "Four components, each explaining about 25% of the variance",
        "Two components, each explaining 50%",
        "An error, because the covariance matrix is singular",
    ],
    1,
    "The correlation matrix would be the identity, so every direction has variance 1. "
    "There is nothing to compress.",
    key="ch2_quiz",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "The measurements live on wildly different scales, so they must be standardized before PCA.",
    "Strong correlations, like flipper length with body mass, are what make compression possible.",
    "Per-species summaries hint at the structure PCA will find: a size contrast and a bill-shape contrast.",
    "A whole-table correlation can hide, or even reverse, the within-group relationship.",
])

navigation(2)
