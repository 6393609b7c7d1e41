"""Chapter 3 – Principal Component Analysis (PCA)."""
import streamlit as st
import numpy as np
import pandas as pd

from utils.data_loader import load_data, sidebar_filters
from utils.plotting import biplot_chart, score_scatter_chart, heatmap_chart
from utils.constants import FEATURE_COLS, FEATURE_LABELS, LABEL_COL
from utils.pca_engine import DataError, compute_pca, standardize
from utils.ui_components import (
    chapter_header, concept_box, formula_box, insight_box,
    warning_box, error_box, code_example, quiz, takeaways, navigation,
)

# ── Page config ──────────────────────────────────────────────────────────────
chapter_header(3)

st.markdown(
    "We have four measurements per penguin and a screen with two dimensions. PCA is "
    "the principled way to get from four to two while losing as little as possible. "
    "It finds the direction along which penguins differ the most, calls it PC1, then "
    "finds the next-most-different direction at right angles to the first, and so on. "
    "No species labels are involved. If the species separate anyway, PCA found them "
    "on its own."
)

# ── Load & filter data ───────────────────────────────────────────────────────
try:
    df = load_data()
except FileNotFoundError as e:
    error_box(e)
fdf = sidebar_filters(df)

st.sidebar.subheader("PCA Settings")
features = st.sidebar.multiselect(
    "Measurements", FEATURE_COLS, default=FEATURE_COLS,
    format_func=lambda c: FEATURE_LABELS.get(c, c), key="pca_features",
)

try:
    result = compute_pca(fdf, features, label=LABEL_COL)
except DataError as e:
    error_box(e, "Widen the sidebar filters or pick different measurements.")

names = result.loadings.columns.tolist()

# ── Section 1: Standardization ───────────────────────────────────────────────
st.header("1. Standardize First")

formula_box(
    "Z-score",
    r"z_{ij} = \frac{x_{ij} - \bar{x}_j}{s_j}",
    "Each column is centered on its mean and divided by its sample standard deviation, "
    "so every measurement enters PCA with variance exactly 1.",
)

std = standardize(fdf, features)
check = pd.DataFrame({
    "Mean (raw)": std.means,
    "Std Dev (raw)": std.scales,
    "Mean (standardized)": std.matrix.mean(),
    "Variance (standardized)": std.matrix.var(ddof=1),
}).rename(index=FEATURE_LABELS)
st.dataframe(check.round(3), use_container_width=True)

warning_box(
    "Skip this step and body mass, with a standard deviation around 800 g, takes PC1 "
    "almost entirely by itself. The bill measurements, with standard deviations of a "
    "few millimetres, would barely register. You would be measuring units, not penguins."
)

# ── Section 2: The decomposition ─────────────────────────────────────────────
st.header("2. Fitting PCA")

concept_box(
    "What Is PCA Doing?",
    "PCA is a rotation. Stack the standardized data into a matrix Z and take its "
    "singular value decomposition. The right singular vectors are the new axes "
    "(the <b>loadings</b>). Projecting each penguin onto them gives its <b>scores</b>. "
    "The squared singular values divided by n - 1 are the <b>variances</b> along each "
    "axis, which is the same thing as the eigenvalues of the correlation matrix."
)

formula_box(
    "Singular Value Decomposition",
    r"Z = U S V^T, \qquad \text{scores} = Z V, \qquad \lambda_k = \frac{s_k^2}{n - 1}",
    "Because every column of Z has variance 1, the eigenvalues add up to the number of "
    "measurements.",
)

summary = result.summary()
st.dataframe(summary.style.format("{:.3f}"), use_container_width=True)

col1, col2, col3 = st.columns(3)
col1.metric("PC1 Variance", f"{result.explained_variance_ratio.iloc[0]:.1%}")
if result.n_components >= 2:
    col2.metric("PC1 + PC2", f"{result.cumulative_variance_ratio.iloc[1]:.1%}")
col3.metric("Rows Used", f"{len(result.scores):,}", delta=f"-{result.n_dropped} dropped",
            delta_color="off")

code_example("""
import numpy as np

X = df[features].dropna()
Z = (X - X.mean()) / X.std(ddof=1)

U, s, Vt = np.linalg.svd(Z, full_matrices=False)
variances = s**2 / (len(Z) - 1)
scores = Z.values @ Vt.T
print(variances / variances.sum())
""")

# ── Section 3: Loadings ──────────────────────────────────────────────────────
st.header("3. What Do the Components Mean?")

loadings = result.loadings.rename(index=FEATURE_LABELS)
fig_load = heatmap_chart(
    loadings, title="Loadings (weight of each measurement in each component)",
    text=np.round(loadings.values, 2), zmid=0, height=400,
)
st.plotly_chart(fig_load, use_container_width=True)

st.markdown(
    "Read each column from top to bottom. PC1 usually puts large, same-signed weights on "
    "flipper length, body mass and bill length, with bill depth pulling the other way. "
    "That is a **size** axis: big Gentoo on one side, smaller Adelie and Chinstrap on the "
    "other. PC2 is dominated by the bill measurements. It is a **bill shape** axis that "
    "splits long-billed Chinstrap from short-billed Adelie."
)

# ── Section 4: Scores ────────────────────────────────────────────────────────
st.header("4. Penguins in PCA Space")

if result.n_components < 2:
    st.info("Select at least two measurements to see a two-dimensional projection.")
else:
    col_x, col_y = st.columns(2)
    pc_x = col_x.selectbox("Horizontal component", names, index=0, key="pca_x")
    pc_y = col_y.selectbox("Vertical component", [n for n in names if n != pc_x],
                           index=0, key="pca_y")

    fig_scores = score_scatter_chart(result, pc_x, pc_y, title="Penguins Projected onto Principal Components")
    st.plotly_chart(fig_scores, use_container_width=True)

    insight_box(
        "Three clusters, one per species, from an algorithm that never saw the species "
        "column. Gentoo sits alone along PC1 because it is simply a bigger bird. Adelie "
        "and Chinstrap overlap on PC1 but separate on PC2 because of their bills."
    )

    # ── Section 5: Biplot ────────────────────────────────────────────────────
    st.header("5. The Biplot")

    st.markdown(
        "A **biplot** draws the original measurements as arrows on top of the scores. "
        "Each arrow's coordinates are the correlations between that measurement and the "
        "two components, scaled to fit. Arrows pointing the same way are positively "
        "correlated. Arrows at right angles are roughly uncorrelated. A penguin lying "
        "far along an arrow is large on that measurement."
    )

    fig_bi = biplot_chart(result, pc_x, pc_y)
    st.plotly_chart(fig_bi, use_container_width=True)

    corr_load = result.correlation_loadings[[pc_x, pc_y]].rename(index=FEATURE_LABELS)
    st.dataframe(corr_load.round(3), use_container_width=True)

# Uncorrelated scores
with st.expander("Check: are the components really uncorrelated?"):
    st.dataframe(result.scores.cov().round(6), use_container_width=True)
    st.caption(
        "The covariance matrix of the scores is diagonal, and its diagonal is exactly "
        "the variance table above. Off-diagonal entries are zero up to rounding."
    )

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "PCA on the four standardized measurements gives component variances that add up "
    "to what?",
    [
        "1",
        "4, the number of measurements",
        "The number of penguins",
        "It depends on the species mix",
    ],
    1,
    "Each standardized measurement has variance 1, and rotation preserves total variance. "
    "Four measurements, total variance 4.",
    key="ch3_quiz",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Standardize first, or the measurement with the biggest units takes over.",
    "PCA is an SVD of the standardized matrix: loadings are the axes, scores are the coordinates, variances are the squared singular values over n - 1.",
    "On the penguins, PC1 is a size axis and PC2 is a bill-shape axis.",
    "The species separate in PCA space even though PCA never saw the labels.",
    "Biplots connect the abstract components back to the measurements you started with.",
])

navigation(3)
