"""Chapter 4 – How Many Components? Scree plots, reconstruction error, and a scikit-learn cross-check."""
import streamlit as st
import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from utils.data_loader import load_data, sidebar_filters
from utils.plotting import scree_chart, reconstruction_chart
from utils.constants import FEATURE_COLS, FEATURE_LABELS, LABEL_COL
from utils.pca_engine import DataError, compute_pca, reconstruction_errors
from utils.ui_components import (
    chapter_header, concept_box, insight_box, warning_box, error_box,
    code_example, quiz, takeaways, navigation,
)

chapter_header(4)

st.markdown(
    "PCA always gives back as many components as you put measurements in. The decision "
    "that actually matters is how many to **keep**. Keep all four and you have only "
    "rotated the data. Keep one and you may have thrown away the difference between "
    "two species. This chapter covers the usual tools for choosing."
)

try:
    df = load_data()
except FileNotFoundError as e:
    error_box(e)
fdf = sidebar_filters(df)

try:
    result = compute_pca(fdf, FEATURE_COLS, label=LABEL_COL)
except DataError as e:
    error_box(e, "Widen the sidebar filters so enough complete records remain.")

# ── Section 1: Scree plot ────────────────────────────────────────────────────
st.header("1. The Scree Plot")

concept_box(
    "Where Does the Cliff End?",
    "A scree plot shows each component's share of the variance. 'Scree' is the rubble "
    "at the bottom of a cliff. The idea is to keep the components that make up the cliff "
    "and discard the rubble. Two common rules: keep components until the cumulative "
    "share passes a threshold such as 80-90%, or keep components whose variance exceeds "
    "1 (the Kaiser rule), since anything less explains less than a single original "
    "standardized measurement."
)

fig_scree = scree_chart(result, "Explained Variance by Component")
st.plotly_chart(fig_scree, use_container_width=True)

threshold = st.slider("Cumulative variance target", 0.5, 0.99, 0.85, 0.01, key="scree_target")
cum = result.cumulative_variance_ratio
needed = int(np.searchsorted(cum.to_numpy(), threshold - 1e-12) + 1)
needed = min(needed, result.n_components)
kaiser = int((result.variances > 1).sum())

c1, c2, c3 = st.columns(3)
c1.metric(f"Components for {threshold:.0%}", needed)
c2.metric("Kaiser Rule (variance > 1)", kaiser)
c3.metric("All Components", f"{cum.iloc[-1]:.1%}")

insight_box(
    f"The first two components explain **{cum.iloc[min(1, len(cum) - 1)]:.1%}** of the "
    "variance. A flat scatter plot of PC1 against PC2 is therefore a faithful picture of "
    "these penguins, and the remaining components are closer to footnotes than chapters."
)

# ── Section 2: Reconstruction ────────────────────────────────────────────────
st.header("2. Reconstruction Error")

st.markdown(
    "Another way to judge a choice of *k*: project the data down to *k* components, "
    "project it back up, and measure how far each value moved. With all components the "
    "round trip is exact. With fewer, the error equals the variance left in the "
    "discarded components, divided by the number of measurements."
)

errors = reconstruction_errors(result)
st.plotly_chart(reconstruction_chart(errors), use_container_width=True)

k = st.slider("Components to keep", 1, result.n_components, min(2, result.n_components), key="recon_k")
recon = result.reconstruct(k)
original = fdf.loc[recon.index, FEATURE_COLS]

tab1, tab2, tab3 = st.tabs(["Original", f"Reconstructed (k={k})", "Difference"])
with tab1:
    st.dataframe(original.head(8).rename(columns=FEATURE_LABELS).round(1), use_container_width=True)
with tab2:
    st.dataframe(recon.head(8).rename(columns=FEATURE_LABELS).round(1), use_container_width=True)
with tab3:
    st.dataframe((original - recon).head(8).rename(columns=FEATURE_LABELS).round(1),
                 use_container_width=True)

code_example("""
from utils.pca_engine import compute_pca

result = compute_pca(df, features, label="species")
approx = result.reconstruct(2)      # back in millimetres and grams
print((df.loc[approx.index, features] - approx).abs().mean())
""")

# ── Section 3: Cross-check ───────────────────────────────────────────────────
st.header("3. Cross-Check with scikit-learn")

st.markdown(
    "Everything above used a short function built directly on `numpy.linalg.svd`. "
    "scikit-learn's `PCA` should agree. One detail differs: `StandardScaler` divides by "
    "the *population* standard deviation (n) rather than the sample one (n - 1), so "
    "its scores are stretched by a constant factor. The proportions of variance and the "
    "component directions are unaffected."
)

X = fdf.loc[result.scores.index, FEATURE_COLS].to_numpy()
sk = PCA().fit(StandardScaler().fit_transform(X))

compare = pd.DataFrame({
    "Ours": result.explained_variance_ratio.to_numpy(),
    "scikit-learn": sk.explained_variance_ratio_,
}, index=result.variances.index)
st.dataframe(compare.style.format("{:.6f}"), use_container_width=True)

same_axes = np.allclose(np.abs(sk.components_.T), np.abs(result.loadings.to_numpy()), atol=1e-6)
if same_axes:
    st.success("Component directions match scikit-learn (up to sign).")
else:
    st.warning("Component directions differ. Two components with nearly equal variance can swap or rotate.")

warning_box(
    "The sign of a component is arbitrary. Flip every loading and every score of PC1 and "
    "you have an equally valid answer. Two libraries, or two versions of one library, "
    "may disagree on sign. Never interpret 'positive PC1' without checking the loadings."
)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "PC1 and PC2 together explain 88% of the variance. Reconstructing from those two "
    "components, what is the mean squared error in standardized units (4 measurements)?",
    ["0.88", "About 0.12", "0.48", "0.03"],
    1,
    "The discarded variance is 12% of a total of 4, which is 0.48. The MSE averages that "
    "over the 4 measurements, giving about 0.12. It comes out a hair lower on the chart "
    "because the mean divides by n rather than n - 1.",
    key="ch4_quiz",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "PCA returns as many components as measurements. Choosing how many to keep is the real decision.",
    "Use the scree plot, a cumulative-variance target, or the Kaiser rule, and compare their answers.",
    "Reconstruction error is the variance you discarded, made tangible in the original units.",
    "A hand-rolled SVD and scikit-learn agree on variance ratios and directions. Signs are arbitrary.",
])

navigation(4)
