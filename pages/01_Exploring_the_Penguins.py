"""Chapter 1: Exploring the Penguins -- shape, dtypes, missing values, and cleaning."""
import streamlit as st
import pandas as pd
import plotly.express as px

from utils.data_loader import load_data, sidebar_filters
from utils.plotting import apply_common_layout, scatter_chart
from utils.constants import FEATURE_COLS, FEATURE_LABELS, LABEL_COL, SPECIES_COLORS
from utils.pca_engine import clean_table
from utils.stats_helpers import missing_summary
from utils.ui_components import (
    chapter_header, concept_box, insight_box, warning_box, error_box,
    code_example, quiz, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
chapter_header(1)
st.markdown(
    "Before we rotate anything, we should know what we are rotating. This chapter "
    "is the unglamorous part: what the columns are, what types they hold, and which "
    "penguins are missing measurements. PCA has no opinion about missing values "
    "except that it **cannot run with them**, so we will deal with them here, once, "
    "and carry a clean table into every chapter after this one."
)

# ── Load data ────────────────────────────────────────────────────────────────
try:
    df = load_data()
except FileNotFoundError as e:
    error_box(e)
fdf = sidebar_filters(df)

# ── 1.1 Preview ──────────────────────────────────────────────────────────────
st.header("1.1  Meet the Penguins")
n_rows = st.slider("Rows to preview", 5, 50, 10, key="peng_head")
st.dataframe(fdf.head(n_rows), use_container_width=True)

concept_box(
    "One Row, One Bird",
    "Each row is a single adult penguin. The <b>categorical</b> columns say who and "
    "where it is: species, island, sex. The <b>numeric</b> columns are the four "
    "morphological measurements we will feed into PCA. Species never goes into the "
    "computation. We only use it afterwards to color the points and see whether PCA "
    "rediscovered something biologists already know."
)

col1, col2 = st.columns(2)
with col1:
    st.subheader("Shape")
    st.write(f"Rows: **{fdf.shape[0]:,}**  |  Columns: **{fdf.shape[1]}**")
    counts = fdf[LABEL_COL].value_counts().rename_axis("Species").reset_index(name="Birds")
    st.dataframe(counts, use_container_width=True, hide_index=True)
with col2:
    st.subheader("Data Types")
    dtype_df = pd.DataFrame({
        "Column": fdf.dtypes.index,
        "Dtype": fdf.dtypes.astype(str).values,
    })
    st.dataframe(dtype_df, use_container_width=True, hide_index=True)

code_example(
    """import pandas as pd

df = pd.read_csv("penguins.csv", na_values=["", "NA", "."])
print(df.shape)
print(df.dtypes)
df["species"].value_counts()
"""
)

# ── 1.2 Missing values ───────────────────────────────────────────────────────
st.header("1.2  Missing Values")

missing = missing_summary(fdf)
missing = missing[missing["Missing"] > 0].round(2)
if missing.empty:
    st.success("No missing values in the current selection.")
else:
    st.dataframe(missing, use_container_width=True)
    fig_missing = px.bar(
        missing.reset_index(names="Column"), x="Column", y="Missing",
        color_discrete_sequence=["#E63946"],
    )
    apply_common_layout(fig_missing, "Missing Values per Column", 350)
    st.plotly_chart(fig_missing, use_container_width=True)

warning_box(
    "The sex column is missing far more often than any measurement. If you dropped "
    "every row with *any* missing value you would throw away birds whose four "
    "measurements are perfectly fine. Drop rows based on the columns you are "
    "actually going to analyse, and nothing else."
)

# ── 1.3 Cleaning ─────────────────────────────────────────────────────────────
st.header("1.3  Cleaning for PCA")

st.markdown(
    "Pick the measurements you want to analyse. A bird survives cleaning only if it "
    "has a value for **every** selected measurement."
)
selected = st.multiselect(
    "Measurements",
    FEATURE_COLS,
    default=FEATURE_COLS,
    format_func=lambda c: FEATURE_LABELS.get(c, c),
    key="clean_cols",
)
if not selected:
    st.info("Please select at least one measurement.")
    st.stop()

clean, n_dropped = clean_table(fdf, selected)

c1, c2, c3 = st.columns(3)
c1.metric("Rows Before", f"{len(fdf):,}")
c2.metric("Rows Dropped", n_dropped)
c3.metric("Rows After", f"{len(clean):,}")

if n_dropped:
    dropped_rows = fdf.loc[~fdf.index.isin(clean.index)]
    st.dataframe(dropped_rows, use_container_width=True)

code_example(
    """features = ["bill_length_mm", "bill_depth_mm", "flipper_length_mm", "body_mass_g"]
clean = df.dropna(subset=features)
print(len(df) - len(clean), "rows dropped")
"""
)

insight_box(
    "In the full dataset only two birds are missing measurements, and they are missing "
    "all four. Dropping them costs us less than one percent of the data. That is the "
    "happy case. When cleaning would remove a large chunk of rows you should stop and "
    "ask *why* the values are missing before deleting anything."
)

# ── 1.4 First look ───────────────────────────────────────────────────────────
st.header("1.4  A First Look in Two Dimensions")

col_x, col_y = st.columns(2)
feat_x = col_x.selectbox("X axis", FEATURE_COLS, index=2,
                         format_func=lambda c: FEATURE_LABELS.get(c, c), key="look_x")
feat_y = col_y.selectbox("Y axis", FEATURE_COLS, index=3,
                         format_func=lambda c: FEATURE_LABELS.get(c, c), key="look_y")

plot_df = fdf.dropna(subset=[feat_x, feat_y])
fig = scatter_chart(
    plot_df, x=feat_x, y=feat_y,
    title=f"{FEATURE_LABELS[feat_x]} vs {FEATURE_LABELS[feat_y]}",
)
st.plotly_chart(fig, use_container_width=True)

st.markdown(
    "Any single pair of measurements shows *part* of the picture. Flipper length and "
    "body mass pull Gentoo away from the others. Bill length separates Adelie from "
    "Chinstrap. No single pair shows both at once, which is exactly the itch PCA scratches."
)

fig_box = px.box(
    fdf, x=LABEL_COL, y=feat_y, color=LABEL_COL,
    color_discrete_map=SPECIES_COLORS, labels=FEATURE_LABELS,
)
apply_common_layout(fig_box, f"{FEATURE_LABELS[feat_y]} by Species", 400)
st.plotly_chart(fig_box, use_container_width=True)

# ── Quiz ─────────────────────────────────────────────────────────────────────
st.divider()
quiz(
    "A penguin has bill length, bill depth and flipper length recorded, but no body "
    "mass. We run PCA on all four measurements. What happens to that penguin?",
    [
        "Its body mass is filled in with zero",
        "It is dropped before the decomposition",
        "It is kept, and PCA ignores the missing value",
        "PCA fails with an error",
    ],
    1,
    "Rows with a missing value in any analysed column are removed before standardizing. "
    "Filling with zero would be far worse: a zero-gram penguin would dominate the variance.",
    key="ch1_quiz",
)

# ── Takeaways ────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "Look at shape, dtypes and missing values before any modelling. It takes a minute and saves an afternoon.",
    "Clean on the columns you analyse, not on every column in the table.",
    "Species is a label we carry along for coloring. It never enters the PCA computation.",
    "No single scatter plot separates all three species, which motivates combining the measurements.",
])

navigation(1)
