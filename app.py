"""Penguin PCA Pedagogy App — Main Entry Point."""
import streamlit as st

from utils.constants import CHAPTERS, PART_TITLES
from utils.data_loader import load_data

st.set_page_config(
    page_title="Penguin PCA Pedagogy",
    page_icon="🐧",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("Principal Component Analysis, One Penguin at a Time")
st.subheader("Four chapters on squeezing four measurements into two axes without losing the plot")

st.markdown("""
Every penguin in this dataset was measured four ways: how long its bill is, how deep its bill is,
how long its flipper is, and how much it weighs. Four numbers per bird means every penguin is a
point in four-dimensional space, which is a fine place for a penguin to live but a terrible
place for a human to look at.

PCA is the standard way out. It rotates the data so that the first axis points along the
direction where penguins differ the most, the second along the next-most-different direction,
and so on. Keep the first two axes and you get a flat picture that, for this dataset, still
holds most of the story.

### The Dataset

The **Palmer penguins**: roughly 340 adult birds of three species (Adelie, Chinstrap, Gentoo)
measured on three islands near Palmer Station, Antarctica, by Dr. Kristen Gorman and the
Palmer Station LTER. A handful of birds are missing a measurement or two, which gives us a
small, honest excuse to talk about cleaning data before decomposing it.

### How to Use This App

1. **Navigate** via the sidebar. The chapters build on each other, so start at Chapter 1
2. **Filter** by species, island, and sex. Every table and chart recomputes, PCA included
3. **Poke** at the sliders and selectors. Dropping a species and watching the components swing
   around teaches more than any paragraph here
4. **Test yourself** with the quiz at the end of each chapter

### Chapters
""")

for number, (title, part, _) in CHAPTERS.items():
    st.markdown(f"**Chapter {number}: {title}** -- Part {part}, {PART_TITLES[part]}")

st.divider()

st.subheader("Dataset Preview")
try:
    df = load_data()
except FileNotFoundError as e:
    st.error(str(e))
    st.stop()

st.dataframe(df.head(20), use_container_width=True)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Rows", f"{len(df):,}")
col2.metric("Species", df["species"].nunique())
col3.metric("Islands", df["island"].nunique())
col4.metric("Features", "4 numeric")
