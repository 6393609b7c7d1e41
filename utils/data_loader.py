"""Cached data loading and filtering utilities."""
import logging
import os

import pandas as pd
import streamlit as st

from utils.constants import NA_VALUES

logger = logging.getLogger(__name__)

DATA_PATH = os.environ.get(
    "PENGUINS_DATA_PATH",
    os.path.join(os.path.dirname(os.path.dirname(__file__)), "penguins.csv"),
)


def read_penguins(path=DATA_PATH):
    """Read the penguin CSV, normalising missing-value markers and the sex column."""
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"No dataset at {path}. Run `python fetch_penguins.py` first "
            "or point PENGUINS_DATA_PATH at a copy of penguins.csv."
        )
    df = pd.read_csv(path, na_values=NA_VALUES, keep_default_na=True)
    if "sex" in df.columns:
        df["sex"] = df["sex"].map(lambda s: s.strip().title() if isinstance(s, str) else s)
    logger.info("Loaded %d penguin records from %s", len(df), path)
    return df


@st.cache_data
def load_data():
    """Load the full penguin dataset."""
    return read_penguins(DATA_PATH)


def sidebar_filters(df):
    """Render sidebar species, island and sex filters; return filtered DataFrame."""
    from utils.constants import SPECIES_LIST, ISLAND_LIST, SEX_LIST
    st.sidebar.header("Filters")
    if "selected_species" not in st.session_state:
        st.session_state.selected_species = SPECIES_LIST.copy()
    species = st.sidebar.multiselect(
        "Species", SPECIES_LIST,
        default=st.session_state.selected_species,
        key="species_filter"
    )
    st.session_state.selected_species = species

    islands = st.sidebar.multiselect("Islands", ISLAND_LIST, default=ISLAND_LIST, key="island_filter")
    sexes = st.sidebar.multiselect("Sex", SEX_LIST, default=SEX_LIST, key="sex_filter")

    sex = df["sex"].fillna("Unknown")
    mask = (
        df["species"].isin(species) &
        df["island"].isin(islands) &
        sex.isin(sexes)
    )
    return df[mask].copy()
