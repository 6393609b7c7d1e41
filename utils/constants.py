"""Shared constants: colors, labels, species metadata."""

SPECIES_COLORS = {
    "Adelie": "#FF8C00",
    "Chinstrap": "#A034F0",
    "Gentoo": "#159090",
}

SPECIES_LIST = list(SPECIES_COLORS.keys())

ISLAND_LIST = ["Biscoe", "Dream", "Torgersen"]

SEX_LIST = ["Female", "Male", "Unknown"]

FEATURE_COLS = ["bill_length_mm", "bill_depth_mm", "flipper_length_mm", "body_mass_g"]

LABEL_COL = "species"

FEATURE_LABELS = {
    "bill_length_mm": "Bill Length (mm)",
    "bill_depth_mm": "Bill Depth (mm)",
    "flipper_length_mm": "Flipper Length (mm)",
    "body_mass_g": "Body Mass (g)",
}

FEATURE_UNITS = {
    "bill_length_mm": "mm",
    "bill_depth_mm": "mm",
    "flipper_length_mm": "mm",
    "body_mass_g": "g",
}

# Missing-value markers seen in the published CSVs
NA_VALUES = ["", "NA", "."]

PART_TITLES = {
    "I": "Getting to Know the Data",
    "II": "Dimensionality Reduction",
}

CHAPTERS = {
    1: ("Exploring the Penguins", "I", "01_Exploring_the_Penguins.py"),
    2: ("Summary Statistics & Correlation", "I", "02_Summary_Statistics_and_Correlation.py"),
    3: ("Principal Component Analysis", "II", "03_Principal_Component_Analysis.py"),
    4: ("How Many Components?", "II", "04_How_Many_Components.py"),
}
