import pandas as pd
import pytest

from utils.data_loader import read_penguins

RAW_CSV = """species,island,bill_length_mm,bill_depth_mm,flipper_length_mm,body_mass_g,sex
Adelie,Torgersen,39.1,18.7,181,3750,MALE
Adelie,Torgersen,NA,NA,NA,NA,NA
Gentoo,Biscoe,44.5,15.7,217,4875,.
Chinstrap,Dream,46.5,17.9,192,3500,female
Gentoo,Biscoe,,,,,
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "penguins.csv"
    path.write_text(RAW_CSV)
    return str(path)


class TestReadPenguins:
    """Tests for reading the penguin CSV"""

    def test_reads_all_rows(self, csv_path):
        df = read_penguins(csv_path)
        assert len(df) == 5
        assert list(df.columns)[:2] == ["species", "island"]

    def test_missing_markers_become_nan(self, csv_path):
        df = read_penguins(csv_path)
        assert df["bill_length_mm"].isna().sum() == 2
        assert pd.api.types.is_float_dtype(df["body_mass_g"])

    def test_sex_is_normalised(self, csv_path):
        df = read_penguins(csv_path)
        assert df["sex"].iloc[0] == "Male"
        assert df["sex"].iloc[3] == "Female"
        assert pd.isna(df["sex"].iloc[2])

    def test_missing_file_has_hint(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="fetch_penguins.py"):
            read_penguins(str(tmp_path / "nope.csv"))
