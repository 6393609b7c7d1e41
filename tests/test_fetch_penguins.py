from unittest.mock import MagicMock, patch

from fetch_penguins import FIELDNAMES, fetch_penguins, parse_rows

RAW = """species,island,bill_length_mm,bill_depth_mm,flipper_length_mm,body_mass_g,sex
Adelie,Torgersen,39.1,18.7,181,3750,MALE
Adelie,Torgersen,NA,NA,NA,NA,NA
Gentoo,Biscoe,44.5,15.7,217,4875,.
"""


def test_parse_rows_cleans_values():
    rows = parse_rows(RAW)
    assert len(rows) == 3
    assert list(rows[0].keys()) == FIELDNAMES
    assert rows[0]["bill_length_mm"] == 39.1
    assert rows[0]["sex"] == "Male"
    assert rows[1]["body_mass_g"] == ""
    assert rows[2]["sex"] == ""


@patch("fetch_penguins.requests.get")
def test_fetch_penguins_raises_for_status(mock_get):
    response = MagicMock(text=RAW)
    mock_get.return_value = response
    rows = fetch_penguins("https://example.invalid/penguins.csv")
    response.raise_for_status.assert_called_once()
    assert mock_get.call_args.kwargs["timeout"] == 60
    assert len(rows) == 3
