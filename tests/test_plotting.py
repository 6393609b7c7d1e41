import plotly.graph_objects as go
import pytest

from utils.constants import FEATURE_COLS, FEATURE_LABELS
from utils.pca_engine import compute_pca, reconstruction_errors
from utils.plotting import (
    biplot_chart,
    reconstruction_chart,
    scatter_chart,
    scatter_matrix_chart,
    score_scatter_chart,
    scree_chart,
)


@pytest.fixture
def result(penguin_frame):
    return compute_pca(penguin_frame, FEATURE_COLS, label="species")


def test_scree_chart_has_individual_and_cumulative_traces(result):
    fig = scree_chart(result)
    assert isinstance(fig, go.Figure)
    assert [t.name for t in fig.data] == ["Individual", "Cumulative"]
    assert list(fig.data[0].x) == ["PC1", "PC2", "PC3", "PC4"]
    assert fig.data[1].y[-1] == pytest.approx(1.0)


def test_score_scatter_colors_by_species(result):
    fig = score_scatter_chart(result)
    assert {t.name for t in fig.data} == {"Adelie", "Chinstrap", "Gentoo"}
    assert sum(len(t.x) for t in fig.data) == 340


def test_biplot_draws_one_labelled_arrow_per_measurement(result):
    fig = biplot_chart(result)
    labels = [a.text for a in fig.layout.annotations if a.text]
    assert sorted(labels) == sorted(FEATURE_LABELS[c] for c in FEATURE_COLS)
    assert len(fig.layout.annotations) == 2 * len(FEATURE_COLS)


def test_reconstruction_chart(result):
    fig = reconstruction_chart(reconstruction_errors(result))
    assert list(fig.data[0].x) == [1, 2, 3, 4]


def test_feature_scatters_use_readable_labels(penguin_frame):
    fig = scatter_chart(penguin_frame.dropna(), "flipper_length_mm", "body_mass_g")
    assert fig.layout.xaxis.title.text == FEATURE_LABELS["flipper_length_mm"]
    matrix = scatter_matrix_chart(penguin_frame.dropna(subset=FEATURE_COLS), FEATURE_COLS)
    assert len(matrix.data) == 3


@pytest.mark.parametrize("chart", [score_scatter_chart, biplot_chart])
def test_component_charts_reject_the_same_component_twice(result, chart):
    with pytest.raises(ValueError, match="two different components"):
        chart(result, "PC2", "PC2")
