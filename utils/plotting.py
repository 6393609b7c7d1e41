"""Shared Plotly plotting helpers."""
import plotly.express as px
import plotly.graph_objects as go
from utils.constants import SPECIES_COLORS, FEATURE_LABELS


def apply_common_layout(fig, title=None, height=500):
    """Apply common layout settings to a Plotly figure."""
    fig.update_layout(
        template="plotly_white",
        height=height,
        title=title,
        title_x=0.5,
        margin=dict(t=60, b=40, l=60, r=40),
    )
    return fig


def _labels(extra=None):
    lab = {**(extra or {})}
    for k, v in FEATURE_LABELS.items():
        lab.setdefault(k, v)
    return lab


def scatter_chart(df, x, y, color="species", title=None, labels=None, height=500, opacity=0.7):
    """Create a scatter plot with species colors."""
    fig = px.scatter(df, x=x, y=y, color=color, color_discrete_map=SPECIES_COLORS,
                     labels=_labels(labels), title=title, opacity=opacity)
    return apply_common_layout(fig, title, height)


def scatter_matrix_chart(df, dimensions, color="species", title=None, height=750):
    """Pairwise scatter plots of every feature against every other."""
    fig = px.scatter_matrix(df, dimensions=dimensions, color=color,
                            color_discrete_map=SPECIES_COLORS, labels=_labels(),
                            opacity=0.6)
    fig.update_traces(diagonal_visible=False, marker=dict(size=4))
    return apply_common_layout(fig, title, height)


def heatmap_chart(data, x_label="", y_label="", title=None, height=500, color_scale="RdBu_r",
                  text=None, zmid=None):
    """Create a heatmap from a 2D array or DataFrame."""
    z = data.values if hasattr(data, 'values') else data
    fig = go.Figure(data=go.Heatmap(
        z=z,
        x=data.columns.tolist() if hasattr(data, 'columns') else None,
        y=data.index.tolist() if hasattr(data, 'index') else None,
        colorscale=color_scale,
        zmid=zmid,
        text=text,
        texttemplate="%{text}" if text is not None else None,
    ))
    fig.update_layout(xaxis_title=x_label, yaxis_title=y_label)
    return apply_common_layout(fig, title, height)


def scree_chart(result, title="Scree Plot", height=450):
    """Bars for each component's share of variance, line for the running total."""
    evr = result.explained_variance_ratio
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=evr.index.tolist(), y=evr.values,
        name="Individual", marker_color="#2E86C1",
    ))
    fig.add_trace(go.Scatter(
        x=evr.index.tolist(), y=result.cumulative_variance_ratio.values,
        name="Cumulative", mode="lines+markers", marker_color="#E63946",
    ))
    fig.update_layout(yaxis_title="Proportion of Variance", yaxis_range=[0, 1.05],
                      yaxis_tickformat=".0%")
    return apply_common_layout(fig, title, height)


def score_scatter_chart(result, x="PC1", y="PC2", title=None, height=550, opacity=0.7):
    """Scatter the records in component space, colored by the carried label."""
    if x == y:
        raise ValueError(f"Pick two different components to plot, got {x} twice")
    proj = result.scores[[x, y]].copy()
    color = None
    if result.labels is not None:
        proj[result.labels.name] = result.labels.to_numpy()
        color = result.labels.name
    evr = result.explained_variance_ratio
    fig = px.scatter(
        proj, x=x, y=y, color=color, color_discrete_map=SPECIES_COLORS, opacity=opacity,
        labels={x: f"{x} ({evr[x]:.1%})", y: f"{y} ({evr[y]:.1%})"},
    )
    return apply_common_layout(fig, title, height)


def biplot_chart(result, x="PC1", y="PC2", scale=None, title="PCA Biplot", height=600):
    """Scores plus one arrow per original variable, drawn from the correlation loadings."""
    if x == y:
        raise ValueError(f"Pick two different components to plot, got {x} twice")
    fig = score_scatter_chart(result, x, y, title=title, height=height, opacity=0.35)
    arrows = result.correlation_loadings[[x, y]]
    if scale is None:
        reach = result.scores[[x, y]].abs().max().min()
        scale = reach / max(arrows.abs().max().max(), 1e-12) * 0.8
    for feat, (lx, ly) in arrows.iterrows():
        fig.add_annotation(
            ax=0, ay=0, axref="x", ayref="y",
            x=lx * scale, y=ly * scale,
            showarrow=True,
            arrowhead=3, arrowsize=1.5, arrowwidth=2,
            arrowcolor="#1B4F72",
        )
        fig.add_annotation(
            x=lx * scale * 1.15, y=ly * scale * 1.15,
            text=FEATURE_LABELS.get(feat, feat), showarrow=False,
            font=dict(size=12, color="#1B4F72"),
        )
    return fig


def reconstruction_chart(errors, title="Reconstruction Error vs Number of Components", height=400):
    """Bar chart of reconstruction MSE against the number of components kept."""
    fig = px.bar(
        errors, x="Components", y="MSE",
        labels={"MSE": "Mean Squared Error (standardized units)"},
        color_discrete_sequence=["#2E86C1"],
    )
    fig.update_xaxes(dtick=1)
    return apply_common_layout(fig, title, height)
