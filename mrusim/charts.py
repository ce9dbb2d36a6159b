"""Plotly chart builders for the velocity projection."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from mrusim.projection import Projection

CURVE_COLOR = "#0f172a"
EMPTY_CHART_MESSAGE = "Introduce valores para generar la gráfica"


def projection_frame(projection: Projection) -> pd.DataFrame:
    """Tabular view of the sampled curve, one row per point."""
    return pd.DataFrame(
        {
            "name": [f"{p.time_s:.1f}" for p in projection.curve],
            "time": [p.time_s for p in projection.curve],
            "velocity": [p.velocity_mps for p in projection.curve],
        },
        columns=["name", "time", "velocity"],
    )


def _empty_chart() -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=EMPTY_CHART_MESSAGE,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        showarrow=False,
        font={"size": 14, "color": "#cbd5e1"},
    )
    fig.update_layout(
        height=320,
        xaxis={"visible": False},
        yaxis={"visible": False},
        showlegend=False,
    )
    return fig


def velocity_projection_chart(projection: Projection | None) -> go.Figure:
    """Velocity vs time at fixed distance, current point highlighted."""
    if projection is None or projection.is_empty:
        return _empty_chart()

    df = projection_frame(projection)
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=df["time"].to_numpy(),
            y=df["velocity"].to_numpy(),
            mode="lines",
            fill="tozeroy",
            fillcolor="rgba(15, 23, 42, 0.1)",
            line={"color": CURVE_COLOR, "width": 2, "shape": "spline"},
            name="Velocidad",
            hovertemplate="t = %{x:.2f}s<br>%{y} m/s<extra></extra>",
        )
    )

    hl = projection.highlight
    fig.add_trace(
        go.Scatter(
            x=[hl.time_s],
            y=[hl.velocity_mps],
            mode="markers",
            marker={
                "size": 10,
                "color": "#fff",
                "line": {"color": CURVE_COLOR, "width": 3},
            },
            name="Actual",
            hovertemplate="t = %{x:.2f}s<br>%{y:.2f} m/s<extra></extra>",
        )
    )

    fig.update_layout(
        xaxis_title="Tiempo (s)",
        yaxis_title="Velocidad (m/s)",
        height=320,
        showlegend=False,
        margin={"t": 20, "r": 20, "b": 40, "l": 40},
        yaxis={"gridcolor": "#f1f5f9"},
        xaxis={"showgrid": False},
    )
    return fig
