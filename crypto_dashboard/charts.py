"""Plotly figures for the comparison chart and the coin card sparklines."""

import math
from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from crypto_dashboard.colors import NEGATIVE_COLOR, POSITIVE_COLOR
from crypto_dashboard.config import SPARKLINE_HOURS


def time_tick_label(index: int, total: int, span_hours: int = SPARKLINE_HOURS) -> str:
    """Axis label for a sample index spread evenly over ``span_hours``.

    Returns "Start" at hour 0, "Nd" on whole days and "" otherwise.
    """
    if total <= 0:
        return ""
    hours = math.floor(index / total * span_hours)
    if hours == 0:
        return "Start"
    if hours % 24 == 0:
        return f"{hours // 24}d"
    return ""


def time_ticks(total: int) -> tuple[list[int], list[str]]:
    """Tick positions and labels for a comparison table of ``total`` rows.

    Only the first index carrying each label is kept.
    """
    values, labels, seen = [], [], set()
    for index in range(total):
        label = time_tick_label(index, total)
        if label and label not in seen:
            seen.add(label)
            values.append(index)
            labels.append(label)
    return values, labels


def _with_alpha(hsl: str, alpha: float) -> str:
    return hsl.replace("hsl(", "hsla(").replace(")", f", {alpha})")


def comparison_figure(
    table: pd.DataFrame,
    colors: dict[str, str],
    height: int = 384,
) -> go.Figure:
    """Line chart of normalized performance, one trace per column.

    Args:
        table: Output of alignment.to_frame(); NaN cells are drawn as gaps.
        colors: Line color by column label.
        height: Figure height in pixels.

    Returns:
        The figure.
    """
    fig = go.Figure()
    for label in table.columns:
        fig.add_trace(go.Scatter(
            x=table.index,
            y=table[label],
            mode="lines",
            name=label,
            line=dict(color=colors.get(label), width=2),
            connectgaps=False,
            hovertemplate="%{y:+.2f}%<extra>" + label + "</extra>",
        ))

    tick_values, tick_labels = time_ticks(len(table))
    fig.update_layout(
        height=height,
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="top", y=-0.15),
        margin=dict(l=10, r=10, t=10, b=10),
    )
    fig.update_xaxes(tickvals=tick_values, ticktext=tick_labels, showgrid=False)
    fig.update_yaxes(ticksuffix="%", tickformat=".0f", gridcolor="rgba(128,128,128,0.1)")
    return fig


def sparkline_figure(
    prices: Sequence[float],
    is_positive: bool,
    height: int = 96,
) -> go.Figure:
    """Small filled area chart of a coin's sparkline."""
    color = POSITIVE_COLOR if is_positive else NEGATIVE_COLOR
    fig = go.Figure(go.Scatter(
        x=list(range(len(prices))),
        y=list(prices),
        mode="lines",
        line=dict(color=color, width=2),
        fill="tozeroy",
        fillcolor=_with_alpha(color, 0.2),
        hoverinfo="skip",
    ))
    finite = [p for p in prices if p is not None and not math.isnan(p)]
    if finite:
        low, high = min(finite), max(finite)
        padding = (high - low) * 0.05 or abs(high) * 0.01 or 1
        fig.update_yaxes(range=[low - padding, high + padding])
    fig.update_layout(
        height=height,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig
