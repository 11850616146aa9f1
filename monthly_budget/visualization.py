"""Plotly visualisation helpers for the budget dashboard.

Each function accepts one of the DataFrames built in :mod:`summary`
(or a plain score) and returns a `plotly.graph_objects.Figure` that
Streamlit renders via ``st.plotly_chart``.  Empty inputs produce an
empty figure titled "No data to display" rather than raising.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import CURRENCY_SYMBOL

# Health gauge colours change above these scores
HEALTH_AMBER_ABOVE = 30
HEALTH_GREEN_ABOVE = 70

_STATUS_COLOURS = {
    "ok": "rgba(16, 185, 129, 0.8)",
    "warning": "rgba(245, 158, 11, 0.8)",
    "over": "rgba(239, 68, 68, 0.8)",
}


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_allocation_doughnut(categories: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Doughnut chart of allocated amounts per category.

    Parameters
    ----------
    categories : pandas.DataFrame
        Output of :func:`summary.category_usage_frame`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Doughnut chart; hovering a slice shows the amount already used.
    """
    if categories.empty or categories["Allocated"].sum() <= 0:
        return _empty_figure()
    fig = px.pie(
        categories,
        names="Category",
        values="Allocated",
        hole=0.5,
        custom_data=["Used"],
    )
    fig.update_traces(
        hovertemplate=(
            f"%{{label}}: budget {CURRENCY_SYMBOL}%{{value:,.2f}}"
            f" (used {CURRENCY_SYMBOL}%{{customdata[0]:,.2f}})<extra></extra>"
        )
    )
    fig.update_layout(title=title or "Budget allocation", legend_title_text="Category")
    return fig


def create_usage_bar_chart(categories: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bar chart of allocated versus used amounts.

    Bars for used amounts are coloured by the category's usage status.
    """
    if categories.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=categories["Category"],
        y=categories["Allocated"],
        name="Allocated",
        marker_color="rgba(59, 130, 246, 0.7)",
    ))
    fig.add_trace(go.Bar(
        x=categories["Category"],
        y=categories["Used"],
        name="Used",
        marker_color=[_STATUS_COLOURS.get(s, _STATUS_COLOURS["ok"]) for s in categories["Status"]],
    ))
    fig.update_layout(
        title=title or "Allocated vs used",
        barmode="group",
        xaxis_title="Category",
        yaxis_title=f"Amount ({CURRENCY_SYMBOL})",
    )
    return fig


def create_trend_chart(trend: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Line chart of income, disposable and total budget over recent months.

    Parameters
    ----------
    trend : pandas.DataFrame
        Output of :func:`summary.trend_frame`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        One line per metric, months on the x axis.
    """
    if trend.empty:
        return _empty_figure()
    long_df = trend.melt(
        id_vars=["Month", "Label"],
        value_vars=["Income", "Disposable", "Budget"],
        var_name="Metric",
        value_name="Amount",
    )
    fig = px.line(long_df, x="Label", y="Amount", color="Metric", markers=True)
    fig.update_layout(
        title=title or "Income and budget trend",
        xaxis_title="Month",
        yaxis_title=f"Amount ({CURRENCY_SYMBOL})",
        legend_title_text="",
    )
    fig.update_yaxes(rangemode="tozero", tickprefix=CURRENCY_SYMBOL)
    return fig


def health_colour(score: int) -> str:
    if score > HEALTH_GREEN_ABOVE:
        return "rgba(16, 185, 129, 0.7)"
    if score > HEALTH_AMBER_ABOVE:
        return "rgba(245, 158, 11, 0.7)"
    return "rgba(239, 68, 68, 0.7)"


def create_health_gauge(score: int, title: str | None = None) -> go.Figure:
    """Ring chart filled to ``score`` percent.

    Parameters
    ----------
    score : int
        Health score in [0, 100].
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Doughnut with the score in the centre.
    """
    score = max(0, min(100, int(score)))
    fig = go.Figure(go.Pie(
        values=[score, 100 - score],
        hole=0.8,
        sort=False,
        direction="clockwise",
        marker=dict(colors=[health_colour(score), "rgba(203, 213, 225, 0.3)"]),
        textinfo="none",
        hoverinfo="skip",
        showlegend=False,
    ))
    fig.update_layout(
        title=title or "Financial health",
        annotations=[dict(text=f"{score}%", x=0.5, y=0.5, font_size=28, showarrow=False)],
    )
    return fig
