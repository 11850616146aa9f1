"""Smoke tests for the Plotly figure builders."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from monthly_budget import summary, visualization


def _categories():
    return pd.DataFrame(
        [
            {'ID': 'a', 'Category': 'Food', 'Allocated': 400.0, 'Used': 350.0, 'Remaining': 50.0, 'Usage %': 87.5, 'Status': 'warning'},
            {'ID': 'b', 'Category': 'Rent', 'Allocated': 1200.0, 'Used': 1200.0, 'Remaining': 0.0, 'Usage %': 100.0, 'Status': 'warning'},
        ],
        columns=summary.CATEGORY_COLUMNS,
    )


def test_allocation_doughnut():
    fig = visualization.create_allocation_doughnut(_categories())
    assert isinstance(fig, go.Figure)
    assert fig.data[0].type == 'pie'
    assert fig.data[0].hole == 0.5
    assert list(fig.data[0].values) == [400.0, 1200.0]


def test_empty_inputs_give_placeholder():
    empty = pd.DataFrame(columns=summary.CATEGORY_COLUMNS)
    for fig in (
        visualization.create_allocation_doughnut(empty),
        visualization.create_usage_bar_chart(empty),
        visualization.create_trend_chart(pd.DataFrame(columns=summary.TREND_COLUMNS)),
    ):
        assert fig.layout.title.text == 'No data to display'
        assert len(fig.data) == 0


def test_usage_bar_chart_has_two_series():
    fig = visualization.create_usage_bar_chart(_categories())
    assert [trace.name for trace in fig.data] == ['Allocated', 'Used']


def test_trend_chart_lines_per_metric():
    trend = pd.DataFrame(
        [
            {'Month': '2024-02', 'Label': 'February 2024', 'Income': 4000.0, 'Disposable': 2000.0, 'Budget': 1500.0},
            {'Month': '2024-03', 'Label': 'March 2024', 'Income': 5000.0, 'Disposable': 3000.0, 'Budget': 2200.0},
        ],
        columns=summary.TREND_COLUMNS,
    )
    fig = visualization.create_trend_chart(trend)
    assert sorted(trace.name for trace in fig.data) == ['Budget', 'Disposable', 'Income']


def test_health_gauge_clamps_and_colours():
    fig = visualization.create_health_gauge(140)
    assert list(fig.data[0].values) == [100, 0]
    assert fig.layout.annotations[0].text == '100%'
    assert visualization.health_colour(20) != visualization.health_colour(50)
    assert visualization.health_colour(50) != visualization.health_colour(90)
