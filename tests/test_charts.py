"""Test SVG chart and performance view rendering."""

from apimetrics.charts import (
    render_history_chart,
    render_model_chart,
    render_performance_view,
    render_provider_chart,
)
from apimetrics.charts.svg import fmt_number, fmt_time, round_half_up
from apimetrics.metrics.models import ApiMetrics, ComparisonRow, PerformanceEntry


def _entry(ts, duration, provider="openai", model="gpt-4", cost=0.001):
    return PerformanceEntry(ts=ts, duration=duration, tokens_in=10, tokens_out=20,
                            provider=provider, model_id=model, cost=cost)


def test_helpers():
    assert round_half_up(2.5) == 3
    assert round_half_up(75) == 75
    assert fmt_number(150.0) == "150"
    assert fmt_number(150.5) == "150.5"
    assert fmt_number(7) == "7"


def test_history_chart_scales_to_max_duration():
    svg = render_history_chart([_entry(2000, 100), _entry(1000, 400)])
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert ">400ms</text>" in svg
    assert ">200ms</text>" in svg
    assert ">0ms</text>" in svg
    assert svg.count("<rect") == 3  # two bars and the legend swatch
    assert "Request Duration (ms)" in svg
    assert 'width="300"' in svg


def test_history_chart_sorts_by_timestamp():
    svg = render_history_chart([_entry(5000, 100), _entry(1000, 200)])
    # first bar (x=50) is the earlier, taller request
    assert 'x="50" y="10.00" width="20" height="200.00"' in svg
    assert "Cost: $0.0010" in svg


def test_history_chart_labels_every_fifth_bar():
    entries = [_entry(1000 * (i + 1), 10) for i in range(7)]
    svg = render_history_chart(entries)
    assert svg.count("rotate(45") == 2
    assert fmt_time(1000) in svg
    assert fmt_time(6000) in svg


def test_history_chart_empty():
    svg = render_history_chart([])
    assert ">1ms</text>" in svg
    assert "<title>" not in svg


def test_provider_chart_sorted_by_average_duration():
    rows = [
        ComparisonRow(key="slow", request_count=1, total_duration=900, total_cost=0.5),
        ComparisonRow(key="fast", request_count=2, total_duration=200),
    ]
    svg = render_provider_chart(rows)
    assert svg.index(">fast</text>") < svg.index(">slow</text>")
    assert ">900ms</text>" in svg
    assert ">100ms</text>" in svg
    assert "Average Request Duration by Provider (ms)" in svg
    assert "Total Cost: $0.5000" in svg
    assert "var(--vscode-charts-blue" in svg


def test_provider_chart_empty():
    assert "No provider data available" in render_provider_chart([])


def test_model_chart_sorted_by_tokens_per_second():
    rows = [
        ComparisonRow(key="m-slow", request_count=1, total_duration=2000, total_tokens_out=100),
        ComparisonRow(key="m-fast", request_count=1, total_duration=1000, total_tokens_out=300),
    ]
    svg = render_model_chart(rows)
    assert svg.index(">m-fast</text>") < svg.index(">m-slow</text>")
    assert ">300</text>" in svg
    assert ">150</text>" in svg
    assert ">50</text>" in svg
    assert "Output Tokens per Second by Model" in svg
    assert "Higher values indicate faster token generation" in svg


def test_model_chart_empty():
    assert "No model data available" in render_model_chart([])


def test_labels_are_escaped():
    rows = [ComparisonRow(key="<script>&", request_count=1, total_duration=10)]
    svg = render_provider_chart(rows)
    assert "<script>" not in svg
    assert "&lt;script&gt;&amp;" in svg


def test_view_empty_state():
    html = render_performance_view(ApiMetrics())
    assert html.startswith("<!DOCTYPE html>")
    assert "No performance data available yet" in html
    assert "<svg" not in html


def test_view_with_data():
    metrics = ApiMetrics(
        request_count=2,
        total_duration=300,
        requests_by_provider={"openai": 2},
        duration_by_provider={"openai": 300},
        requests_by_model={"gpt-4": 2},
        duration_by_model={"gpt-4": 300},
        performance_history=[_entry(1000, 100, cost=0.25), _entry(2000, 200, cost=0.5)],
    )
    html = render_performance_view(metrics)
    assert html.count("<svg") == 3
    assert "Request Details" in html
    assert "Provider Statistics" in html
    assert "Model Statistics" in html
    # newest request first
    assert html.index("<td>200</td>") < html.index("<td>100</td>")
    assert "<td>$0.7500</td>" in html
    assert "<td>150</td>" in html
