"""Performance view: the three charts plus their detail tables as one HTML page."""

from __future__ import annotations

from collections.abc import Sequence

from apimetrics.charts.comparison import render_model_chart, render_provider_chart
from apimetrics.charts.history import render_history_chart
from apimetrics.charts.style import COLOR_BG, COLOR_BORDER, COLOR_DESCRIPTION, COLOR_FOREGROUND, COLOR_HOVER
from apimetrics.charts.svg import esc, fmt_datetime, fmt_number
from apimetrics.metrics.aggregate import model_rows, provider_rows
from apimetrics.metrics.models import ApiMetrics, ComparisonRow, PerformanceEntry

INTRO = (
    "Monitor and analyze the performance of your LLM API requests. This data helps you "
    "compare different providers and models to optimize your workflow."
)
EMPTY = "No performance data available yet. Make some API requests to see metrics."

_CSS = f"""
body {{ color: {COLOR_FOREGROUND}; background: {COLOR_BG}; font-size: 13px; margin: 0; padding: 20px; }}
h3 {{ margin: 0 0 10px 0; }}
section {{ margin-bottom: 30px; }}
.chart {{ overflow-x: auto; }}
.empty {{ color: {COLOR_DESCRIPTION}; text-align: center; padding: 80px 0; }}
table {{ width: 100%; border-collapse: collapse; }}
th, td {{ text-align: left; padding: 8px; border-bottom: 1px solid {COLOR_BORDER}; }}
tr:hover td {{ background: {COLOR_HOVER}; }}
"""


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    head = "".join(f"<th>{esc(h)}</th>" for h in headers)
    body = "\n".join(
        "<tr>" + "".join(f"<td>{esc(cell)}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f'<table>\n<thead><tr>{head}</tr></thead>\n<tbody>\n{body}\n</tbody>\n</table>'


def _request_rows(history: Sequence[PerformanceEntry]) -> list[list[str]]:
    return [
        [
            fmt_datetime(e.ts),
            fmt_number(e.duration),
            e.provider or "unknown",
            e.model_id or "unknown",
            fmt_number(e.tokens_in or 0),
            fmt_number(e.tokens_out or 0),
            f"${(e.cost or 0):.4f}",
        ]
        for e in reversed(history)
    ]


def _comparison_rows(rows: Sequence[ComparisonRow]) -> list[list[str]]:
    return [
        [
            r.key,
            str(r.request_count),
            f"{r.average_duration:.0f}",
            fmt_number(r.total_tokens_in),
            fmt_number(r.total_tokens_out),
            f"${r.total_cost:.4f}",
        ]
        for r in rows
    ]


def _section(title: str, chart: str, table_title: str, table: str) -> str:
    return (
        f"<section>\n<h4>{esc(title)}</h4>\n<div class=\"chart\">\n{chart}\n</div>\n"
        f"<h4>{esc(table_title)}</h4>\n{table}\n</section>"
    )


def render_performance_view(metrics: ApiMetrics, title: str = "Performance Metrics") -> str:
    """Render the full performance page for one aggregated log."""
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        f'<head><meta charset="utf-8"><title>{esc(title)}</title><style>{_CSS}</style></head>',
        "<body>",
        f"<h3>{esc(title)}</h3>",
        f"<p>{esc(INTRO)}</p>",
    ]

    history = metrics.performance_history
    if not history:
        parts.append(f'<div class="empty">{esc(EMPTY)}</div>')
    else:
        providers = provider_rows(metrics)
        models = model_rows(metrics)
        parts.append(_section(
            "API Request Performance History",
            render_history_chart(history),
            "Request Details",
            _table(
                ["Timestamp", "Duration (ms)", "Provider", "Model", "Tokens In", "Tokens Out", "Cost"],
                _request_rows(history),
            ),
        ))
        stats_headers = ["Requests", "Avg Duration (ms)", "Total Tokens In", "Total Tokens Out", "Total Cost"]
        parts.append(_section(
            "Provider Performance Comparison",
            render_provider_chart(providers),
            "Provider Statistics",
            _table(["Provider", *stats_headers], _comparison_rows(providers)),
        ))
        parts.append(_section(
            "Model Performance Comparison",
            render_model_chart(models),
            "Model Statistics",
            _table(["Model", *stats_headers], _comparison_rows(models)),
        ))

    parts.extend(["</body>", "</html>"])
    return "\n".join(parts)
