"""SVG charts and the HTML performance view."""

from apimetrics.charts.comparison import render_model_chart, render_provider_chart
from apimetrics.charts.history import render_history_chart
from apimetrics.charts.view import render_performance_view

__all__ = [
    "render_history_chart",
    "render_model_chart",
    "render_performance_view",
    "render_provider_chart",
]
