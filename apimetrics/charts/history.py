"""Request duration history chart."""

from __future__ import annotations

from collections.abc import Iterable

from apimetrics.charts.style import (
    BAR_OPACITY,
    CHART_HEIGHT,
    COLOR_BAR,
    FONT_TICK,
    HISTORY_BAR_WIDTH,
    HISTORY_GAP,
    HISTORY_LABEL_EVERY,
    MIN_CHART_WIDTH,
)
from apimetrics.charts.svg import (
    axis_line,
    esc,
    fmt_datetime,
    fmt_number,
    fmt_time,
    round_half_up,
    svg_header,
    text,
)
from apimetrics.metrics.models import PerformanceEntry

AXIS_X = 40
FIRST_BAR_X = 50
TOP = 10
LEGEND_HEIGHT = 30


def _tooltip(entry: PerformanceEntry) -> str:
    return "\n".join([
        fmt_datetime(entry.ts),
        f"Duration: {fmt_number(entry.duration)}ms",
        f"Provider: {entry.provider or 'unknown'}",
        f"Model: {entry.model_id or 'unknown'}",
        f"Tokens In: {fmt_number(entry.tokens_in or 0)}",
        f"Tokens Out: {fmt_number(entry.tokens_out or 0)}",
        f"Cost: ${(entry.cost or 0):.4f}",
    ])


def render_history_chart(entries: Iterable[PerformanceEntry]) -> str:
    """Bar chart of request durations in timestamp order.

    Entries are sorted here; the aggregator only guarantees append order.
    """
    data = sorted(entries, key=lambda e: e.ts)
    max_duration = max([e.duration for e in data] + [1])

    chart_width = (HISTORY_BAR_WIDTH + HISTORY_GAP) * len(data)
    width = max(chart_width, MIN_CHART_WIDTH)
    height = CHART_HEIGHT + 50 + LEGEND_HEIGHT
    baseline = CHART_HEIGHT + TOP

    lines = [svg_header(width, height, "performance-chart")]
    lines.append(axis_line(AXIS_X, TOP, AXIS_X, baseline))
    lines.append(axis_line(AXIS_X, baseline, chart_width + AXIS_X, baseline))

    lines.append(text(10, 20, f"{fmt_number(max_duration)}ms"))
    lines.append(text(10, CHART_HEIGHT / 2 + TOP, f"{round_half_up(max_duration / 2)}ms"))
    lines.append(text(10, baseline, "0ms"))

    for index, entry in enumerate(data):
        bar_height = entry.duration / max_duration * CHART_HEIGHT
        x = index * (HISTORY_BAR_WIDTH + HISTORY_GAP) + FIRST_BAR_X
        y = CHART_HEIGHT - bar_height + TOP
        lines.append("<g>")
        lines.append(
            f'<rect x="{fmt_number(x)}" y="{y:.2f}" width="{HISTORY_BAR_WIDTH}" '
            f'height="{bar_height:.2f}" fill="{COLOR_BAR}" opacity="{BAR_OPACITY}">'
            f"<title>{esc(_tooltip(entry))}</title></rect>"
        )
        if index % HISTORY_LABEL_EVERY == 0:
            lines.append(text(
                x + HISTORY_BAR_WIDTH / 2, CHART_HEIGHT + 30, fmt_time(entry.ts),
                size=FONT_TICK, anchor="middle", rotate=True,
            ))
        lines.append("</g>")

    # Legend
    legend_y = height - LEGEND_HEIGHT / 2
    legend_x = width / 2 - 70
    lines.append('<g class="chart-legend">')
    lines.append(
        f'<rect x="{fmt_number(legend_x)}" y="{fmt_number(legend_y - 6)}" width="12" height="12" '
        f'fill="{COLOR_BAR}" opacity="{BAR_OPACITY}"/>'
    )
    lines.append(text(legend_x + 17, legend_y + 4, "Request Duration (ms)"))
    lines.append("</g>")

    lines.append("</svg>")
    return "\n".join(lines)
