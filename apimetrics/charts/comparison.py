"""Provider and model comparison bar charts."""

from __future__ import annotations

from collections.abc import Sequence

from apimetrics.charts.style import (
    BAR_OPACITY,
    CHART_HEIGHT,
    COMPARE_AXIS_X,
    COMPARE_BAR_WIDTH,
    COMPARE_FIRST_BAR_X,
    COMPARE_GAP,
    COMPARE_TOP_PADDING,
    COLOR_DESCRIPTION,
    FONT_TITLE,
    MIN_CHART_WIDTH,
    MODEL_PALETTE,
    PROVIDER_PALETTE,
)
from apimetrics.charts.svg import (
    axis_line,
    empty_chart,
    esc,
    fmt_number,
    round_half_up,
    svg_header,
    text,
)
from apimetrics.metrics.models import ComparisonRow


def _chart_width(count: int) -> int:
    return max((COMPARE_BAR_WIDTH + COMPARE_GAP) * count, MIN_CHART_WIDTH)


def _bar(x: float, y: float, height: float, color: str, tooltip: str) -> str:
    return (
        f'<rect x="{fmt_number(x)}" y="{y:.2f}" width="{COMPARE_BAR_WIDTH}" '
        f'height="{height:.2f}" fill="{color}" opacity="{BAR_OPACITY}">'
        f"<title>{esc(tooltip)}</title></rect>"
    )


def render_provider_chart(rows: Sequence[ComparisonRow]) -> str:
    """Average request duration per provider, fastest first."""
    if not rows:
        return empty_chart("No provider data available", "provider-comparison-chart")

    data = sorted(rows, key=lambda r: r.average_duration)
    max_avg = max([r.average_duration for r in data] + [1])

    top = COMPARE_TOP_PADDING
    chart_width = _chart_width(len(data))
    height = CHART_HEIGHT + 70 + top
    baseline = CHART_HEIGHT + top

    lines = [svg_header(chart_width, height, "provider-comparison-chart")]
    lines.append(axis_line(COMPARE_AXIS_X, top, COMPARE_AXIS_X, baseline))
    lines.append(axis_line(COMPARE_AXIS_X, baseline, chart_width + 10, baseline))

    lines.append(text(10, top + 5, f"{round_half_up(max_avg)}ms"))
    lines.append(text(10, CHART_HEIGHT / 2 + top, f"{round_half_up(max_avg / 2)}ms"))
    lines.append(text(10, baseline, "0ms"))

    for index, row in enumerate(data):
        bar_height = row.average_duration / max_avg * CHART_HEIGHT
        x = index * (COMPARE_BAR_WIDTH + COMPARE_GAP) + COMPARE_FIRST_BAR_X
        y = CHART_HEIGHT - bar_height + top
        color = PROVIDER_PALETTE[index % len(PROVIDER_PALETTE)]
        tooltip = "\n".join([
            f"Provider: {row.key}",
            f"Average Duration: {round_half_up(row.average_duration)}ms",
            f"Total Requests: {row.request_count}",
            f"Total Tokens In: {fmt_number(row.total_tokens_in)}",
            f"Total Tokens Out: {fmt_number(row.total_tokens_out)}",
            f"Total Cost: ${row.total_cost:.4f}",
        ])
        center = x + COMPARE_BAR_WIDTH / 2
        lines.append("<g>")
        lines.append(_bar(x, y, bar_height, color, tooltip))
        lines.append(text(center, baseline + 20, row.key, anchor="middle"))
        lines.append(text(center, y - 10, f"{round_half_up(row.average_duration)}ms", anchor="middle"))
        lines.append("</g>")

    lines.append(text(
        chart_width / 2, baseline + 50, "Average Request Duration by Provider (ms)",
        size=FONT_TITLE, anchor="middle", bold=True,
    ))
    lines.append("</svg>")
    return "\n".join(lines)


def render_model_chart(rows: Sequence[ComparisonRow]) -> str:
    """Output tokens per second per model, fastest first."""
    if not rows:
        return empty_chart("No model data available", "model-comparison-chart")

    data = sorted(rows, key=lambda r: r.tokens_per_second, reverse=True)
    max_tps = max([r.tokens_per_second for r in data] + [1])

    top = 10
    chart_width = _chart_width(len(data))
    height = CHART_HEIGHT + 110
    baseline = CHART_HEIGHT + top

    lines = [svg_header(chart_width, height, "model-comparison-chart")]
    lines.append(axis_line(COMPARE_AXIS_X, top, COMPARE_AXIS_X, baseline))
    lines.append(axis_line(COMPARE_AXIS_X, baseline, chart_width + 10, baseline))

    lines.append(text(10, 20, str(round_half_up(max_tps))))
    lines.append(text(10, CHART_HEIGHT / 2 + top, str(round_half_up(max_tps / 2))))
    lines.append(text(10, baseline, "0"))

    for index, row in enumerate(data):
        bar_height = row.tokens_per_second / max_tps * CHART_HEIGHT
        x = index * (COMPARE_BAR_WIDTH + COMPARE_GAP) + COMPARE_FIRST_BAR_X
        y = CHART_HEIGHT - bar_height + top
        color = MODEL_PALETTE[index % len(MODEL_PALETTE)]
        tooltip = "\n".join([
            f"Model: {row.key}",
            f"Tokens/Second: {round_half_up(row.tokens_per_second)}",
            f"Average Duration: {round_half_up(row.average_duration)}ms",
            f"Total Requests: {row.request_count}",
            f"Total Tokens In: {fmt_number(row.total_tokens_in)}",
            f"Total Tokens Out: {fmt_number(row.total_tokens_out)}",
            f"Total Cost: ${row.total_cost:.4f}",
        ])
        center = x + COMPARE_BAR_WIDTH / 2
        lines.append("<g>")
        lines.append(_bar(x, y, bar_height, color, tooltip))
        lines.append(text(center, CHART_HEIGHT + 30, row.key, anchor="middle", rotate=True))
        lines.append(text(center, y - 5, str(round_half_up(row.tokens_per_second)), anchor="middle"))
        lines.append("</g>")

    lines.append(text(
        chart_width / 2, CHART_HEIGHT + 70, "Output Tokens per Second by Model",
        size=FONT_TITLE, anchor="middle", bold=True,
    ))
    lines.append(text(
        chart_width / 2, CHART_HEIGHT + 100, "Higher values indicate faster token generation",
        anchor="middle", color=COLOR_DESCRIPTION,
    ))
    lines.append("</svg>")
    return "\n".join(lines)
