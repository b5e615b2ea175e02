"""Small SVG building helpers shared by the chart renderers."""

from __future__ import annotations

import html
import math
from datetime import datetime

from apimetrics.charts.style import (
    AXIS_OPACITY,
    COLOR_DESCRIPTION,
    COLOR_FOREGROUND,
    FONT_AXIS,
    FONT_FAMILY,
    MIN_CHART_WIDTH,
)


def esc(value: object) -> str:
    return html.escape(str(value), quote=True)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def fmt_number(value: float) -> str:
    """Render integral values without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def fmt_time(ts: int) -> str:
    return datetime.fromtimestamp(ts / 1000).strftime("%H:%M:%S")


def fmt_datetime(ts: int) -> str:
    return datetime.fromtimestamp(ts / 1000).strftime("%Y-%m-%d %H:%M:%S")


def svg_header(width: float, height: float, css_class: str) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" class="{css_class}" '
        f'width="{fmt_number(width)}" height="{fmt_number(height)}" '
        f'viewBox="0 0 {fmt_number(width)} {fmt_number(height)}" '
        f'style="min-width: 100%; font-family: {FONT_FAMILY};">'
    )


def axis_line(x1: float, y1: float, x2: float, y2: float) -> str:
    return (
        f'<line x1="{fmt_number(x1)}" y1="{fmt_number(y1)}" '
        f'x2="{fmt_number(x2)}" y2="{fmt_number(y2)}" '
        f'stroke="{COLOR_FOREGROUND}" stroke-width="1" opacity="{AXIS_OPACITY}"/>'
    )


def text(
    x: float,
    y: float,
    content: str,
    size: int = FONT_AXIS,
    anchor: str = "",
    rotate: bool = False,
    bold: bool = False,
    color: str = COLOR_FOREGROUND,
) -> str:
    attrs = [f'x="{fmt_number(x)}"', f'y="{fmt_number(y)}"', f'fill="{color}"', f'font-size="{size}"']
    if anchor:
        attrs.append(f'text-anchor="{anchor}"')
    if bold:
        attrs.append('font-weight="bold"')
    if rotate:
        attrs.append(f'transform="rotate(45, {fmt_number(x)}, {fmt_number(y)})"')
    return f'<text {" ".join(attrs)}>{esc(content)}</text>'


def empty_chart(message: str, css_class: str) -> str:
    """Placeholder markup when there is nothing to plot."""
    height = 40
    return "\n".join([
        svg_header(MIN_CHART_WIDTH, height, css_class),
        text(MIN_CHART_WIDTH / 2, height / 2 + 4, message, anchor="middle", color=COLOR_DESCRIPTION),
        "</svg>",
    ])
