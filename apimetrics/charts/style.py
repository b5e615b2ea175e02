"""Visual style constants for the performance charts.

Colors are VS Code theme variables so the markup follows the editor theme
when embedded in a webview; the hex fallback applies everywhere else.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
COLOR_FOREGROUND = "var(--vscode-foreground, #cccccc)"
COLOR_DESCRIPTION = "var(--vscode-descriptionForeground, #9d9d9d)"
COLOR_BAR = "var(--vscode-button-background, #0e639c)"
COLOR_BORDER = "var(--vscode-panel-border, #80808059)"
COLOR_HOVER = "var(--vscode-list-hoverBackground, #2a2d2e)"
COLOR_BG = "var(--vscode-editor-background, #1e1e1e)"

CHART_BLUE = "var(--vscode-charts-blue, #3794ff)"
CHART_RED = "var(--vscode-charts-red, #f14c4c)"
CHART_YELLOW = "var(--vscode-charts-yellow, #cca700)"
CHART_ORANGE = "var(--vscode-charts-orange, #d18616)"
CHART_GREEN = "var(--vscode-charts-green, #89d185)"
CHART_PURPLE = "var(--vscode-charts-purple, #b180d7)"

PROVIDER_PALETTE = [CHART_BLUE, CHART_RED, CHART_YELLOW, CHART_ORANGE, CHART_GREEN, CHART_PURPLE]
MODEL_PALETTE = [CHART_GREEN, CHART_BLUE, CHART_PURPLE, CHART_RED, CHART_YELLOW, CHART_ORANGE]

AXIS_OPACITY = 0.5
BAR_OPACITY = 0.8

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
FONT_FAMILY = "var(--vscode-font-family, Segoe UI, Helvetica, Arial, sans-serif)"
FONT_AXIS = 12
FONT_TICK = 10
FONT_TITLE = 14

# ---------------------------------------------------------------------------
# Geometry (px)
# ---------------------------------------------------------------------------
CHART_HEIGHT = 200
MIN_CHART_WIDTH = 300

HISTORY_BAR_WIDTH = 20
HISTORY_GAP = 10
HISTORY_LABEL_EVERY = 5   # x-axis time label on every Nth bar

COMPARE_BAR_WIDTH = 40
COMPARE_GAP = 20
COMPARE_TOP_PADDING = 30  # room for value labels above the tallest bar
COMPARE_AXIS_X = 60
COMPARE_FIRST_BAR_X = 70
