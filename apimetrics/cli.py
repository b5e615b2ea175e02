"""CLI for inspecting a message log.

Usage:
    apimetrics summary messages.json [--json]
    apimetrics chart messages.json --kind providers [-o providers.svg]
    apimetrics view messages.json [-o performance.html]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from apimetrics.charts import (
    render_history_chart,
    render_model_chart,
    render_performance_view,
    render_provider_chart,
)
from apimetrics.messages.models import LogMessage
from apimetrics.messages.store import load_messages
from apimetrics.metrics import ApiMetrics, get_api_metrics, model_rows, provider_rows
from apimetrics.observability.logging import setup_logging
from apimetrics.types import ChartKind


def _load(path: str) -> list[LogMessage]:
    """Load the message log or exit with error."""
    if not Path(path).expanduser().exists():
        print(f"File not found: {path}")
        sys.exit(1)
    return load_messages(path)


def _write(content: str, output: str | None) -> None:
    if output:
        Path(output).write_text(content, encoding="utf-8")
        print(f"Written: {output}")
    else:
        print(content)


def _print_summary(metrics: ApiMetrics) -> None:
    print(f"Requests:        {metrics.request_count}")
    print(f"Tokens in/out:   {metrics.total_tokens_in} / {metrics.total_tokens_out}")
    if metrics.total_cache_writes is not None or metrics.total_cache_reads is not None:
        print(f"Cache w/r:       {metrics.total_cache_writes or 0} / {metrics.total_cache_reads or 0}")
    print(f"Context tokens:  {metrics.context_tokens}")
    print(f"Total cost:      ${metrics.total_cost:.4f}")
    print(f"Total duration:  {metrics.total_duration}ms")
    print(f"Avg duration:    {metrics.average_duration:.0f}ms")
    for title, rows in (("Providers", provider_rows(metrics)), ("Models", model_rows(metrics))):
        if not rows:
            continue
        print()
        print(f"{title}:")
        for row in rows:
            print(f"  {row.key:<24} {row.request_count:>5} req  {row.average_duration:>8.0f}ms avg"
                  f"  {row.tokens_per_second:>8.1f} tok/s  ${row.total_cost:.4f}")


def cmd_summary(args: argparse.Namespace) -> None:
    """Print aggregate metrics for a log."""
    metrics = get_api_metrics(_load(args.log))
    if args.json:
        print(json.dumps(metrics.to_dict(), indent=2))
    else:
        _print_summary(metrics)


def cmd_chart(args: argparse.Namespace) -> None:
    """Render one SVG chart."""
    metrics = get_api_metrics(_load(args.log))
    kind = ChartKind(args.kind)
    if kind == ChartKind.HISTORY:
        svg = render_history_chart(metrics.performance_history)
    elif kind == ChartKind.PROVIDERS:
        svg = render_provider_chart(provider_rows(metrics))
    else:
        svg = render_model_chart(model_rows(metrics))
    _write(svg, args.output)


def cmd_view(args: argparse.Namespace) -> None:
    """Render the full HTML performance view."""
    metrics = get_api_metrics(_load(args.log))
    _write(render_performance_view(metrics), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apimetrics", description="LLM API request metrics")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("summary", help="Print aggregate metrics")
    p.add_argument("log", help="Message log JSON file")
    p.add_argument("--json", action="store_true", help="Emit the summary as JSON")
    p.set_defaults(func=cmd_summary)

    p = sub.add_parser("chart", help="Render an SVG chart")
    p.add_argument("log", help="Message log JSON file")
    p.add_argument("--kind", choices=[k.value for k in ChartKind], default=ChartKind.HISTORY.value)
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.set_defaults(func=cmd_chart)

    p = sub.add_parser("view", help="Render the HTML performance view")
    p.add_argument("log", help="Message log JSON file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.set_defaults(func=cmd_view)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
