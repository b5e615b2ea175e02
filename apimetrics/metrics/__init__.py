"""Request metrics aggregation over message logs."""

from apimetrics.metrics.aggregate import combined_tokens, get_api_metrics, model_rows, provider_rows
from apimetrics.metrics.models import ApiMetrics, ComparisonRow, PerformanceEntry
from apimetrics.metrics.payload import InvalidPayloadError, RequestPayload, parse_payload

__all__ = [
    "ApiMetrics",
    "ComparisonRow",
    "InvalidPayloadError",
    "PerformanceEntry",
    "RequestPayload",
    "combined_tokens",
    "get_api_metrics",
    "model_rows",
    "parse_payload",
    "provider_rows",
]
