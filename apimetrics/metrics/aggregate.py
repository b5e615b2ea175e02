"""Fold a message log into API request metrics."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from apimetrics.messages.models import LogMessage
from apimetrics.metrics.models import ApiMetrics, ComparisonRow, PerformanceEntry
from apimetrics.metrics.payload import InvalidPayloadError, Number, parse_payload

logger = logging.getLogger(__name__)


def combined_tokens(message: LogMessage) -> Number:
    """Total tokens reported by a message, 0 when it has no usable payload."""
    if not message.text:
        return 0
    try:
        return parse_payload(message.text).combined_tokens()
    except InvalidPayloadError:
        return 0


def _last_context_index(messages: Sequence[LogMessage]) -> int | None:
    for index in range(len(messages) - 1, -1, -1):
        message = messages[index]
        if message.is_api_request_started and combined_tokens(message) > 0:
            return index
    return None


def _add_optional(total: Number | None, value: Number | None) -> Number | None:
    if value is None:
        return total
    return (total or 0) + value


def get_api_metrics(messages: Sequence[LogMessage]) -> ApiMetrics:
    """Calculate API metrics from a conversation's message log.

    Only ``api_req_started`` messages with a JSON object payload count.
    Token, cache and cost fields are summed; durations (explicit, or derived
    from ``startTime``/``endTime``) feed the per-provider and per-model maps
    and the performance history when positive. ``context_tokens`` is the
    combined token count of the last request that reported any tokens.

    The input is read only; each call builds a fresh result.
    """
    result = ApiMetrics()
    context_index = _last_context_index(messages)

    for index, message in enumerate(messages):
        if not message.is_api_request_started or not message.text:
            continue
        try:
            payload = parse_payload(message.text)
        except InvalidPayloadError as e:
            logger.warning("Skipping api_req_started message ts=%d: %s", message.ts, e)
            continue

        if payload.tokens_in is not None:
            result.total_tokens_in += payload.tokens_in
        if payload.tokens_out is not None:
            result.total_tokens_out += payload.tokens_out
        result.total_cache_writes = _add_optional(result.total_cache_writes, payload.cache_writes)
        result.total_cache_reads = _add_optional(result.total_cache_reads, payload.cache_reads)
        if payload.cost is not None:
            result.total_cost += payload.cost

        result.request_count += 1

        request_duration = payload.request_duration()
        if request_duration > 0:
            result.total_duration += request_duration
            result.performance_history.append(
                PerformanceEntry(
                    ts=message.ts,
                    duration=request_duration,
                    tokens_in=payload.tokens_in,
                    tokens_out=payload.tokens_out,
                    provider=payload.provider,
                    model_id=payload.model_id,
                    cost=payload.cost,
                )
            )
            if payload.provider:
                _bump(result.requests_by_provider, result.duration_by_provider,
                      payload.provider, request_duration)
            if payload.model_id:
                _bump(result.requests_by_model, result.duration_by_model,
                      payload.model_id, request_duration)

        if index == context_index:
            result.context_tokens = payload.combined_tokens()

    if result.request_count > 0 and result.total_duration > 0:
        result.average_duration = result.total_duration / result.request_count

    return result


def _bump(counts: dict[str, int], durations: dict[str, Number], key: str, duration: Number) -> None:
    counts[key] = counts.get(key, 0) + 1
    durations[key] = durations.get(key, 0) + duration


def _rows(counts: dict[str, int], durations: dict[str, Number],
          history: list[PerformanceEntry], attr: str) -> list[ComparisonRow]:
    rows = {
        key: ComparisonRow(key=key, request_count=count, total_duration=durations.get(key, 0))
        for key, count in counts.items()
    }
    for entry in history:
        row = rows.get(getattr(entry, attr) or "")
        if row is None:
            continue
        row.total_tokens_in += entry.tokens_in or 0
        row.total_tokens_out += entry.tokens_out or 0
        row.total_cost += entry.cost or 0
    return list(rows.values())


def provider_rows(metrics: ApiMetrics) -> list[ComparisonRow]:
    """Per-provider rows in first-seen order."""
    return _rows(metrics.requests_by_provider, metrics.duration_by_provider,
                 metrics.performance_history, "provider")


def model_rows(metrics: ApiMetrics) -> list[ComparisonRow]:
    """Per-model rows in first-seen order."""
    return _rows(metrics.requests_by_model, metrics.duration_by_model,
                 metrics.performance_history, "model_id")
