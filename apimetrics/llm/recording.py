"""Turn completed provider calls into ``api_req_started`` log messages."""

from __future__ import annotations

import json

from apimetrics.llm.base import LLMResponse
from apimetrics.messages.models import LogMessage
from apimetrics.types import MessageType, SayKind


def request_started_message(response: LLMResponse, start_ms: int, end_ms: int) -> LogMessage:
    """Build the log entry the metrics aggregator reads for one request."""
    payload: dict = {
        "tokensIn": response.tokens_in,
        "tokensOut": response.tokens_out,
        "cost": response.cost,
        "startTime": start_ms,
        "endTime": end_ms,
        "provider": response.provider,
        "modelId": response.model,
    }
    if response.cache_write_tokens is not None:
        payload["cacheWrites"] = response.cache_write_tokens
    if response.cache_read_tokens is not None:
        payload["cacheReads"] = response.cache_read_tokens
    return LogMessage(
        ts=start_ms,
        type=MessageType.SAY,
        say=SayKind.API_REQ_STARTED.value,
        text=json.dumps(payload),
    )
