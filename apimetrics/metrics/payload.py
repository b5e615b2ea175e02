"""Request payload carried in the text of an ``api_req_started`` message."""

from __future__ import annotations

import json
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = int | float


class InvalidPayloadError(ValueError):
    """Message text is not a strict JSON object."""


class RequestPayload(BaseModel):
    """Metrics reported for one API request.

    Every field is optional. Values of the wrong JSON type are dropped to
    ``None`` instead of failing the whole payload, so a request with a
    malformed ``cost`` still counts toward the request total.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tokens_in: Number | None = Field(default=None, alias="tokensIn")
    tokens_out: Number | None = Field(default=None, alias="tokensOut")
    cache_writes: Number | None = Field(default=None, alias="cacheWrites")
    cache_reads: Number | None = Field(default=None, alias="cacheReads")
    cost: Number | None = None
    duration: Number | None = None
    start_time: Number | None = Field(default=None, alias="startTime")
    end_time: Number | None = Field(default=None, alias="endTime")
    provider: str | None = None
    model_id: str | None = Field(default=None, alias="modelId")

    @field_validator(
        "tokens_in", "tokens_out", "cache_writes", "cache_reads",
        "cost", "duration", "start_time", "end_time",
        mode="before",
    )
    @classmethod
    def _numbers_only(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        # 1e400 decodes to inf and 1 followed by 400 zeros overflows a float;
        # both are dropped like the rejected Infinity constant
        try:
            finite = math.isfinite(value)
        except OverflowError:
            return None
        return value if finite else None

    @field_validator("provider", "model_id", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    def combined_tokens(self) -> Number:
        """Input + output + cache-write + cache-read tokens."""
        return (
            (self.tokens_in or 0)
            + (self.tokens_out or 0)
            + (self.cache_writes or 0)
            + (self.cache_reads or 0)
        )

    def request_duration(self) -> Number:
        """Explicit duration, else ``endTime - startTime``, else 0."""
        if self.duration is not None:
            return self.duration
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return 0


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_payload(text: str) -> RequestPayload:
    """Parse message text into a :class:`RequestPayload`.

    Raises:
        InvalidPayloadError: text is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise InvalidPayloadError(f"Invalid JSON payload: {e}") from e
    if not isinstance(data, dict):
        raise InvalidPayloadError(f"Payload is not a JSON object: {type(data).__name__}")
    try:
        return RequestPayload.model_validate(data)
    except ValueError as e:
        raise InvalidPayloadError(str(e)) from e
