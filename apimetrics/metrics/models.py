"""Summary records produced by the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field

from apimetrics.metrics.payload import Number


@dataclass
class PerformanceEntry:
    ts: int
    duration: Number
    tokens_in: Number | None = None
    tokens_out: Number | None = None
    provider: str | None = None
    model_id: str | None = None
    cost: Number | None = None

    def to_dict(self) -> dict:
        return {
            "ts": self.ts,
            "duration": self.duration,
            "tokensIn": self.tokens_in,
            "tokensOut": self.tokens_out,
            "provider": self.provider,
            "modelId": self.model_id,
            "cost": self.cost,
        }


@dataclass
class ApiMetrics:
    """Totals over one full pass of a message log.

    The cache totals stay ``None`` until some request reports them, so a
    consumer can tell "no caching" apart from "zero cache hits".
    """

    total_tokens_in: Number = 0
    total_tokens_out: Number = 0
    total_cache_writes: Number | None = None
    total_cache_reads: Number | None = None
    total_cost: Number = 0
    context_tokens: Number = 0
    total_duration: Number = 0
    request_count: int = 0
    average_duration: Number = 0
    requests_by_provider: dict[str, int] = field(default_factory=dict)
    duration_by_provider: dict[str, Number] = field(default_factory=dict)
    requests_by_model: dict[str, int] = field(default_factory=dict)
    duration_by_model: dict[str, Number] = field(default_factory=dict)
    performance_history: list[PerformanceEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {
            "totalTokensIn": self.total_tokens_in,
            "totalTokensOut": self.total_tokens_out,
            "totalCost": self.total_cost,
            "contextTokens": self.context_tokens,
            "totalDuration": self.total_duration,
            "requestCount": self.request_count,
            "averageDuration": self.average_duration,
            "requestsByProvider": dict(self.requests_by_provider),
            "requestsByModel": dict(self.requests_by_model),
            "durationByProvider": dict(self.duration_by_provider),
            "durationByModel": dict(self.duration_by_model),
            "performanceHistory": [e.to_dict() for e in self.performance_history],
        }
        if self.total_cache_writes is not None:
            data["totalCacheWrites"] = self.total_cache_writes
        if self.total_cache_reads is not None:
            data["totalCacheReads"] = self.total_cache_reads
        return data


@dataclass
class ComparisonRow:
    """Per-provider or per-model totals for comparison charts and tables."""

    key: str
    request_count: int = 0
    total_duration: Number = 0
    total_tokens_in: Number = 0
    total_tokens_out: Number = 0
    total_cost: Number = 0

    @property
    def average_duration(self) -> float:
        return self.total_duration / self.request_count if self.request_count else 0.0

    @property
    def tokens_per_second(self) -> float:
        if self.total_duration <= 0:
            return 0.0
        return self.total_tokens_out / (self.total_duration / 1000)
