"""Model capabilities, per-million-token prices and cost calculation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelInfo:
    max_tokens: int = 8192
    context_window: int = 64_000
    supports_images: bool = False
    supports_prompt_cache: bool = False
    input_price: float = 0.0         # USD per 1M uncached input tokens
    output_price: float = 0.0        # USD per 1M output tokens
    cache_writes_price: float = 0.0  # USD per 1M cache-miss input tokens
    cache_reads_price: float = 0.0   # USD per 1M cache-hit input tokens
    description: str = ""


@dataclass(frozen=True)
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0
    cache_write_tokens: int | None = None
    cache_read_tokens: int | None = None


DEEPSEEK_DEFAULT_MODEL_ID = "deepseek-chat"

# Input is billed entirely through the cache buckets: a miss is a write, a hit is a read.
DEEPSEEK_MODELS: dict[str, ModelInfo] = {
    "deepseek-chat": ModelInfo(
        max_tokens=8_000,
        context_window=64_000,
        supports_prompt_cache=True,
        input_price=0.0,
        output_price=1.10,
        cache_writes_price=0.27,
        cache_reads_price=0.07,
        description="DeepSeek-V3 general chat model.",
    ),
    "deepseek-reasoner": ModelInfo(
        max_tokens=8_000,
        context_window=64_000,
        supports_prompt_cache=True,
        input_price=0.0,
        output_price=2.19,
        cache_writes_price=0.55,
        cache_reads_price=0.14,
        description="DeepSeek-R1 reasoning model.",
    ),
}


def calculate_cost(info: ModelInfo, usage: Usage) -> float:
    """Cost in USD for OpenAI-style usage, where input tokens include cached ones."""
    cache_writes = usage.cache_write_tokens or 0
    cache_reads = usage.cache_read_tokens or 0
    uncached_input = max(0, usage.input_tokens - cache_writes - cache_reads)
    return (
        info.cache_writes_price / 1_000_000 * cache_writes
        + info.cache_reads_price / 1_000_000 * cache_reads
        + info.input_price / 1_000_000 * uncached_input
        + info.output_price / 1_000_000 * usage.output_tokens
    )
