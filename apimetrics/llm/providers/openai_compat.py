"""Generic provider for any OpenAI-compatible chat completions endpoint."""

from __future__ import annotations

import logging
import time
from typing import Any

from openai import AsyncOpenAI

from apimetrics.llm.base import LLMProvider, LLMResponse
from apimetrics.llm.pricing import ModelInfo, Usage, calculate_cost

logger = logging.getLogger(__name__)


def field_of(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


class OpenAICompatibleProvider(LLMProvider):
    provider_name = "openai-compatible"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        model_info: ModelInfo | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._model_info = model_info
        self._max_tokens = max_tokens
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if not self._client:
            self._client = AsyncOpenAI(api_key=self._api_key or "not-provided", base_url=self._base_url)
        return self._client

    def get_model(self) -> tuple[str, ModelInfo]:
        return self._model, self._model_info or ModelInfo()

    def _usage_from(self, usage: Any) -> Usage:
        """Map the response ``usage`` object onto token counts."""
        return Usage(
            input_tokens=field_of(usage, "prompt_tokens") or 0,
            output_tokens=field_of(usage, "completion_tokens") or 0,
        )

    async def complete(
        self,
        messages: list[dict],
        system_prompt: str = "",
        max_tokens: int | None = None,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        client = self._get_client()
        model_id, info = self.get_model()
        all_messages = []
        if system_prompt:
            all_messages.append({"role": "system", "content": system_prompt})
        all_messages.extend(messages)

        kwargs: dict = {
            "model": model_id,
            "messages": all_messages,
            "max_tokens": min(max_tokens or self._max_tokens, info.max_tokens),
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        start = time.monotonic()
        resp = await client.chat.completions.create(**kwargs)
        latency_ms = int((time.monotonic() - start) * 1000)

        choice = resp.choices[0]
        usage = self._usage_from(resp.usage)
        response = LLMResponse(
            text=choice.message.content or "",
            model=model_id,
            provider=self.name(),
            tokens_in=usage.input_tokens,
            tokens_out=usage.output_tokens,
            cache_write_tokens=usage.cache_write_tokens,
            cache_read_tokens=usage.cache_read_tokens,
            cost=calculate_cost(info, usage),
            latency_ms=latency_ms,
            raw=resp.model_dump() if hasattr(resp, "model_dump") else None,
        )
        logger.info(
            "LLM response: provider=%s model=%s tokens=%d latency=%dms",
            response.provider, response.model, response.tokens_used, response.latency_ms,
        )
        return response

    def name(self) -> str:
        return self.provider_name

    def is_available(self) -> bool:
        return bool(self._api_key)
