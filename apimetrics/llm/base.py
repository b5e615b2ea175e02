"""LLM provider abstraction."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field

from apimetrics.llm.pricing import ModelInfo


class ProviderError(RuntimeError):
    """A provider call failed; the message is ready to show to a user."""


@dataclass
class LLMResponse:
    text: str
    model: str
    provider: str
    tokens_in: int = 0
    tokens_out: int = 0
    cache_write_tokens: int | None = None
    cache_read_tokens: int | None = None
    cost: float = 0.0
    latency_ms: int = 0
    warning: str = ""  # service status notice, prefixed to prompt completions
    raw: dict | None = field(default=None, repr=False)

    @property
    def tokens_used(self) -> int:
        return self.tokens_in + self.tokens_out


class LLMProvider(abc.ABC):
    """Base class for all LLM provider integrations."""

    @abc.abstractmethod
    async def complete(
        self,
        messages: list[dict],
        system_prompt: str = "",
        max_tokens: int = 1024,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Send a chat completion request."""

    async def complete_prompt(self, prompt: str) -> str:
        """Complete a single user prompt and return the text."""
        response = await self.complete([{"role": "user", "content": prompt}])
        return response.warning + response.text

    @abc.abstractmethod
    def get_model(self) -> tuple[str, ModelInfo]:
        """Active model id and its info."""

    @abc.abstractmethod
    def name(self) -> str:
        """Provider identifier."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """True if credentials are configured."""

    async def status(self) -> dict:
        """Service status as reported by the vendor (optional override)."""
        return {"operational": True}
