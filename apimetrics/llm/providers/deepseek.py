"""DeepSeek provider: OpenAI-compatible API with status-aware error messages."""

from __future__ import annotations

from typing import Any

import openai

from apimetrics.llm.base import LLMResponse, ProviderError
from apimetrics.llm.pricing import DEEPSEEK_DEFAULT_MODEL_ID, DEEPSEEK_MODELS, ModelInfo, Usage
from apimetrics.llm.providers.openai_compat import OpenAICompatibleProvider, field_of
from apimetrics.llm.status import StatusChecker

DEEPSEEK_BASE_URL = "https://api.deepseek.com"
DEEPSEEK_STATUS_URL = "https://status.deepseek.com/api/v2/status.json"

DEEPSEEK_ERROR_CODES: dict[str, str] = {
    "invalid_api_key": "Invalid API key provided",
    "insufficient_quota": "Insufficient quota to complete the request",
    "rate_limit_exceeded": "Rate limit exceeded, please try again later",
    "model_not_found": "The requested model was not found",
    "context_length_exceeded": "Input exceeds maximum context length",
    "invalid_request": "Invalid request parameters",
    "internal_server_error": "Internal server error",
    "service_unavailable": "Service temporarily unavailable",
}

# Codes that get the status page message appended during an incident
_OUTAGE_CODES = ("service_unavailable", "internal_server_error")


class DeepSeekProvider(OpenAICompatibleProvider):
    provider_name = "deepseek"

    def __init__(
        self,
        api_key: str,
        model: str = DEEPSEEK_DEFAULT_MODEL_ID,
        base_url: str = DEEPSEEK_BASE_URL,
        model_info: ModelInfo | None = None,
        max_tokens: int = 1024,
        status_checker: StatusChecker | None = None,
    ) -> None:
        super().__init__(api_key, model or DEEPSEEK_DEFAULT_MODEL_ID, base_url or DEEPSEEK_BASE_URL,
                         model_info, max_tokens)
        self.status_checker = status_checker or StatusChecker(DEEPSEEK_STATUS_URL)

    def get_model(self) -> tuple[str, ModelInfo]:
        if self._model_info:
            return self._model, self._model_info
        info = DEEPSEEK_MODELS.get(self._model, DEEPSEEK_MODELS[DEEPSEEK_DEFAULT_MODEL_ID])
        return self._model, info

    def _usage_from(self, usage: Any) -> Usage:
        details = field_of(usage, "prompt_tokens_details")
        return Usage(
            input_tokens=field_of(usage, "prompt_tokens") or 0,
            output_tokens=field_of(usage, "completion_tokens") or 0,
            cache_write_tokens=field_of(details, "cache_miss_tokens"),
            cache_read_tokens=field_of(details, "cached_tokens"),
        )

    def status_warning(self) -> str:
        status = self.status_checker.status
        if status.operational:
            return ""
        return (
            f"⚠️ DeepSeek API may be experiencing issues: "
            f"{status.message or 'Unknown status issue'}. "
        )

    def format_error(self, error: BaseException | None) -> str:
        """Turn an API exception into a readable message."""
        if error is None:
            return "Unknown error occurred"

        code = getattr(error, "code", None) or getattr(error, "type", None)
        message = getattr(error, "message", None) or str(error) or "Unknown error"

        if code and str(code) in DEEPSEEK_ERROR_CODES:
            code = str(code)
            message = DEEPSEEK_ERROR_CODES[code]
            status = self.status_checker.status
            if not status.operational and code in _OUTAGE_CODES:
                message += f" (DeepSeek API Status: {status.message or 'Issues reported'})"

        return f"DeepSeek API Error: {message}"

    async def complete(
        self,
        messages: list[dict],
        system_prompt: str = "",
        max_tokens: int | None = None,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> LLMResponse:
        await self.status_checker.check()
        warning = self.status_warning()
        try:
            response = await super().complete(
                messages, system_prompt=system_prompt, max_tokens=max_tokens,
                temperature=temperature, json_mode=json_mode,
            )
        except openai.OpenAIError as e:
            raise ProviderError(warning + self.format_error(e)) from e
        response.warning = warning
        return response

    async def status(self) -> dict:
        await self.status_checker.check()
        return self.status_checker.to_dict()
