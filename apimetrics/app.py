"""FastAPI application factory that wires everything together."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apimetrics import __version__
from apimetrics.config import ApiMetricsConfig
from apimetrics.http_api import router as api_router
from apimetrics.llm.base import LLMProvider
from apimetrics.llm.providers.deepseek import DeepSeekProvider
from apimetrics.llm.status import StatusChecker

logger = logging.getLogger(__name__)


def build_provider(config: ApiMetricsConfig) -> LLMProvider | None:
    if not config.deepseek_api_key:
        return None
    return DeepSeekProvider(
        config.deepseek_api_key,
        model=config.deepseek_model,
        base_url=config.deepseek_base_url,
        model_info=config.custom_model_info(),
        max_tokens=config.deepseek_max_tokens,
        status_checker=StatusChecker(config.deepseek_status_url, interval=config.deepseek_status_interval),
    )


def create_app(config: ApiMetricsConfig | None = None, provider: LLMProvider | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    if config is None:
        config = ApiMetricsConfig.from_yaml()
    if provider is None:
        provider = build_provider(config)

    app = FastAPI(title="apimetrics", version=__version__, docs_url="/docs")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    app.state.config = config
    app.state.provider = provider
    app.include_router(api_router)

    @app.get("/health")
    async def health():
        if provider is None:
            return {"status": "healthy", "provider": None}
        status = await provider.status()
        return {
            "status": "healthy" if status.get("operational", True) else "degraded",
            "provider": provider.name(),
            "model": provider.get_model()[0],
            "provider_status": status,
        }

    @app.get("/")
    async def root():
        return {
            "name": "apimetrics",
            "version": __version__,
            "provider": provider.name() if provider else None,
            "message_log": config.message_log_path,
        }

    logger.info("apimetrics %s: provider=%s log=%s", __version__,
                provider.name() if provider else "none", config.message_log_path)
    return app
