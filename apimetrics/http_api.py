"""HTTP REST API: metrics, charts, the performance view and prompt completion."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from apimetrics.charts import (
    render_history_chart,
    render_model_chart,
    render_performance_view,
    render_provider_chart,
)
from apimetrics.llm.base import LLMProvider, ProviderError
from apimetrics.llm.recording import request_started_message
from apimetrics.messages.store import append_message, load_messages
from apimetrics.metrics import ApiMetrics, get_api_metrics, model_rows, provider_rows
from apimetrics.types import ChartKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])


class CompleteRequest(BaseModel):
    prompt: str


class CompleteResponse(BaseModel):
    text: str
    provider: str
    model: str
    tokens_in: int = 0
    tokens_out: int = 0
    cost: float = 0.0
    latency_ms: int = 0


def _metrics(request: Request) -> ApiMetrics:
    return get_api_metrics(load_messages(request.app.state.config.message_log_path))


@router.get("/metrics")
async def metrics(request: Request) -> dict:
    return _metrics(request).to_dict()


@router.get("/performance", response_class=HTMLResponse)
async def performance(request: Request) -> HTMLResponse:
    return HTMLResponse(render_performance_view(_metrics(request)))


@router.get("/charts/{kind}.svg")
async def chart(kind: ChartKind, request: Request) -> Response:
    result = _metrics(request)
    if kind == ChartKind.HISTORY:
        svg = render_history_chart(result.performance_history)
    elif kind == ChartKind.PROVIDERS:
        svg = render_provider_chart(provider_rows(result))
    else:
        svg = render_model_chart(model_rows(result))
    return Response(content=svg, media_type="image/svg+xml")


@router.post("/complete", response_model=CompleteResponse)
async def complete(req: CompleteRequest, request: Request) -> CompleteResponse:
    provider: LLMProvider | None = request.app.state.provider
    if not provider or not provider.is_available():
        raise HTTPException(503, "No LLM provider configured")

    start_ms = int(time.time() * 1000)
    try:
        response = await provider.complete([{"role": "user", "content": req.prompt}])
    except ProviderError as e:
        logger.warning("Completion failed: %s", e)
        raise HTTPException(502, str(e)) from e
    end_ms = int(time.time() * 1000)

    append_message(
        request.app.state.config.message_log_path,
        request_started_message(response, start_ms, end_ms),
    )
    logger.info("Recorded request: provider=%s model=%s duration=%dms",
                response.provider, response.model, end_ms - start_ms)

    return CompleteResponse(
        text=response.warning + response.text,
        provider=response.provider,
        model=response.model,
        tokens_in=response.tokens_in,
        tokens_out=response.tokens_out,
        cost=response.cost,
        latency_ms=response.latency_ms,
    )
