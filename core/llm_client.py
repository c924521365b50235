"""
LLM Client for Smart Tender v1.0.

Gemini access through google-genai with:
- Cached client (API key or Vertex AI)
- Transport retry via tenacity (rate limits, 5xx, dropped connections)
- Token/cost tracking via TraceStore
- GeminiDraftGenerator: the draft generation collaborator used by the pipeline
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Sequence

import httpx
from google.genai import errors as genai_errors
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config.settings import (
    DRAFT_MAX_TOKENS,
    DRAFT_MODEL,
    DRAFT_TEMPERATURE,
    GEMINI_API_KEY,
    LLM_MAX_ATTEMPTS,
    THINKING_BUDGET_STANDARD,
    PROJECT_ID,
    VERTEX_LOCATION,
)
from core.config_manager import get_template_config
from core.prompts import build_draft_prompt
from core.tracing import TraceStore, estimate_tokens, get_tracer
from models.schemas import LLMCallResult, PurchaseDomain, TenderClause

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when the model call fails or yields no usable text."""


# =============================================================================
# Singleton Client Cache (avoid creating new client per call)
# =============================================================================

_client_cache: dict[str, Any] = {}


def _get_client():
    """Return a cached genai.Client instance (created once, reused)."""
    if "client" not in _client_cache:
        from google import genai
        if GEMINI_API_KEY:
            _client_cache["client"] = genai.Client(api_key=GEMINI_API_KEY)
            logger.info("Created singleton genai.Client (API key mode)")
        else:
            _client_cache["client"] = genai.Client(
                vertexai=True, project=PROJECT_ID, location=VERTEX_LOCATION
            )
            logger.info("Created singleton genai.Client for project=%s", PROJECT_ID)
    return _client_cache["client"]


# =============================================================================
# Retry configuration
# =============================================================================

RETRYABLE_EXCEPTIONS = (
    ConnectionError,
    TimeoutError,
    genai_errors.ServerError,
    # "peer closed connection without sending complete message body" and friends
    httpx.RemoteProtocolError,
    httpx.ReadError,
    httpx.ConnectError,
    httpx.TimeoutException,
)


def _is_retryable(exception: BaseException) -> bool:
    """Check if an exception is retryable (rate limit or transient error)."""
    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return True
    # ClientError covers 400/403 (not retryable) as well as 429
    if isinstance(exception, genai_errors.ClientError):
        return getattr(exception, "code", 0) == 429
    msg = str(exception).lower()
    return any(kw in msg for kw in ("resource exhausted", "rate limit"))


# =============================================================================
# Core LLM Call
# =============================================================================

@retry(
    retry=retry_if_exception(_is_retryable),
    stop=stop_after_attempt(LLM_MAX_ATTEMPTS),
    wait=wait_exponential(multiplier=2, min=4, max=60),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _call_gemini(
    prompt: str,
    model: str,
    temperature: float,
    max_tokens: int,
    thinking_budget: int | None = None,
) -> Any:
    """
    Raw async Gemini API call with retry.

    Args:
        thinking_budget: Thinking token budget for gemini-2.5 models.
            0 = disable thinking, >0 = limit thinking tokens, None = model default.

    Returns the raw response object for the caller to process.
    """
    from google.genai import types

    client = _get_client()

    config_kwargs: dict[str, Any] = {
        "temperature": temperature,
        "max_output_tokens": max_tokens,
    }
    if thinking_budget is not None:
        config_kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=thinking_budget)

    return await client.aio.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(**config_kwargs),
    )


async def call_llm(
    prompt: str,
    model: str = DRAFT_MODEL,
    temperature: float = DRAFT_TEMPERATURE,
    max_tokens: int = DRAFT_MAX_TOKENS,
    component: str = "LLM",
    tracer: TraceStore | None = None,
    thinking_budget: int | None = None,
) -> LLMCallResult:
    """
    Call Gemini with tracing and transport retry.

    Never raises: failures come back as LLMCallResult(success=False).
    """
    if tracer is None:
        tracer = get_tracer()

    with tracer.trace_llm_call(component, model, prompt) as ctx:
        start_time = time.time()
        try:
            response = await _call_gemini(
                prompt=prompt,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                thinking_budget=thinking_budget,
            )
        except Exception as e:
            logger.error("LLM call failed for %s: %s", component, e, exc_info=True)
            tracer.record(component, "ERROR", str(e)[:200], model=model)
            return LLMCallResult(
                text="",
                model=model,
                component=component,
                success=False,
                error=f"{type(e).__name__}: {e}",
            )

        # response.text can fail if no candidates (e.g. safety block)
        try:
            result_text = response.text or ""
        except (ValueError, AttributeError):
            result_text = ""
            logger.warning("Response had no text for %s (candidates may be empty)", component)

        ctx["response_text"] = result_text
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            ctx["tokens_in"] = getattr(usage, "prompt_token_count", 0) or estimate_tokens(prompt)
            ctx["tokens_out"] = getattr(usage, "candidates_token_count", 0) or 0

        return LLMCallResult(
            text=result_text,
            model=model,
            tokens_in=ctx["tokens_in"],
            tokens_out=ctx["tokens_out"],
            duration_ms=int((time.time() - start_time) * 1000),
            component=component,
            success=True,
        )


# =============================================================================
# Draft generation collaborator
# =============================================================================

class GeminiDraftGenerator:
    """Generates the tender narrative from outline, clauses and requirements."""

    component = "DraftGenerator"

    def __init__(
        self,
        model: str = DRAFT_MODEL,
        temperature: float = DRAFT_TEMPERATURE,
        max_tokens: int = DRAFT_MAX_TOKENS,
        recommended_template: str = "",
        thinking_budget: int | None = THINKING_BUDGET_STANDARD,
        base_dir: Path | None = None,
        tracer: TraceStore | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.recommended_template = recommended_template
        self.thinking_budget = thinking_budget
        self.base_dir = base_dir
        self.tracer = tracer

    async def generate(
        self,
        domain: PurchaseDomain | str,
        key_points: Sequence[str],
        outline_sections: Sequence[str],
        clauses: Sequence[TenderClause],
    ) -> str:
        template = get_template_config(domain, self.base_dir)
        prompt = build_draft_prompt(
            domain=domain,
            key_points=key_points,
            sections=outline_sections,
            clauses=clauses,
            template=template,
            recommended_template=self.recommended_template,
        )
        result = await call_llm(
            prompt,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            component=self.component,
            tracer=self.tracer,
            thinking_budget=self.thinking_budget,
        )
        if not result.success:
            raise GenerationError(result.error or "LLM call failed")
        if not result.text.strip():
            raise GenerationError("Model returned no text")
        return result.text
