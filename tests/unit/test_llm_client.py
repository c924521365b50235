"""
Unit tests for the Gemini client wrapper and the draft generator.

No network: _call_gemini / call_llm are patched.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from google.genai import errors as genai_errors

from config.settings import THINKING_BUDGET_STANDARD
from core.llm_client import GeminiDraftGenerator, GenerationError, _is_retryable, call_llm
from core.tracing import TraceStore
from models.schemas import LLMCallResult, PurchaseDomain, TenderClause


def _response(text: str = "# Draft", prompt_tokens: int = 120, output_tokens: int = 40):
    response = MagicMock()
    response.text = text
    response.usage_metadata.prompt_token_count = prompt_tokens
    response.usage_metadata.candidates_token_count = output_tokens
    return response


# -----------------------------------------------------------------------------
# Retry classification
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "exc",
    [
        ConnectionError("reset"),
        TimeoutError(),
        httpx.RemoteProtocolError("peer closed connection without sending complete message body"),
        ValueError("Rate limit exceeded, slow down"),
        genai_errors.ClientError(429, {"error": {"code": 429, "message": "quota", "status": "RESOURCE_EXHAUSTED"}}),
    ],
)
def test_retryable_errors(exc):
    assert _is_retryable(exc) is True


@pytest.mark.parametrize(
    "exc",
    [
        ValueError("bad prompt"),
        genai_errors.ClientError(400, {"error": {"code": 400, "message": "invalid", "status": "INVALID_ARGUMENT"}}),
    ],
)
def test_non_retryable_errors(exc):
    assert _is_retryable(exc) is False


# -----------------------------------------------------------------------------
# call_llm
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_call_llm_success_records_trace():
    tracer = TraceStore()
    with patch("core.llm_client._call_gemini", new=AsyncMock(return_value=_response())):
        result = await call_llm("prompt", model="gemini-2.5-flash", component="Test", tracer=tracer)

    assert result.success is True
    assert result.text == "# Draft"
    assert result.tokens_in == 120
    assert result.tokens_out == 40
    actions = [e.action for e in tracer.get_entries()]
    assert actions == ["LLM_CALL", "LLM_RESPONSE"]
    assert tracer.total_calls == 1
    assert tracer.total_cost > 0


@pytest.mark.asyncio
async def test_call_llm_failure_never_raises():
    tracer = TraceStore()
    with patch("core.llm_client._call_gemini", new=AsyncMock(side_effect=RuntimeError("boom"))):
        result = await call_llm("prompt", component="Test", tracer=tracer)

    assert result.success is False
    assert result.text == ""
    assert result.error == "RuntimeError: boom"
    assert "ERROR" in [e.action for e in tracer.get_entries()]


@pytest.mark.asyncio
async def test_call_llm_blocked_response_gives_empty_text():
    class Blocked:
        usage_metadata = None

        @property
        def text(self):
            raise ValueError("no candidates")

    with patch("core.llm_client._call_gemini", new=AsyncMock(return_value=Blocked())):
        result = await call_llm("prompt", tracer=TraceStore())

    assert result.success is True
    assert result.text == ""


# -----------------------------------------------------------------------------
# GeminiDraftGenerator
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_generator_builds_prompt_from_outline_and_clauses(tmp_path):
    clause = TenderClause(id="GEN-02", title="Right to Audit", content="Audit at any time.")
    fake = AsyncMock(return_value=LLMCallResult(text="## 1. Scope [generated by AI]", model="m"))
    generator = GeminiDraftGenerator(model="m", base_dir=tmp_path, tracer=TraceStore())

    with patch("core.llm_client.call_llm", new=fake):
        draft = await generator.generate(PurchaseDomain.GENERAL, ["Paper supplies"], ["1. Scope"], [clause])

    assert draft == "## 1. Scope [generated by AI]"
    prompt = fake.call_args.args[0]
    assert "- 1. Scope" in prompt
    assert "Paper supplies" in prompt
    assert 'CLAUSE TITLE: "Right to Audit"' in prompt
    assert fake.call_args.kwargs["component"] == "DraftGenerator"
    assert fake.call_args.kwargs["model"] == "m"
    assert fake.call_args.kwargs["thinking_budget"] == THINKING_BUDGET_STANDARD


@pytest.mark.asyncio
async def test_generator_raises_on_failed_call(tmp_path):
    fake = AsyncMock(return_value=LLMCallResult(text="", model="m", success=False, error="quota"))
    generator = GeminiDraftGenerator(base_dir=tmp_path)
    with patch("core.llm_client.call_llm", new=fake):
        with pytest.raises(GenerationError, match="quota"):
            await generator.generate(PurchaseDomain.IT, [], ["1. Scope"], [])


@pytest.mark.asyncio
async def test_generator_raises_on_empty_text(tmp_path):
    fake = AsyncMock(return_value=LLMCallResult(text="   ", model="m"))
    generator = GeminiDraftGenerator(base_dir=tmp_path)
    with patch("core.llm_client.call_llm", new=fake):
        with pytest.raises(GenerationError):
            await generator.generate(PurchaseDomain.IT, [], ["1. Scope"], [])


@pytest.mark.asyncio
async def test_thinking_budget_reaches_gemini_call(tmp_path):
    fake_call = AsyncMock(return_value=_response("## Draft"))
    generator = GeminiDraftGenerator(thinking_budget=0, base_dir=tmp_path, tracer=TraceStore())
    with patch("core.llm_client._call_gemini", new=fake_call):
        assert await generator.generate(PurchaseDomain.IT, [], ["1. Scope"], []) == "## Draft"
    assert fake_call.call_args.kwargs["thinking_budget"] == 0
