"""
Unit tests for the in-memory activity trace.
"""

from __future__ import annotations

import asyncio

from core.tracing import TraceStore, estimate_cost, estimate_tokens, get_tracer, set_tracer


def test_record_accumulates_totals():
    tracer = TraceStore()
    tracer.record("DraftGenerator", "LLM_CALL", "Model: m", model="m")
    tracer.record("DraftGenerator", "LLM_RESPONSE", tokens_in=100, tokens_out=20, cost_usd=0.5)
    assert tracer.total_calls == 1
    assert tracer.total_tokens == (100, 20)
    assert tracer.total_cost == 0.5
    assert len(tracer.get_entries(last_n=1)) == 1


def test_trace_llm_call_records_response():
    tracer = TraceStore()
    with tracer.trace_llm_call("DraftGenerator", "gemini-2.5-flash", "x" * 400) as ctx:
        ctx["response_text"] = "y" * 80
    call, response = tracer.get_entries()
    assert call.action == "LLM_CALL"
    assert response.tokens_in == 100
    assert response.tokens_out == 20
    assert response.cost_usd == estimate_cost("gemini-2.5-flash", 100, 20)


def test_entries_are_capped():
    tracer = TraceStore()
    for i in range(TraceStore.MAX_ENTRIES + 5):
        tracer.record("C", "STEP", str(i))
    entries = tracer.get_entries()
    assert len(entries) == TraceStore.MAX_ENTRIES
    assert entries[0].detail == "5"


def test_format_and_clear():
    tracer = TraceStore()
    tracer.record("DraftPipeline", "PACK", "12 paragraphs")
    text = tracer.format_for_export()
    assert "ACTIVITY TRACE" in text
    assert "DraftPipeline" in text
    tracer.clear()
    assert tracer.get_entries() == []
    assert tracer.total_cost == 0.0


def test_estimate_tokens_minimum_one():
    assert estimate_tokens("") == 1


def test_tracer_is_context_local():
    mine = TraceStore()
    set_tracer(mine)
    assert get_tracer() is mine

    async def other_task():
        set_tracer(TraceStore())
        return get_tracer()

    theirs = asyncio.run(other_task())
    assert theirs is not mine
    assert get_tracer() is mine
