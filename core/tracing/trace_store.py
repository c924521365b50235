"""
Observability & Tracing for Smart Tender v1.0.

Structured, in-memory trace of LLM calls, document packing and pipeline
failures. Rendered as text by `main.py --trace`.
"""

from __future__ import annotations

import contextvars
import logging
import threading
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generator

from models.schemas import TraceEntry

logger = logging.getLogger(__name__)


# =============================================================================
# Cost Estimation (approximate)
# =============================================================================

# Approximate per-token costs (USD); update as pricing changes.
# Keys MUST match the model names configured in config/settings.py (DRAFT_MODEL / MODEL_FLASH).
MODEL_COSTS = {
    "gemini-2.5-pro": {"input": 1.25 / 1_000_000, "output": 10.0 / 1_000_000},
    "gemini-2.5-flash": {"input": 0.15 / 1_000_000, "output": 0.60 / 1_000_000},
    "default": {"input": 1.0 / 1_000_000, "output": 5.0 / 1_000_000},
}


def estimate_cost(model: str, tokens_in: int, tokens_out: int) -> float:
    """Estimate USD cost for an LLM call."""
    costs = MODEL_COSTS.get(model, MODEL_COSTS["default"])
    return (tokens_in * costs["input"]) + (tokens_out * costs["output"])


def estimate_tokens(text: str) -> int:
    """Rough token estimate (4 chars ≈ 1 token for English)."""
    return max(1, len(text) // 4)


# =============================================================================
# Trace Store
# =============================================================================

class TraceStore:
    """
    In-memory trace store for pipeline activity.

    Collects structured trace entries for the CLI and for debugging failed
    drafts.
    """

    MAX_ENTRIES = 2000  # Rolling cap, oldest entries trimmed first

    def __init__(self):
        self.entries: list[TraceEntry] = []
        self._lock = threading.Lock()
        self._session_start = datetime.now()
        self._total_cost: float = 0.0
        self._total_tokens_in: int = 0
        self._total_tokens_out: int = 0
        self._total_calls: int = 0

    def record(
        self,
        component: str,
        action: str,
        detail: str = "",
        tokens_in: int = 0,
        tokens_out: int = 0,
        cost_usd: float = 0.0,
        duration_ms: int = 0,
        model: str = "",
    ) -> TraceEntry:
        """Record a trace entry (thread-safe)."""
        entry = TraceEntry(
            component=component,
            action=action,
            detail=detail[:2000] if detail else "",
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            cost_usd=cost_usd,
            duration_ms=duration_ms,
            model=model,
        )

        with self._lock:
            self.entries.append(entry)
            if len(self.entries) > self.MAX_ENTRIES:
                self.entries = self.entries[-self.MAX_ENTRIES:]

            self._total_cost += cost_usd
            self._total_tokens_in += tokens_in
            self._total_tokens_out += tokens_out
            if action == "LLM_CALL":
                self._total_calls += 1

        return entry

    @contextmanager
    def trace_llm_call(
        self, component: str, model: str, prompt_text: str = ""
    ) -> Generator[dict[str, Any], None, None]:
        """
        Context manager for tracing an LLM call with automatic timing and cost.

        Usage:
            with tracer.trace_llm_call("DraftGenerator", "gemini-2.5-flash", prompt) as ctx:
                response = call_gemini(prompt)
                ctx["tokens_out"] = response.usage_metadata.candidates_token_count
                ctx["response_text"] = response.text
        """
        ctx: dict[str, Any] = {
            "tokens_in": estimate_tokens(prompt_text),
            "tokens_out": 0,
            "response_text": "",
        }
        start = time.time()

        self.record(component, "LLM_CALL", f"Model: {model}", model=model)

        try:
            yield ctx
        finally:
            duration_ms = int((time.time() - start) * 1000)
            tokens_out = ctx.get("tokens_out", 0) or estimate_tokens(ctx.get("response_text", ""))
            tokens_in = ctx.get("tokens_in", 0)
            cost = estimate_cost(model, tokens_in, tokens_out)

            self.record(
                component,
                "LLM_RESPONSE",
                f"Generated {len(ctx.get('response_text', '')):,} chars in {duration_ms}ms",
                tokens_in=tokens_in,
                tokens_out=tokens_out,
                cost_usd=cost,
                duration_ms=duration_ms,
                model=model,
            )

    # ---- Accessors ----

    @property
    def total_cost(self) -> float:
        with self._lock:
            return self._total_cost

    @property
    def total_tokens(self) -> tuple[int, int]:
        with self._lock:
            return self._total_tokens_in, self._total_tokens_out

    @property
    def total_calls(self) -> int:
        with self._lock:
            return self._total_calls

    def get_entries(self, last_n: int = 0) -> list[TraceEntry]:
        """Get a snapshot of trace entries (thread-safe), optionally last N."""
        with self._lock:
            snapshot = list(self.entries)
        if last_n > 0:
            return snapshot[-last_n:]
        return snapshot

    def format_for_export(self) -> str:
        """Format the trace as plain text."""
        with self._lock:
            calls = self._total_calls
            tokens_in = self._total_tokens_in
            tokens_out = self._total_tokens_out
            cost = self._total_cost
        lines = [
            "=" * 70,
            "ACTIVITY TRACE",
            f"Session started: {self._session_start.isoformat()}",
            f"Total LLM calls: {calls}",
            f"Total tokens: {tokens_in:,} in / {tokens_out:,} out",
            f"Estimated cost: ${cost:.4f}",
            "=" * 70,
            "",
        ]
        for entry in self.get_entries():
            cost_str = f" [${entry.cost_usd:.4f}]" if entry.cost_usd > 0 else ""
            time_str = f" [{entry.duration_ms}ms]" if entry.duration_ms > 0 else ""
            lines.append(
                f"[{entry.time}] {entry.component:20s} | {entry.action:15s}{cost_str}{time_str}"
            )
            if entry.detail:
                lines.append(f"{'':23s} └─ {entry.detail[:120]}")
        return "\n".join(lines)

    def clear(self):
        """Clear all trace entries (thread-safe)."""
        with self._lock:
            self.entries.clear()
            self._total_cost = 0.0
            self._total_tokens_in = 0
            self._total_tokens_out = 0
            self._total_calls = 0


# =============================================================================
# Context-local tracer (contextvars prevents cross-task bleed)
# =============================================================================

_tracer_var: contextvars.ContextVar[TraceStore | None] = contextvars.ContextVar("tracer", default=None)


def get_tracer() -> TraceStore:
    """Get the context-local tracer instance."""
    tracer = _tracer_var.get()
    if tracer is None:
        tracer = TraceStore()
        _tracer_var.set(tracer)
    return tracer


def set_tracer(tracer: TraceStore) -> None:
    """Set the context-local tracer."""
    _tracer_var.set(tracer)
