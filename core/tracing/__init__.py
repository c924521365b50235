"""
Core Tracing Module

In-memory tracing of LLM calls and document export.
"""

from .trace_store import TraceStore, set_tracer, get_tracer, estimate_tokens, estimate_cost

__all__ = [
    "TraceStore",
    "set_tracer",
    "get_tracer",
    "estimate_tokens",
    "estimate_cost",
]
