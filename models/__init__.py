"""Pydantic models for type-safe data flow."""
from .schemas import (
    # Enums
    PurchaseDomain,
    TenderStatus,
    GENERAL_DOMAIN,
    domain_key,
    # Clause library & templates
    TenderClause,
    TenderTemplateConfig,
    # Projects
    TenderAnalysis,
    SavedTender,
    # Document model
    TextRun,
    HeadingParagraph,
    BulletParagraph,
    PlainParagraph,
    EmptyParagraph,
    Paragraph,
    DocumentModel,
    # Observability
    TraceEntry,
    LLMCallResult,
)

__all__ = [
    "PurchaseDomain",
    "TenderStatus",
    "GENERAL_DOMAIN",
    "domain_key",
    "TenderClause",
    "TenderTemplateConfig",
    "TenderAnalysis",
    "SavedTender",
    "TextRun",
    "HeadingParagraph",
    "BulletParagraph",
    "PlainParagraph",
    "EmptyParagraph",
    "Paragraph",
    "DocumentModel",
    "TraceEntry",
    "LLMCallResult",
]
