"""
Pydantic models for Smart Tender v1.0.

Every data boundary (saved projects, clause library, LLM output, the
document model handed to the packer) flows through these models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class PurchaseDomain(str, Enum):
    IT = "IT Services & Software"
    FURNITURE = "Furniture & Fittings"
    LOGISTICS = "Logistics & Transport"
    MEDICAL = "Medical Equipment"
    CONSTRUCTION = "Construction & Renovation"
    GENERAL = "General Goods"
    UNSPECIFIED = "Unspecified"


# Reserved fallback domain of the clause library
GENERAL_DOMAIN = PurchaseDomain.GENERAL.value


class TenderStatus(str, Enum):
    DRAFT = "Draft"
    REVIEW = "Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


def domain_key(domain: PurchaseDomain | str) -> str:
    """Return the library/template key for a domain given as enum or string."""
    if isinstance(domain, PurchaseDomain):
        return domain.value
    return str(domain)


# =============================================================================
# Clause Library & Templates
# =============================================================================

class TenderClause(BaseModel):
    """A reusable, domain-tagged block of boilerplate text."""
    id: str
    title: str
    content: str = ""  # Markdown
    mandatory: bool = True


class TenderTemplateConfig(BaseModel):
    """Default outline and drafting guidance for one purchase domain."""
    domain: str
    sections: list[str] = Field(default_factory=list)
    focus_area: str = ""
    compliance_keywords: list[str] = Field(default_factory=list)


# =============================================================================
# Projects
# =============================================================================

class TenderAnalysis(BaseModel):
    """Structured requirements extracted for one tender."""
    key_points: list[str] = Field(default_factory=list)
    domain: str = PurchaseDomain.UNSPECIFIED.value
    recommended_template: str = ""
    reasoning: str = ""
    structure: list[str] | None = None  # Outline sections, when known


class SavedTender(BaseModel):
    """A named project record persisted by models.tender_store."""
    id: str
    name: str
    domain: str
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    analysis: TenderAnalysis = Field(default_factory=TenderAnalysis)
    structure: list[str] = Field(default_factory=list)
    draft_content: str | None = None
    status: TenderStatus = TenderStatus.DRAFT


# =============================================================================
# Document Model (markdown → .docx intermediate representation)
# =============================================================================

class TextRun(BaseModel):
    """A contiguous span of text sharing one bold/plain style."""
    model_config = ConfigDict(frozen=True)

    text: str
    bold: bool = False


class HeadingParagraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    runs: tuple[TextRun, ...] = ()


class BulletParagraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["bullet"] = "bullet"
    indent: int = Field(default=0, ge=0, le=2)
    runs: tuple[TextRun, ...] = ()


class PlainParagraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    runs: tuple[TextRun, ...] = ()


class EmptyParagraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"


Paragraph = Annotated[
    Union[HeadingParagraph, BulletParagraph, PlainParagraph, EmptyParagraph],
    Field(discriminator="kind"),
]


class DocumentModel(BaseModel):
    """Ordered, immutable sequence of paragraphs derived from a draft."""
    model_config = ConfigDict(frozen=True)

    paragraphs: tuple[Paragraph, ...] = ()

    def __len__(self) -> int:
        return len(self.paragraphs)


# =============================================================================
# Observability
# =============================================================================

class TraceEntry(BaseModel):
    """Single entry in the activity trace."""
    time: str = Field(default_factory=lambda: datetime.now().strftime("%H:%M:%S"))
    component: str
    action: str
    detail: str = ""
    tokens_in: int = 0
    tokens_out: int = 0
    cost_usd: float = 0.0
    duration_ms: int = 0
    model: str = ""


class LLMCallResult(BaseModel):
    """Result from an LLM call with metadata."""
    text: str
    model: str
    tokens_in: int = 0
    tokens_out: int = 0
    duration_ms: int = 0
    component: str = "LLM"
    success: bool = True
    error: str | None = None
