"""
Draft assembly pipeline.

Combines the outline, the resolved standard clauses and a text-generation
collaborator into a tender draft, then optionally turns that draft into a
DocumentModel for packing into .docx.

Both external calls sit behind single-method async protocols so tests can
substitute deterministic fakes. Each request makes at most one awaited call;
there is no retry, timeout or cancellation handling here. A generation failure
becomes DRAFT_FAILURE_MARKER; a packing failure is raised as PackingError.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from core.clauses import resolve_clauses
from core.config_manager import get_all_clauses
from core.markdown_model import build_document_model
from core.tracing import TraceStore, get_tracer
from models.schemas import DocumentModel, PurchaseDomain, TenderClause, domain_key

logger = logging.getLogger(__name__)

# Stands in for the draft whenever generation fails, whatever the cause
DRAFT_FAILURE_MARKER = "# Error generating draft"


class PackingError(RuntimeError):
    """Raised when a DocumentModel cannot be packed into a binary document."""


class DraftGenerator(Protocol):
    async def generate(
        self,
        domain: PurchaseDomain | str,
        key_points: Sequence[str],
        outline_sections: Sequence[str],
        clauses: Sequence[TenderClause],
    ) -> str: ...


class DocumentPacker(Protocol):
    async def pack(self, model: DocumentModel) -> bytes: ...


class DraftAssemblyPipeline:
    """Produce tender drafts and their export artifacts.

    Holds no outline state: every call receives the outline it works on.
    The clause library is read from the configuration store on each request
    unless one is passed in.
    """

    component = "DraftPipeline"

    def __init__(
        self,
        generator: DraftGenerator,
        packer: DocumentPacker | None = None,
        library: Mapping[str, Sequence[TenderClause]] | None = None,
        base_dir: Path | None = None,
        tracer: TraceStore | None = None,
    ):
        self.generator = generator
        self.packer = packer
        self.library = library
        self.base_dir = base_dir
        self.tracer = tracer or get_tracer()

    def resolve(self, domain: PurchaseDomain | str) -> list[TenderClause]:
        """Clauses that apply to the domain under the current library."""
        library = self.library if self.library is not None else get_all_clauses(self.base_dir)
        return resolve_clauses(domain, library)

    async def assemble(
        self,
        domain: PurchaseDomain | str,
        outline: Sequence[str],
        key_points: Sequence[str] = (),
    ) -> str:
        """Generate the draft text.

        Returns the generator's output verbatim, or DRAFT_FAILURE_MARKER if the
        generator raised.
        """
        clauses = self.resolve(domain)
        self.tracer.record(
            self.component,
            "GENERATE",
            f"{domain_key(domain)}: {len(outline)} sections, {len(clauses)} clauses",
        )
        try:
            draft = await self.generator.generate(domain, list(key_points), list(outline), clauses)
        except Exception as e:
            logger.error("Draft generation failed for %s: %s", domain_key(domain), e, exc_info=True)
            self.tracer.record(self.component, "ERROR", f"Generation failed: {e}")
            return DRAFT_FAILURE_MARKER

        logger.info("Draft generated: %d chars for %s", len(draft), domain_key(domain))
        return draft

    def to_document_model(self, draft: str) -> DocumentModel:
        return build_document_model(draft)

    async def export_docx(self, draft: str) -> bytes:
        """Pack the draft into a .docx payload. Raises PackingError on failure."""
        if self.packer is None:
            raise PackingError("No document packer configured")

        model = self.to_document_model(draft)
        start = time.time()
        try:
            payload = await self.packer.pack(model)
        except PackingError:
            self.tracer.record(self.component, "ERROR", "Packing failed")
            raise
        except Exception as e:
            logger.error("Document packing failed: %s", e, exc_info=True)
            self.tracer.record(self.component, "ERROR", f"Packing failed: {e}")
            raise PackingError(str(e)) from e

        self.tracer.record(
            self.component,
            "PACK",
            f"{len(model)} paragraphs → {len(payload):,} bytes",
            duration_ms=int((time.time() - start) * 1000),
        )
        return payload

    @staticmethod
    def export_markdown(draft: str) -> bytes:
        """Raw draft text, unmodified, as UTF-8."""
        return draft.encode("utf-8")
