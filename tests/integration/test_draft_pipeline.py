"""
Integration tests for the draft assembly pipeline.

Deterministic fake collaborators stand in for Gemini and the packer:
- generator receives outline, key points and resolved clauses in order
- generator failure becomes the fixed failure marker
- packing failures surface as PackingError
- end-to-end: edit outline → draft → .md and .docx on disk
"""

from __future__ import annotations

import io

import pytest
from docx import Document

from core.drafting import DRAFT_FAILURE_MARKER, DraftAssemblyPipeline, PackingError
from core.export import DocxPacker, save_docx, save_markdown
from core.outline import delete_section
from core.tracing import TraceStore
from models.schemas import DocumentModel, GENERAL_DOMAIN, PurchaseDomain, TenderClause


class RecordingGenerator:
    """Returns a fixed draft and remembers what it was asked for."""

    def __init__(self, draft: str = "# Tender\n\n## 1. Scope [generated by AI]\n- Item"):
        self.draft = draft
        self.calls = []

    async def generate(self, domain, key_points, outline_sections, clauses):
        self.calls.append((domain, list(key_points), list(outline_sections), list(clauses)))
        return self.draft


class FailingGenerator:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    async def generate(self, domain, key_points, outline_sections, clauses):
        self.calls += 1
        raise self.exc


class RecordingPacker:
    def __init__(self):
        self.models: list[DocumentModel] = []

    async def pack(self, model):
        self.models.append(model)
        return b"packed"


class BrokenPacker:
    async def pack(self, model):
        raise OSError("disk full")


LIBRARY = {
    GENERAL_DOMAIN: [TenderClause(id="GEN-01", title="Anti-Corruption")],
    PurchaseDomain.MEDICAL.value: [
        TenderClause(id="MED-01", title="Regulatory Certification"),
        TenderClause(id="MED-02", title="Biomedical Calibration", mandatory=False),
    ],
}


@pytest.fixture
def tracer():
    return TraceStore()


@pytest.mark.asyncio
async def test_assemble_passes_outline_and_resolved_clauses(tracer):
    generator = RecordingGenerator()
    pipeline = DraftAssemblyPipeline(generator, library=LIBRARY, tracer=tracer)

    draft = await pipeline.assemble(PurchaseDomain.MEDICAL, ["1. Needs", "2. Specs"], ["10 ventilators"])

    assert draft == generator.draft
    ((domain, key_points, outline, clauses),) = generator.calls
    assert domain == PurchaseDomain.MEDICAL
    assert key_points == ["10 ventilators"]
    assert outline == ["1. Needs", "2. Specs"]
    assert [c.id for c in clauses] == ["MED-01", "MED-02", "GEN-01"]
    assert [e.action for e in tracer.get_entries()] == ["GENERATE"]


@pytest.mark.asyncio
async def test_assemble_reads_clause_library_from_store(tmp_path, tracer):
    generator = RecordingGenerator()
    pipeline = DraftAssemblyPipeline(generator, base_dir=tmp_path, tracer=tracer)

    await pipeline.assemble(PurchaseDomain.FURNITURE, ["1. Overview"])

    clauses = generator.calls[0][3]
    assert [c.id for c in clauses] == ["FURN-01", "FURN-02", "FURN-03", "GEN-01", "GEN-02"]


@pytest.mark.asyncio
@pytest.mark.parametrize("exc", [RuntimeError("quota"), TimeoutError(), ValueError("blocked")])
async def test_generator_failure_returns_marker(exc, tracer):
    generator = FailingGenerator(exc)
    pipeline = DraftAssemblyPipeline(generator, library=LIBRARY, tracer=tracer)

    draft = await pipeline.assemble(PurchaseDomain.GENERAL, ["1. Scope"])

    assert draft == DRAFT_FAILURE_MARKER
    assert generator.calls == 1
    assert "ERROR" in [e.action for e in tracer.get_entries()]


@pytest.mark.asyncio
async def test_export_docx_packs_document_model(tracer):
    packer = RecordingPacker()
    pipeline = DraftAssemblyPipeline(RecordingGenerator(), packer=packer, library=LIBRARY, tracer=tracer)

    payload = await pipeline.export_docx("# Title\n- point")

    assert payload == b"packed"
    (model,) = packer.models
    assert [p.kind for p in model.paragraphs] == ["heading", "bullet"]
    assert tracer.get_entries()[-1].action == "PACK"


@pytest.mark.asyncio
async def test_export_docx_wraps_packer_errors(tracer):
    pipeline = DraftAssemblyPipeline(RecordingGenerator(), packer=BrokenPacker(), library=LIBRARY, tracer=tracer)
    with pytest.raises(PackingError, match="disk full"):
        await pipeline.export_docx("# Title")
    assert tracer.get_entries()[-1].action == "ERROR"


@pytest.mark.asyncio
async def test_export_docx_without_packer(tracer):
    pipeline = DraftAssemblyPipeline(RecordingGenerator(), library=LIBRARY, tracer=tracer)
    with pytest.raises(PackingError):
        await pipeline.export_docx("# Title")


def test_export_markdown_is_raw_utf8():
    draft = "# Tender – Möbel\n**Bold**"
    assert DraftAssemblyPipeline.export_markdown(draft) == draft.encode("utf-8")


@pytest.mark.asyncio
async def test_outline_edit_to_exported_files(tmp_path, tracer):
    """Delete a section, draft against the new outline, write both artifacts."""
    outline = delete_section(["1. Scope", "2. Pricing", "3. Delivery"], 1)
    assert outline == ["1. Scope", "2. Delivery"]

    generator = RecordingGenerator("# Office Desks\n## 1. Scope [generated by AI]\n**Qty:** 50")
    pipeline = DraftAssemblyPipeline(
        generator, packer=DocxPacker(title="Office Desks"), library=LIBRARY, tracer=tracer
    )
    draft = await pipeline.assemble(PurchaseDomain.FURNITURE, outline)
    assert generator.calls[0][2] == ["1. Scope", "2. Delivery"]

    md_path = save_markdown(draft, "Office Desks", output_dir=tmp_path)
    docx_path = await save_docx(pipeline, draft, "Office Desks", output_dir=tmp_path)

    assert md_path.read_text(encoding="utf-8") == draft
    doc = Document(io.BytesIO(docx_path.read_bytes()))
    assert [p.text for p in doc.paragraphs] == ["Office Desks", "1. Scope [generated by AI]", "Qty: 50"]
