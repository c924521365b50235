"""
Export module for Smart Tender v1.0.

- DocxPacker: renders a DocumentModel into a .docx payload with python-docx
- save_markdown / save_docx: write the two export artifacts, named after the
  project (or "tender-draft")
"""

from __future__ import annotations

import asyncio
import io
import logging
from datetime import datetime
from pathlib import Path

from config.settings import DEFAULT_EXPORT_NAME, OUTPUTS_FOLDER, PRODUCT_NAME
from core.drafting import DraftAssemblyPipeline, PackingError
from models.schemas import (
    BulletParagraph,
    DocumentModel,
    EmptyParagraph,
    HeadingParagraph,
    PlainParagraph,
    TextRun,
)

logger = logging.getLogger(__name__)

# python-docx default template bullet styles per indent level
_BULLET_STYLES = ("List Bullet", "List Bullet 2", "List Bullet 3")


# =============================================================================
# DOCX Packing
# =============================================================================

class DocxPacker:
    """Document packer backed by python-docx.

    Rendering is blocking, so pack() runs it in a worker thread.
    """

    def __init__(self, title: str = ""):
        self.title = title

    async def pack(self, model: DocumentModel) -> bytes:
        return await asyncio.to_thread(self.render, model)

    def render(self, model: DocumentModel) -> bytes:
        """Render the model synchronously. Raises PackingError on failure."""
        try:
            doc = self._new_document()
            for paragraph in model.paragraphs:
                _add_paragraph(doc, paragraph)
            self._add_footer(doc)

            buffer = io.BytesIO()
            doc.save(buffer)
        except Exception as e:
            logger.error("DOCX generation failed: %s", e, exc_info=True)
            raise PackingError(f"DOCX generation failed: {e}") from e
        return buffer.getvalue()

    def _new_document(self):
        from docx import Document
        from docx.shared import Inches, Pt, RGBColor

        doc = Document()

        # ---- Page Setup ----
        section = doc.sections[0]
        section.page_width = Inches(8.5)
        section.page_height = Inches(11)
        section.top_margin = Inches(1)
        section.bottom_margin = Inches(0.75)
        section.left_margin = Inches(1.2)
        section.right_margin = Inches(1.2)

        # ---- Styles ----
        normal = doc.styles["Normal"]
        normal.font.name = "Calibri"
        normal.font.size = Pt(10.5)
        normal.paragraph_format.space_after = Pt(6)
        normal.paragraph_format.line_spacing = 1.15

        for level, size in enumerate([18, 14, 12], 1):
            hs = doc.styles[f"Heading {level}"]
            hs.font.name = "Calibri"
            hs.font.size = Pt(size)
            hs.font.bold = True
            hs.font.color.rgb = RGBColor(0x1B, 0x3A, 0x5C)
            hs.paragraph_format.space_before = Pt(18 if level == 1 else 12)
            hs.paragraph_format.space_after = Pt(8)

        if self.title:
            doc.core_properties.title = self.title
        return doc

    def _add_footer(self, doc) -> None:
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.shared import Pt, RGBColor

        footer = doc.sections[0].footer
        footer_para = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
        footer_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        label = f"{PRODUCT_NAME} — {self.title}" if self.title else PRODUCT_NAME
        footer_run = footer_para.add_run(f"{label} — Generated {datetime.now().strftime('%d %B %Y')}")
        footer_run.font.size = Pt(8)
        footer_run.font.color.rgb = RGBColor(0xA0, 0xA0, 0xA0)


def _add_runs(paragraph, runs: tuple[TextRun, ...]) -> None:
    for run in runs:
        docx_run = paragraph.add_run(run.text)
        docx_run.font.bold = run.bold


def _add_paragraph(doc, node) -> None:
    from docx.shared import Inches

    if isinstance(node, EmptyParagraph):
        doc.add_paragraph()
    elif isinstance(node, HeadingParagraph):
        _add_runs(doc.add_heading("", level=node.level), node.runs)
    elif isinstance(node, BulletParagraph):
        try:
            p = doc.add_paragraph(style=_BULLET_STYLES[node.indent])
            _add_runs(p, node.runs)
        except KeyError:
            # Template without list styles: indent manually and draw the bullet
            p = doc.add_paragraph()
            p.paragraph_format.left_indent = Inches(0.25 * (node.indent + 1))
            p.add_run("• ")
            _add_runs(p, node.runs)
    elif isinstance(node, PlainParagraph):
        _add_runs(doc.add_paragraph(), node.runs)
    else:
        raise PackingError(f"Unsupported paragraph node: {type(node).__name__}")


# =============================================================================
# Export artifacts
# =============================================================================

def export_filename(project_name: str | None, extension: str) -> str:
    """File name for an export: the project name made filesystem-safe, or the default."""
    stem = (project_name or "").strip()
    safe = "".join(c if c.isalnum() or c in "-_ " else "_" for c in stem)[:100].strip()
    return f"{safe or DEFAULT_EXPORT_NAME}.{extension}"


def _output_path(filename: str, output_dir: Path | None) -> Path:
    output_dir = Path(output_dir or OUTPUTS_FOLDER)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / filename


def save_markdown(draft: str, project_name: str | None = None, output_dir: Path | None = None) -> Path:
    """Write the raw draft as <name>.md and return its path."""
    output_path = _output_path(export_filename(project_name, "md"), output_dir)
    output_path.write_bytes(DraftAssemblyPipeline.export_markdown(draft))
    logger.info("Markdown saved: %s", output_path)
    return output_path


async def save_docx(
    pipeline: DraftAssemblyPipeline,
    draft: str,
    project_name: str | None = None,
    output_dir: Path | None = None,
) -> Path:
    """Pack the draft and write it as <name>.docx. Raises PackingError on failure."""
    payload = await pipeline.export_docx(draft)
    output_path = _output_path(export_filename(project_name, "docx"), output_dir)
    output_path.write_bytes(payload)
    logger.info("DOCX saved: %s", output_path)
    return output_path
