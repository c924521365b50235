"""
Markdown → DocumentModel conversion for .docx export.

Handles the subset the drafting prompt asks the model to produce: headings,
bullets (three indent levels), **bold** runs, plain paragraphs and blank
lines. Anything else degrades to a plain paragraph. Every input line yields
exactly one paragraph, in order, and conversion never raises.
"""

from __future__ import annotations

import re

from models.schemas import (
    BulletParagraph,
    DocumentModel,
    EmptyParagraph,
    HeadingParagraph,
    Paragraph,
    PlainParagraph,
    TextRun,
)

_HEADING = re.compile(r"^(#{1,6})\s+(.*)$")
_BULLET_MARKERS = ("- ", "* ")
_BOLD_DELIMITER = "**"


def parse_inline_bold(text: str) -> tuple[TextRun, ...]:
    """Split text on ** into runs; odd-positioned pieces are bold.

    Unbalanced delimiters are not corrected: a trailing piece keeps whatever
    style its position gives it. Empty pieces produce no run.
    """
    parts = text.split(_BOLD_DELIMITER)
    return tuple(
        TextRun(text=part, bold=index % 2 == 1)
        for index, part in enumerate(parts)
        if part
    )


def bullet_indent(line: str) -> int:
    """Indent level (0-2) of a bullet from the untrimmed line's leading whitespace."""
    if line.startswith("      ") or line.startswith("\t\t"):
        return 2
    if line.startswith("   ") or line.startswith("\t"):
        return 1
    return 0


def classify_line(line: str) -> Paragraph:
    """Map one line of draft text to its paragraph node."""
    trimmed = line.strip()
    if not trimmed:
        return EmptyParagraph()

    heading = _HEADING.match(trimmed)
    if heading:
        return HeadingParagraph(
            level=len(heading.group(1)),
            runs=parse_inline_bold(heading.group(2)),
        )

    if trimmed.startswith(_BULLET_MARKERS):
        return BulletParagraph(
            indent=bullet_indent(line),
            runs=parse_inline_bold(trimmed[2:]),
        )

    return PlainParagraph(runs=parse_inline_bold(trimmed))


def build_document_model(text: str) -> DocumentModel:
    """Convert draft text into a DocumentModel, one paragraph per line."""
    return DocumentModel(paragraphs=tuple(classify_line(line) for line in text.split("\n")))
