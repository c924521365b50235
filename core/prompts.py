"""
Tender draft prompt.

The generation collaborator receives the outline, the resolved clauses and the
requirement bullets; this module renders them into the writer prompt. The
prompt asks the model to fill mapped sections with clause text verbatim, but
nothing downstream checks that it did.
"""

from __future__ import annotations

from typing import Sequence

from models.schemas import PurchaseDomain, TenderClause, TenderTemplateConfig, domain_key

HEADING_SUFFIX_LIBRARY = "[from clause library]"
HEADING_SUFFIX_AI = "[generated by AI]"


def format_clause(clause: TenderClause) -> str:
    """Render one clause in the delimited block the prompt refers to."""
    return f'--- CLAUSE TITLE: "{clause.title}" ---\nCONTENT:\n{clause.content}\n--- END CLAUSE ---'


def _build_clause_block(clauses: Sequence[TenderClause]) -> str:
    if not clauses:
        return ""
    formatted = "\n\n".join(format_clause(c) for c in clauses)
    return f"""
<STANDARD_CLAUSES>
You have access to a library of MANDATORY Standard Clauses below.
Map these clauses onto the DOCUMENT STRUCTURE above.

**Rule 1: DIRECT MAPPING**
- If a section in the Document Structure resembles a Clause Title (e.g. section "Security"
  matches clause "Standard Security Requirements"), you MUST fill that section with the clause content.

**Rule 2: PRESERVE CONTENT**
- Insert the clause content EXACTLY as written. Do not summarize, shorten, or rewrite the requirements.

**Rule 3: FIX NUMBERING ONLY**
- The only allowed change is re-numbering sub-points to match the document hierarchy
  (e.g. "1.1" becomes "3.1" when the clause falls under Section 3).

**Rule 4: INTEGRATION**
- If a clause covers a topic not listed in the structure, integrate it into the most relevant section.

STANDARD CLAUSES LIBRARY:
{formatted}
</STANDARD_CLAUSES>
"""


def build_draft_prompt(
    domain: PurchaseDomain | str,
    key_points: Sequence[str],
    sections: Sequence[str],
    clauses: Sequence[TenderClause],
    template: TenderTemplateConfig,
    recommended_template: str = "",
) -> str:
    """Render the tender writer prompt.

    Args:
        domain: Purchase domain of the tender
        key_points: Free-form requirement bullets
        sections: Outline section blocks, in order
        clauses: Resolved standard clauses (may be empty)
        template: Domain template supplying focus area and compliance keywords
        recommended_template: Optional template name from requirement analysis

    Returns:
        Prompt text
    """
    requirements = "\n".join(f"- {p}" for p in key_points) or "- (none provided)"
    structure = "\n".join(f"- {s}" for s in sections)
    keywords = ", ".join(template.compliance_keywords) or "N/A"

    return f"""
You are a professional Tender Writer. Create a comprehensive Tender/RFP document in Markdown format.

<CONTEXT>
- Domain: {domain_key(domain)}
- Recommended Template: {recommended_template or "General Request for Proposal"}
- User Requirements:
{requirements}
</CONTEXT>

<DOCUMENT_STRUCTURE>
Strictly follow this structure:
{structure}
</DOCUMENT_STRUCTURE>
{_build_clause_block(clauses)}
<CONTENT_GUIDELINES>
- Focus Area: {template.focus_area or "Quality, cost-effectiveness, and reliability."}
- Ensure these compliance keywords/standards are mentioned where relevant: {keywords}.
- Fill in the sections with professional placeholder text or specific content based on the User Requirements above.
- Use clear headings (##) and bullet points.
- Do NOT use horizontal rules (---) or visible separators between sections.
</CONTENT_GUIDELINES>

<HEADING_SUFFIXES>
You MUST append a suffix to EVERY section heading to indicate its source:
1. Content taken from the Standard Clauses Library (direct mapping): append " {HEADING_SUFFIX_LIBRARY}".
2. Content you generated from the requirements: append " {HEADING_SUFFIX_AI}".
</HEADING_SUFFIXES>

Generate the full document now.
"""
