"""
Smart Tender v1.0 — Main Entry Point

Run with:
    python main.py status
    python main.py new "Office Desks" --domain "Furniture & Fittings" --point "50 standing desks"
    python main.py outline "Office Desks" delete 2
    python main.py draft "Office Desks"
    python main.py export "Office Desks" --format docx
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import VERSION, PROJECT_ID, DATA_FOLDER, setup_environment, validate_config
from core.clauses import mandatory_clauses
from core.config_manager import get_standard_clauses, reset_clauses_to_default
from core.drafting import DRAFT_FAILURE_MARKER, DraftAssemblyPipeline, PackingError
from core.export import DocxPacker, save_docx, save_markdown
from core.outline import append_section, delete_section, move_section, update_section
from core.tracing import get_tracer
from models.schemas import PurchaseDomain, SavedTender, TenderStatus
from models.tender_store import (
    build_saved_tender,
    default_analysis,
    find_tender,
    get_saved_tenders,
    save_tender,
    update_status,
)

logger = logging.getLogger(__name__)


def _require_tender(key: str) -> SavedTender | None:
    tender = find_tender(key)
    if tender is None:
        print(f"❌ No saved project with id or name: {key}")
    return tender


def _print_outline(sections: list[str]) -> None:
    for section in sections:
        print(section)
        print()


def cmd_status(args) -> int:
    """Test configuration and show status."""
    setup_environment()

    print("=" * 60)
    print(f"Smart Tender v{VERSION}")
    print("=" * 60)

    print("\n📋 Configuration:")
    config = validate_config()
    for key, ok in config.items():
        if key != "all_ok":
            print(f"  {'✅' if ok else '❌'} {key}")

    print(f"\n  Project ID: {PROJECT_ID or '(not set)'}")
    print(f"  Data folder: {DATA_FOLDER}")
    print(f"  Saved projects: {len(get_saved_tenders())}")
    print("=" * 60)
    return 0 if config["all_ok"] else 1


def cmd_clauses(args) -> int:
    if args.reset:
        reset_clauses_to_default()
        print("✅ Clause library reset to defaults")
        return 0
    clauses = get_standard_clauses(args.domain)
    if args.mandatory:
        clauses = mandatory_clauses(clauses)
    for clause in clauses:
        flag = "MANDATORY" if clause.mandatory else "optional"
        print(f"[{clause.id}] {clause.title} ({flag})")
    return 0


def cmd_new(args) -> int:
    analysis = default_analysis(args.domain)
    analysis.key_points = list(args.point or [])
    tender = build_saved_tender(args.name, analysis, analysis.structure or [])
    if not save_tender(tender):
        print("❌ Failed to save project")
        return 1
    print(f"✅ Created project {tender.name} ({tender.id}) with {len(tender.structure)} sections")
    return 0


def cmd_projects(args) -> int:
    for tender in get_saved_tenders():
        has_draft = "draft" if tender.draft_content else "no draft"
        print(f"{tender.id}  {tender.name:30s} {tender.domain:28s} {tender.status.value:9s} ({has_draft})")
    return 0


def cmd_outline(args) -> int:
    tender = _require_tender(args.project)
    if tender is None:
        return 1

    sections = tender.structure
    if args.action == "show":
        _print_outline(sections)
        return 0

    # Section numbers on the command line are 1-based, like the ordinals
    index = (args.number or 0) - 1
    if args.action in ("delete", "up", "down", "edit") and not 0 <= index < len(sections):
        print(f"❌ Section number must be between 1 and {len(sections)}")
        return 1

    if args.action == "delete":
        sections = delete_section(sections, index)
    elif args.action in ("up", "down"):
        sections = move_section(sections, index, args.action)
    elif args.action == "add":
        sections = append_section(sections, args.text)
    elif args.action == "edit":
        if args.text is None:
            print("❌ --text is required for edit")
            return 1
        sections = update_section(sections, index, args.text)

    updated = tender.model_copy(update={
        "structure": sections,
        "analysis": tender.analysis.model_copy(update={"structure": sections}),
    })
    if not save_tender(updated):
        print("❌ Failed to save the outline; no changes were stored.")
        return 1
    _print_outline(sections)
    return 0


def cmd_draft(args) -> int:
    from core.llm_client import GeminiDraftGenerator

    tender = _require_tender(args.project)
    if tender is None:
        return 1

    setup_environment()
    generator = GeminiDraftGenerator(recommended_template=tender.analysis.recommended_template)
    pipeline = DraftAssemblyPipeline(generator)
    draft = asyncio.run(
        pipeline.assemble(tender.domain, tender.structure, tender.analysis.key_points)
    )
    if draft == DRAFT_FAILURE_MARKER:
        print("❌ Draft generation failed; the saved draft was left unchanged.")
        return 1

    if not save_tender(tender.model_copy(update={"draft_content": draft})):
        print("❌ Draft generated but could not be saved.")
        return 1
    print(draft)
    return 0


def cmd_export(args) -> int:
    tender = _require_tender(args.project)
    if tender is None:
        return 1
    if not tender.draft_content:
        print("❌ Project has no draft yet. Run: python main.py draft", tender.name)
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else None
    if args.format == "md":
        path = save_markdown(tender.draft_content, tender.name, output_dir)
    else:
        pipeline = DraftAssemblyPipeline(generator=None, packer=DocxPacker(title=tender.name))
        try:
            path = asyncio.run(save_docx(pipeline, tender.draft_content, tender.name, output_dir))
        except PackingError as e:
            logger.debug("Export failed: %s", e)
            print("❌ Failed to generate Word document.")
            return 1
    print(f"✅ Saved {path}")
    return 0


def cmd_set_status(args) -> int:
    tender = _require_tender(args.project)
    if tender is None:
        return 1
    if not update_status(tender.id, TenderStatus(args.status)):
        print("❌ Failed to save the new status.")
        return 1
    print(f"✅ {tender.name}: {args.status}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smart Tender: outline, draft and export tender documents")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--trace", action="store_true", help="Print the activity trace on exit")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("status", help="Check configuration")
    p.set_defaults(func=cmd_status)

    domains = [d.value for d in PurchaseDomain]
    p = sub.add_parser("clauses", help="List the standard clauses for a domain")
    p.add_argument("domain", nargs="?", default=PurchaseDomain.GENERAL.value, choices=domains)
    p.add_argument("--reset", action="store_true", help="Restore the built-in clause library")
    p.add_argument("--mandatory", action="store_true", help="Only clauses flagged mandatory")
    p.set_defaults(func=cmd_clauses)

    p = sub.add_parser("new", help="Create a project from the domain template")
    p.add_argument("name")
    p.add_argument("--domain", default=PurchaseDomain.GENERAL.value, choices=domains)
    p.add_argument("--point", action="append", help="Requirement bullet (repeatable)")
    p.set_defaults(func=cmd_new)

    p = sub.add_parser("projects", help="List saved projects")
    p.set_defaults(func=cmd_projects)

    p = sub.add_parser("outline", help="Show or edit a project's outline")
    p.add_argument("project", help="Project id or name")
    p.add_argument("action", choices=["show", "delete", "up", "down", "add", "edit"])
    p.add_argument("number", nargs="?", type=int, help="Section number (1-based)")
    p.add_argument("--text", help="Section text for add/edit")
    p.set_defaults(func=cmd_outline)

    p = sub.add_parser("draft", help="Generate the tender draft with Gemini")
    p.add_argument("project", help="Project id or name")
    p.set_defaults(func=cmd_draft)

    p = sub.add_parser("export", help="Export the draft as .md or .docx")
    p.add_argument("project", help="Project id or name")
    p.add_argument("--format", choices=["md", "docx"], default="docx")
    p.add_argument("--output-dir", default=None, help="Output directory (default: outputs/)")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("set-status", help="Change a project's status")
    p.add_argument("project", help="Project id or name")
    p.add_argument("status", choices=[s.value for s in TenderStatus])
    p.set_defaults(func=cmd_set_status)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    code = args.func(args)
    if args.trace:
        print(get_tracer().format_for_export())
    return code


if __name__ == "__main__":
    sys.exit(main())
