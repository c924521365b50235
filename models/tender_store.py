"""
Saved tender projects: name, domain, analysis, outline, draft and status.

All projects live in one JSON file, newest first. A missing or unreadable
file means "no saved projects"; read failures are logged, never raised.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from models.schemas import (
    PurchaseDomain,
    SavedTender,
    TenderAnalysis,
    TenderStatus,
    domain_key,
)

logger = logging.getLogger(__name__)

PROJECTS_FILENAME = "saved_tenders.json"

_TENDER_LIST = TypeAdapter(list[SavedTender])


def get_store_path(base_dir: Path | None = None) -> Path:
    """Return file path for the saved project list."""
    if base_dir is None:
        from config.settings import DATA_FOLDER
        base_dir = DATA_FOLDER
    return base_dir / PROJECTS_FILENAME


def new_tender_id() -> str:
    return uuid.uuid4().hex[:13]


def get_saved_tenders(base_dir: Path | None = None) -> list[SavedTender]:
    """Load saved projects. Returns [] if none are stored or the file is invalid."""
    path = get_store_path(base_dir)
    if not path.exists():
        return []
    try:
        return _TENDER_LIST.validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        logger.warning("Failed to load saved tenders from %s: %s", path, e)
        return []


def _write_tenders(tenders: list[SavedTender], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [t.model_dump(mode="json") for t in tenders]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def save_tender(tender: SavedTender, base_dir: Path | None = None) -> list[SavedTender]:
    """Insert or update a project. New projects go first.

    Returns the updated project list, or [] when the write fails.
    """
    path = get_store_path(base_dir)
    current = get_saved_tenders(base_dir)
    index = next((i for i, t in enumerate(current) if t.id == tender.id), None)
    if index is None:
        updated = [tender, *current]
    else:
        updated = list(current)
        updated[index] = tender
    try:
        _write_tenders(updated, path)
    except OSError as e:
        logger.error("Failed to save tender %s to %s: %s", tender.id, path, e)
        return []
    logger.info("Tender saved: %s (%s)", tender.name, tender.id)
    return updated


def delete_tender(tender_id: str, base_dir: Path | None = None) -> list[SavedTender]:
    """Remove a project by id. Returns the remaining list, or [] when the write fails."""
    path = get_store_path(base_dir)
    updated = [t for t in get_saved_tenders(base_dir) if t.id != tender_id]
    try:
        _write_tenders(updated, path)
    except OSError as e:
        logger.error("Failed to delete tender %s from %s: %s", tender_id, path, e)
        return []
    return updated


def find_tender(key: str, base_dir: Path | None = None) -> SavedTender | None:
    """Find a project by id, or else by exact name."""
    tenders = get_saved_tenders(base_dir)
    for tender in tenders:
        if tender.id == key:
            return tender
    return next((t for t in tenders if t.name == key), None)


def build_saved_tender(
    name: str,
    analysis: TenderAnalysis,
    structure: list[str],
    draft: str | None = None,
    status: TenderStatus = TenderStatus.DRAFT,
    current_id: str | None = None,
    current_name: str | None = None,
) -> SavedTender:
    """Build the record for a save.

    Saving under the name of the currently loaded project overwrites it (same
    id); any other name creates a new project.
    """
    tender_id = current_id if current_id and name == current_name else new_tender_id()
    return SavedTender(
        id=tender_id,
        name=name,
        domain=analysis.domain,
        created_at=datetime.now().isoformat(),
        analysis=analysis.model_copy(update={"structure": list(structure)}),
        structure=list(structure),
        draft_content=draft or None,
        status=status,
    )


def update_status(tender_id: str, status: TenderStatus, base_dir: Path | None = None) -> list[SavedTender]:
    """Change the status of a saved project. Unknown ids leave the store untouched."""
    tender = next((t for t in get_saved_tenders(base_dir) if t.id == tender_id), None)
    if tender is None:
        logger.warning("Cannot update status: tender %s not found", tender_id)
        return get_saved_tenders(base_dir)
    return save_tender(tender.model_copy(update={"status": status}), base_dir)


def default_analysis(domain: PurchaseDomain | str, base_dir: Path | None = None) -> TenderAnalysis:
    """Fallback analysis used when no requirement analysis is available.

    The outline is the domain template's default structure.
    """
    from core.config_manager import get_template_config

    template = get_template_config(domain, base_dir)
    return TenderAnalysis(
        key_points=[],
        domain=domain_key(domain),
        recommended_template="General Request for Proposal",
        reasoning="No requirement analysis available; using the domain template.",
        structure=list(template.sections),
    )
