"""
Clause library and tender template configuration.

Built-in defaults come from config/clause_library.py and
config/tender_templates.py. Users may override either set; overrides are
persisted as JSON under DATA_FOLDER/config and replace the defaults wholesale
until reset. Unreadable overrides are logged and treated as absent.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError

from config.clause_library import DEFAULT_CLAUSE_LIBRARY
from config.tender_templates import DEFAULT_TENDER_TEMPLATES
from core.clauses import resolve_clauses
from models.schemas import (
    GENERAL_DOMAIN,
    PurchaseDomain,
    TenderClause,
    TenderTemplateConfig,
    domain_key,
)

logger = logging.getLogger(__name__)

CLAUSES_FILENAME = "clause_library.json"
TEMPLATES_FILENAME = "tender_templates.json"

ClauseLibrary = dict[str, list[TenderClause]]


def _config_dir(base_dir: Path | None) -> Path:
    if base_dir is None:
        from config.settings import CONFIG_OVERRIDES_FOLDER
        return CONFIG_OVERRIDES_FOLDER
    return base_dir / "config"


def _read_override(path: Path) -> Any | None:
    """Load a JSON override file. Returns None if missing or unreadable."""
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Failed to load configuration from %s: %s", path, e)
        return None


def _write_override(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


# =============================================================================
# Clauses
# =============================================================================

def _parse_library(raw: dict[str, list[dict]]) -> ClauseLibrary:
    return {domain: [TenderClause(**c) for c in clauses] for domain, clauses in raw.items()}


def default_clause_library() -> ClauseLibrary:
    """Fresh copy of the built-in clause library."""
    return _parse_library(DEFAULT_CLAUSE_LIBRARY)


def get_all_clauses(base_dir: Path | None = None) -> ClauseLibrary:
    """Return the saved clause library, or the built-in defaults."""
    path = _config_dir(base_dir) / CLAUSES_FILENAME
    stored = _read_override(path)
    if isinstance(stored, dict):
        try:
            return _parse_library(stored)
        except (TypeError, ValidationError) as e:
            logger.warning("Ignoring invalid clause library in %s: %s", path, e)
    return default_clause_library()


def get_standard_clauses(domain: PurchaseDomain | str, base_dir: Path | None = None) -> list[TenderClause]:
    """Resolved clauses for a domain against the current library."""
    return resolve_clauses(domain, get_all_clauses(base_dir))


def save_all_clauses(library: dict[str, Sequence[TenderClause]], base_dir: Path | None = None) -> None:
    """Persist a full clause library, replacing any previous override."""
    payload = {domain: [c.model_dump() for c in clauses] for domain, clauses in library.items()}
    path = _config_dir(base_dir) / CLAUSES_FILENAME
    _write_override(path, payload)
    logger.info("Clause library saved: %s (%d domains)", path, len(payload))


def save_domain_clauses(
    domain: PurchaseDomain | str,
    clauses: Sequence[TenderClause],
    base_dir: Path | None = None,
) -> ClauseLibrary:
    """Replace one domain's clause list and save the whole library."""
    library = get_all_clauses(base_dir)
    library[domain_key(domain)] = list(clauses)
    save_all_clauses(library, base_dir)
    return library


def reset_clauses_to_default(base_dir: Path | None = None) -> None:
    """Drop the saved clause library so defaults apply again."""
    path = _config_dir(base_dir) / CLAUSES_FILENAME
    path.unlink(missing_ok=True)
    logger.info("Clause library reset to defaults")


# =============================================================================
# Templates
# =============================================================================

def _parse_templates(raw: dict[str, dict]) -> dict[str, TenderTemplateConfig]:
    return {domain: TenderTemplateConfig(**cfg) for domain, cfg in raw.items()}


def get_all_templates(base_dir: Path | None = None) -> dict[str, TenderTemplateConfig]:
    """Return the saved template set, or the built-in defaults."""
    path = _config_dir(base_dir) / TEMPLATES_FILENAME
    stored = _read_override(path)
    if isinstance(stored, dict):
        try:
            return _parse_templates(stored)
        except (TypeError, ValidationError) as e:
            logger.warning("Ignoring invalid templates in %s: %s", path, e)
    return _parse_templates(DEFAULT_TENDER_TEMPLATES)


def get_template_config(domain: PurchaseDomain | str, base_dir: Path | None = None) -> TenderTemplateConfig:
    """Template for a domain, falling back to the General Goods template."""
    templates = get_all_templates(base_dir)
    template = templates.get(domain_key(domain)) or templates.get(GENERAL_DOMAIN)
    if template is None:
        # Overrides removed the general template too
        return TenderTemplateConfig(domain=domain_key(domain))
    return template


def save_all_templates(templates: dict[str, TenderTemplateConfig], base_dir: Path | None = None) -> None:
    """Persist a full template set, replacing any previous override."""
    payload = {domain: t.model_dump() for domain, t in templates.items()}
    _write_override(_config_dir(base_dir) / TEMPLATES_FILENAME, payload)


def reset_templates_to_default(base_dir: Path | None = None) -> None:
    """Drop the saved template set so defaults apply again."""
    (_config_dir(base_dir) / TEMPLATES_FILENAME).unlink(missing_ok=True)
