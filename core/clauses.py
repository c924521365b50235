"""
Standard clause resolution.

A domain's clauses are its own list followed by the "General Goods" list.
Both lists keep their internal order and nothing is deduplicated, even when a
general clause shares a title with a domain-specific one.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from models.schemas import GENERAL_DOMAIN, PurchaseDomain, TenderClause, domain_key


def resolve_clauses(
    domain: PurchaseDomain | str,
    library: Mapping[str, Sequence[TenderClause]],
) -> list[TenderClause]:
    """Return the ordered clauses that apply to a domain.

    Args:
        domain: Purchase domain (enum or its string value)
        library: Mapping of domain value to its ordered clause list

    Returns:
        Domain clauses followed by general clauses; general clauses alone when
        the domain has none; the general list alone for the general domain.
    """
    key = domain_key(domain)
    specific = list(library.get(key) or [])
    if key == GENERAL_DOMAIN:
        return specific

    fallback = list(library.get(GENERAL_DOMAIN) or [])
    if not specific:
        return fallback
    return specific + fallback


def mandatory_clauses(clauses: Sequence[TenderClause]) -> list[TenderClause]:
    """Filter to the clauses flagged mandatory, preserving order."""
    return [c for c in clauses if c.mandatory]
