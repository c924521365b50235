"""
Outline editing for tender sections.

An outline is an ordered list of section blocks. Each block starts with its
ordinal ("3. Delivery") and may carry dotted sub-points that share the same
leading integer ("   3.1 Schedule", "      3.1.2 Milestones").

Renumbering is a textual prefix substitution, not a parsed number tree: a
section moving from position 3 to 4 has every line starting with "3." rewritten
to "4.", which cascades into its sub-points. The ordinal is matched as written,
so "03." sub-points follow an "03." heading. Sub-points written without the
parent's leading integer are not renumbered.

All functions are pure; they return new lists and never mutate their input.
"""

from __future__ import annotations

import re
from typing import Literal, Sequence

# ASCII digits only: the substitution must match exactly what was parsed
_LEADING_ORDINAL = re.compile(r"^\s*(\d+)\.", re.ASCII)

MoveDirection = Literal["up", "down"]


def _ordinal_text(section: str) -> str | None:
    match = _LEADING_ORDINAL.match(section)
    if not match:
        return None
    return match.group(1)


def section_ordinal(section: str) -> int | None:
    """Return the leading ordinal of a section block, or None if it has none."""
    text = _ordinal_text(section)
    return int(text) if text is not None else None


def _renumber(section: str, current: str, expected: int) -> str:
    pattern = re.compile(rf"^(\s*){re.escape(current)}\.", re.MULTILINE)
    return pattern.sub(lambda m: f"{m.group(1)}{expected}.", section)


def reindex_sections(sections: Sequence[str]) -> list[str]:
    """Renumber every section so the ordinal at position i is i + 1.

    Sections without a leading ordinal are returned unchanged. Applying this
    twice gives the same result as applying it once.
    """
    reindexed = []
    for index, section in enumerate(sections):
        expected = index + 1
        current = _ordinal_text(section)
        if current is None or int(current) == expected:
            reindexed.append(section)
            continue
        reindexed.append(_renumber(section, current, expected))
    return reindexed


def new_section_block(number: int) -> str:
    """Default block for a freshly added section."""
    return (
        f"{number}. New Section Title\n"
        f"   {number}.1 Sub-section\n"
        f"      {number}.1.1 Detailed requirement"
    )


def append_section(sections: Sequence[str], text: str | None = None) -> list[str]:
    """Append a section (the default block when text is None) and reindex."""
    if text is None:
        text = new_section_block(len(sections) + 1)
    return reindex_sections([*sections, text])


def delete_section(sections: Sequence[str], index: int) -> list[str]:
    """Remove the section at index and renumber the rest.

    An index outside the outline removes nothing.
    """
    remaining = [s for i, s in enumerate(sections) if i != index]
    return reindex_sections(remaining)


def move_section(sections: Sequence[str], index: int, direction: MoveDirection) -> list[str]:
    """Swap a section with its neighbour and renumber.

    Moving the first section up or the last section down is a no-op.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

    moved = list(sections)
    if not 0 <= index < len(moved):
        return moved
    if (direction == "up" and index == 0) or (direction == "down" and index == len(moved) - 1):
        return moved

    target = index - 1 if direction == "up" else index + 1
    moved[index], moved[target] = moved[target], moved[index]
    return reindex_sections(moved)


def update_section(sections: Sequence[str], index: int, text: str) -> list[str]:
    """Replace the free text of one section. Does not renumber."""
    updated = list(sections)
    updated[index] = text
    return updated
