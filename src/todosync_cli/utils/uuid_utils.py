"""UUID utility functions for todosync.

Lists show the first 8 characters of each id; commands accept that prefix,
the full id, or (for named entities) the name itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from todosync_cli.exceptions import NotFoundError, ValidationError

SHORT_LENGTH = 8


class _Identified(Protocol):
    id: str


def shorten_uuid(uuid: str, length: int = SHORT_LENGTH) -> str:
    """Get shortened version of UUID."""
    return uuid[:length]


def resolve_id(
    short_or_full_id: str,
    candidates: Sequence[_Identified],
    kind: str,
    *,
    match_name: bool = False,
) -> str:
    """Resolve a full id, an id prefix or a name to one candidate's id.

    Tries in order: exact id, id prefix, case-insensitive name (when
    *match_name* is set and the candidates have a ``name``).

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If more than one candidate matches
    """
    value = short_or_full_id.strip()
    normalized = value.lower()
    if not value:
        raise ValidationError(f"Empty {kind} id")

    for candidate in candidates:
        if candidate.id == value:
            return candidate.id

    matches = [c for c in candidates if c.id.lower().startswith(normalized)]
    if not matches and match_name:
        matches = [
            c for c in candidates if getattr(c, "name", "").lower() == normalized
        ]

    if not matches:
        raise NotFoundError(f"{kind.capitalize()} not found: {value}")
    if len(matches) > 1:
        shown = ", ".join(shorten_uuid(c.id) for c in matches[:5])
        if len(matches) > 5:
            shown += f", ... ({len(matches)} total)"
        raise ValidationError(
            f"Ambiguous {kind} '{value}' matches {len(matches)} {kind}s: {shown}"
        )
    return matches[0].id
