"""Utility helpers for reconciling parsed model output with the session's leads."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Set

from .models import EnrichmentResult, Lead
from .parsing import blank_sentinel


def normalise_name(name: str) -> str:
    return name.strip().lower()


def ingest_leads(existing: Sequence[Lead], incoming: Iterable[Lead]) -> List[Lead]:
    """Prepend newly discovered leads, skipping names the collection already has.

    Duplicates are judged by :func:`normalise_name` only. A later duplicate
    inside ``incoming`` is skipped as well. Existing leads are returned
    untouched and in their original order, after the new ones.
    """

    seen: Set[str] = {normalise_name(lead.name) for lead in existing}
    fresh: List[Lead] = []

    for lead in incoming:
        key = normalise_name(lead.name)
        if key in seen:
            continue
        seen.add(key)
        fresh.append(lead)

    return fresh + list(existing)


def apply_enrichment(leads: Sequence[Lead], results: Iterable[EnrichmentResult]) -> List[Lead]:
    """Overlay email/website values onto the leads they belong to.

    A field is only replaced when the result carries a real value; blanks and
    the "N/A" and "-" placeholders leave the existing value in place.
    """

    by_id: Dict[str, EnrichmentResult] = {}
    for result in results:
        by_id.setdefault(result.id, result)

    merged: List[Lead] = []
    for lead in leads:
        patch = by_id.get(lead.id)
        if patch is None:
            merged.append(lead)
            continue
        merged.append(
            replace(
                lead,
                email=blank_sentinel(patch.email.strip()) or lead.email,
                website=blank_sentinel(patch.website.strip()) or lead.website,
            )
        )
    return merged


def count_changed(before: Sequence[Lead], after: Sequence[Lead]) -> int:
    """Number of positions whose lead differs between two same-order collections."""
    return sum(1 for old, new in zip(before, after) if old != new)
