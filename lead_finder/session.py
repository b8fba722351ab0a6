"""Session state for the cumulative lead list and the current selection.

Every change produces a new :class:`SessionState`; nothing is mutated in place.
Callers swap the whole state object when a request completes, so a discovery
and an enrichment finishing in either order cannot interleave half-applied
updates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Tuple

from .merge import apply_enrichment, count_changed, ingest_leads
from .models import EnrichmentResult, InvalidSearchError, Lead, SearchParams
from .orchestrator import RequestFailedError, SearchOrchestrator

LOGGER = logging.getLogger(__name__)

INVALID_SEARCH_MESSAGE = "Enter a keyword and a city, or describe what you are looking for in the instructions."
EMPTY_SELECTION_MESSAGE = "Select at least one lead to enrich."
DISCOVERY_FAILED_MESSAGE = "Failed to fetch leads. Please check your API key and try again."
ENRICHMENT_FAILED_MESSAGE = "Failed to enrich selected leads. Please try again."
NOTHING_PARSED_MESSAGE = (
    "We couldn't parse any leads from the search results. "
    "Please try refining your keywords or location."
)
NOTHING_ENRICHED_MESSAGE = "The enrichment search did not return any usable results."


@dataclass(frozen=True)
class SessionState:
    """Leads collected so far (newest first) and the ids currently selected."""

    leads: Tuple[Lead, ...] = ()
    selected: FrozenSet[str] = frozenset()
    version: int = 0

    def _next(self, **changes) -> "SessionState":
        leads = changes.get("leads", self.leads)
        known = {lead.id for lead in leads}
        selected = frozenset(changes.get("selected", self.selected)) & known
        return replace(self, leads=tuple(leads), selected=selected, version=self.version + 1)

    def with_discovered(self, leads: Iterable[Lead]) -> "SessionState":
        return self._next(leads=ingest_leads(self.leads, leads))

    def with_enrichment(self, results: Iterable[EnrichmentResult]) -> "SessionState":
        return self._next(leads=apply_enrichment(self.leads, results), selected=frozenset())

    def toggle(self, lead_id: str) -> "SessionState":
        return self._next(selected=self.selected ^ {lead_id})

    def select_all(self, selected: bool = True) -> "SessionState":
        ids = frozenset(lead.id for lead in self.leads) if selected else frozenset()
        return self._next(selected=ids)

    def with_selection(self, lead_ids: Iterable[str]) -> "SessionState":
        return self._next(selected=frozenset(lead_ids))

    def cleared(self) -> "SessionState":
        return self._next(leads=(), selected=frozenset())

    def selected_leads(self) -> List[Lead]:
        return [lead for lead in self.leads if lead.id in self.selected]

    def replay(self, base: "SessionState", result: "SessionState") -> "SessionState":
        """Re-apply the changes a request made to ``base`` on top of ``self``.

        Used when the state moved on (selection, clear, another request) while
        a request based on ``base`` was in flight.
        """

        if self.version == base.version:
            return result

        before = {lead.id: lead for lead in base.leads}
        added = [lead for lead in result.leads if lead.id not in before]
        patches = [
            EnrichmentResult(id=lead.id, email=lead.email, website=lead.website)
            for lead in result.leads
            if lead.id in before and lead != before[lead.id]
        ]

        state = self
        if added:
            state = state.with_discovered(added)
        if patches:
            state = state.with_enrichment(patches)
        return state


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"
    INVALID = "invalid"


@dataclass(frozen=True)
class Outcome:
    """What a request did, phrased for the person who made it."""

    kind: OutcomeKind
    message: str
    count: int = 0
    raw_text: str = field(default="", repr=False)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


def run_discovery(
    orchestrator: SearchOrchestrator,
    state: SessionState,
    params: SearchParams,
) -> Tuple[SessionState, Outcome]:
    """Search for new leads and merge them into ``state``."""

    try:
        result = orchestrator.find_leads(params)
    except InvalidSearchError as exc:
        LOGGER.info("Rejected search %s: %s", params, exc)
        return state, Outcome(OutcomeKind.INVALID, INVALID_SEARCH_MESSAGE)
    except RequestFailedError:
        return state, Outcome(OutcomeKind.FAILED, DISCOVERY_FAILED_MESSAGE)

    if result.is_empty:
        return state, Outcome(OutcomeKind.EMPTY, NOTHING_PARSED_MESSAGE, raw_text=result.raw_text)

    new_state = state.with_discovered(result.leads)
    added = len(new_state.leads) - len(state.leads)
    skipped = len(result.leads) - added
    message = f"Added {added} new leads"
    if skipped:
        message += f" ({skipped} already in the list)"
    return new_state, Outcome(OutcomeKind.SUCCESS, message, count=added, raw_text=result.raw_text)


def run_enrichment(
    orchestrator: SearchOrchestrator,
    state: SessionState,
) -> Tuple[SessionState, Outcome]:
    """Look up email/website for the selected leads and merge what was found."""

    targets = state.selected_leads()
    if not targets:
        return state, Outcome(OutcomeKind.INVALID, EMPTY_SELECTION_MESSAGE)

    try:
        batch = orchestrator.enrich_leads(targets)
    except RequestFailedError:
        return state, Outcome(OutcomeKind.FAILED, ENRICHMENT_FAILED_MESSAGE)

    if batch.is_empty:
        return state, Outcome(OutcomeKind.EMPTY, NOTHING_ENRICHED_MESSAGE, raw_text=batch.raw_text)

    new_state = state.with_enrichment(batch.results)
    updated = count_changed(state.leads, new_state.leads)
    return new_state, Outcome(
        OutcomeKind.SUCCESS,
        f"Updated {updated} of {len(targets)} selected leads",
        count=updated,
        raw_text=batch.raw_text,
    )
