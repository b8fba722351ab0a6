from __future__ import annotations

from lead_finder.clients.sample import CannedResponseClient
from lead_finder.models import EnrichmentResult, Lead, SearchParams
from lead_finder.orchestrator import SearchOrchestrator
from lead_finder.session import (
    DISCOVERY_FAILED_MESSAGE,
    EMPTY_SELECTION_MESSAGE,
    ENRICHMENT_FAILED_MESSAGE,
    INVALID_SEARCH_MESSAGE,
    NOTHING_PARSED_MESSAGE,
    OutcomeKind,
    SessionState,
    run_discovery,
    run_enrichment,
)

LEAD_TABLE = """| Name | Category | Keywords | Email | Phone | Website | Address | Maps Link |
|---|---|---|---|---|---|---|---|
| Acme | Bakery | bread | N/A | 555 | N/A | 1 Main St | https://maps/a |
| Beta | Bakery | cake | beta@x.com | 556 | https://beta.example | 2 Main St | https://maps/b |
"""

SEARCH = SearchParams(keyword="Bakeries", city="Springfield", country="USA")


class BrokenClient:
    name = "broken"

    def generate(self, prompt: str) -> str:
        raise PermissionError("invalid API key")


def _state(*leads: Lead, selected=()) -> SessionState:
    return SessionState(leads=tuple(leads), selected=frozenset(selected))


def test_discovery_success_merges_and_reports_count() -> None:
    orchestrator = SearchOrchestrator(CannedResponseClient([LEAD_TABLE]))

    state, outcome = run_discovery(orchestrator, SessionState(), SEARCH)

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.count == 2
    assert outcome.raw_text == LEAD_TABLE
    assert [lead.name for lead in state.leads] == ["Acme", "Beta"]
    assert state.version == 1


def test_repeated_discovery_is_cumulative_and_deduplicated() -> None:
    orchestrator = SearchOrchestrator(CannedResponseClient([LEAD_TABLE]))
    state = _state(Lead(id="old", name="Gamma"))

    state, first = run_discovery(orchestrator, state, SEARCH)
    state, second = run_discovery(orchestrator, state, SEARCH)

    assert [lead.name for lead in state.leads] == ["Acme", "Beta", "Gamma"]
    assert first.count == 2
    assert second.kind is OutcomeKind.SUCCESS
    assert second.count == 0
    assert "2 already in the list" in second.message


def test_blank_search_is_rejected_and_state_unchanged() -> None:
    client = CannedResponseClient([LEAD_TABLE])
    state = _state(Lead(id="1", name="Acme"))

    new_state, outcome = run_discovery(
        SearchOrchestrator(client), state, SearchParams(keyword="", city="", country="", instructions="")
    )

    assert outcome.kind is OutcomeKind.INVALID
    assert outcome.message == INVALID_SEARCH_MESSAGE
    assert new_state is state
    assert client.prompts == []


def test_failed_discovery_keeps_state() -> None:
    state = _state(Lead(id="1", name="Acme"))

    new_state, outcome = run_discovery(SearchOrchestrator(BrokenClient()), state, SEARCH)

    assert outcome.kind is OutcomeKind.FAILED
    assert outcome.message == DISCOVERY_FAILED_MESSAGE
    assert "API key" in outcome.message
    assert new_state is state


def test_unparsable_discovery_is_reported_as_empty() -> None:
    orchestrator = SearchOrchestrator(CannedResponseClient(["No results, sorry."]))

    state, outcome = run_discovery(orchestrator, SessionState(), SEARCH)

    assert outcome.kind is OutcomeKind.EMPTY
    assert outcome.message == NOTHING_PARSED_MESSAGE
    assert outcome.raw_text == "No results, sorry."
    assert state.leads == ()


def test_enrichment_updates_selected_leads_and_clears_selection() -> None:
    acme = Lead(id="a", name="Acme", address="1 Main St")
    beta = Lead(id="b", name="Beta", email="beta@x.com")
    reply = "| ID | Email | Website |\n|---|---|---|\n| a | acme@x.com | N/A |\n| zzz | ghost@x.com | - |\n"
    client = CannedResponseClient([reply])
    state = _state(acme, beta, selected={"a"})

    new_state, outcome = run_enrichment(SearchOrchestrator(client), state)

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.count == 1
    assert new_state.leads[0].email == "acme@x.com"
    assert new_state.leads[0].website == ""
    assert new_state.leads[1] == beta
    assert new_state.selected == frozenset()
    assert "- ID: a" in client.prompts[0]
    assert "- ID: b" not in client.prompts[0]


def test_enrichment_without_selection_is_rejected() -> None:
    client = CannedResponseClient(["unused"])

    new_state, outcome = run_enrichment(SearchOrchestrator(client), _state(Lead(id="a", name="Acme")))

    assert outcome.kind is OutcomeKind.INVALID
    assert outcome.message == EMPTY_SELECTION_MESSAGE
    assert client.prompts == []


def test_failed_enrichment_keeps_state_and_selection() -> None:
    state = _state(Lead(id="a", name="Acme"), selected={"a"})

    new_state, outcome = run_enrichment(SearchOrchestrator(BrokenClient()), state)

    assert outcome.kind is OutcomeKind.FAILED
    assert outcome.message == ENRICHMENT_FAILED_MESSAGE
    assert new_state is state


def test_empty_enrichment_reply_is_reported_as_empty() -> None:
    state = _state(Lead(id="a", name="Acme"), selected={"a"})

    new_state, outcome = run_enrichment(SearchOrchestrator(CannedResponseClient(["nothing"])), state)

    assert outcome.kind is OutcomeKind.EMPTY
    assert new_state is state


def test_selection_transitions() -> None:
    state = _state(Lead(id="a", name="Acme"), Lead(id="b", name="Beta"))

    state = state.toggle("a")
    assert state.selected == {"a"}
    state = state.toggle("a")
    assert state.selected == frozenset()
    state = state.select_all()
    assert state.selected == {"a", "b"}
    assert [lead.id for lead in state.selected_leads()] == ["a", "b"]
    state = state.select_all(False)
    assert state.selected == frozenset()
    state = state.with_selection({"a", "unknown"})
    assert state.selected == {"a"}


def test_cleared_state_drops_leads_and_selection() -> None:
    state = _state(Lead(id="a", name="Acme"), selected={"a"})

    cleared = state.cleared()

    assert cleared.leads == ()
    assert cleared.selected == frozenset()
    assert cleared.version == state.version + 1


def test_replay_applies_discovery_on_top_of_newer_state() -> None:
    base = _state(Lead(id="a", name="Acme"))
    result = base.with_discovered([Lead(id="n", name="New")])
    current = base.toggle("a")

    replayed = current.replay(base, result)

    assert [lead.id for lead in replayed.leads] == ["n", "a"]
    assert replayed.selected == {"a"}


def test_replay_applies_enrichment_on_top_of_newer_state() -> None:
    base = _state(Lead(id="a", name="Acme"), selected={"a"})
    result = base.with_enrichment([EnrichmentResult(id="a", email="a@x.com")])
    current = base.with_discovered([Lead(id="n", name="New")])

    replayed = current.replay(base, result)

    assert [lead.id for lead in replayed.leads] == ["n", "a"]
    assert replayed.leads[1].email == "a@x.com"


def test_replay_without_intermediate_changes_returns_result() -> None:
    base = _state(Lead(id="a", name="Acme"))
    result = base.with_discovered([Lead(id="n", name="New")])

    assert base.replay(base, result) is result
