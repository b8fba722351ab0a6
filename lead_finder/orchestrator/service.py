"""Search orchestrator that turns requests into prompts and replies into records."""
from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from ..clients.base import GenerativeClient
from ..models import DiscoveryResult, EnrichmentBatch, EnrichmentResult, InvalidSearchError, Lead, SearchParams
from ..parsing import parse_enrichment_table, parse_lead_table
from ..prompts import build_discovery_prompt, build_enrichment_prompt

LOGGER = logging.getLogger(__name__)


class RequestFailedError(RuntimeError):
    """Raised when the model call fails for any reason (network, auth, quota...)."""


class SearchOrchestrator:
    """Runs discovery and enrichment requests against a single model client.

    Each request is one call to the client. Parsing never fails; a reply with
    no usable table comes back as an empty result rather than an error.
    """

    def __init__(
        self,
        client: GenerativeClient,
        *,
        lead_parser: Callable[[str], List[Lead]] = parse_lead_table,
        enrichment_parser: Callable[[str], List[EnrichmentResult]] = parse_enrichment_table,
    ) -> None:
        self._client = client
        self._lead_parser = lead_parser
        self._enrichment_parser = enrichment_parser

    @property
    def client(self) -> GenerativeClient:
        return self._client

    def find_leads(self, params: SearchParams) -> DiscoveryResult:
        """Ask the model for businesses matching ``params`` and parse the reply."""

        params.validate()
        text = self._call(build_discovery_prompt(params), action="discovery")
        leads = self._lead_parser(text)
        LOGGER.info("Discovery returned %s leads (%s requested)", len(leads), params.limit)
        return DiscoveryResult(leads=leads, raw_text=text)

    def enrich_leads(self, leads: Sequence[Lead]) -> EnrichmentBatch:
        """Ask the model for the email and website of each lead in ``leads``."""

        if not leads:
            raise InvalidSearchError("Select at least one lead to enrich.")
        text = self._call(build_enrichment_prompt(leads), action="enrichment")
        results = self._enrichment_parser(text)
        LOGGER.info("Enrichment returned %s rows for %s leads", len(results), len(leads))
        return EnrichmentBatch(results=results, raw_text=text)

    def _call(self, prompt: str, *, action: str) -> str:
        name = getattr(self._client, "name", self._client.__class__.__name__)
        try:
            LOGGER.debug("Running %s request with client %s", action, name)
            return self._client.generate(prompt)
        except Exception as exc:
            LOGGER.exception("Client %s failed during %s", name, action)
            raise RequestFailedError(f"The {action} request failed") from exc
