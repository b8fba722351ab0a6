"""Top-level package for the AI-assisted business lead finder."""

from . import models  # noqa: F401
from .merge import apply_enrichment, ingest_leads
from .models import (
    DiscoveryResult,
    EnrichmentBatch,
    EnrichmentResult,
    InvalidSearchError,
    Lead,
    SearchParams,
)
from .orchestrator import RequestFailedError, SearchOrchestrator
from .parsing import parse_enrichment_table, parse_lead_table
from .session import Outcome, OutcomeKind, SessionState, run_discovery, run_enrichment

__all__ = [
    "DiscoveryResult",
    "EnrichmentBatch",
    "EnrichmentResult",
    "InvalidSearchError",
    "Lead",
    "SearchParams",
    "RequestFailedError",
    "SearchOrchestrator",
    "Outcome",
    "OutcomeKind",
    "SessionState",
    "apply_enrichment",
    "ingest_leads",
    "parse_enrichment_table",
    "parse_lead_table",
    "run_discovery",
    "run_enrichment",
    "clients",
    "orchestrator",
    "ui",
]
