"""Data models shared by the parser, reconciler, orchestrator, and GUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


LIMIT_CHOICES = (5, 10, 20, 30, 50, 75, 100)

EXPORT_HEADERS = (
    "Name",
    "Category",
    "Keywords",
    "Email",
    "Phone",
    "Website",
    "Address",
    "Maps Link",
)


class InvalidSearchError(ValueError):
    """Raised when a request is rejected before the model is contacted."""


# --- Lead records ---

@dataclass(frozen=True, slots=True)
class Lead:
    """A business record parsed from a discovery reply.

    Optional fields use ``""`` for "unknown". ``id`` is assigned by the parser
    and stays fixed for the lifetime of the session.
    """

    id: str
    name: str
    category: str = ""
    keywords: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    address: str = ""
    maps_link: str = ""

    def as_row(self) -> Dict[str, str]:
        """Return the export representation keyed by column label."""
        values = (
            self.name,
            self.category,
            self.keywords,
            self.email,
            self.phone,
            self.website,
            self.address,
            self.maps_link,
        )
        return dict(zip(EXPORT_HEADERS, values))

    @property
    def missing_contact(self) -> bool:
        return not self.email or not self.website


@dataclass(frozen=True, slots=True)
class EnrichmentResult:
    """Email/website patch for an existing lead, matched by ``id``."""

    id: str
    email: str = ""
    website: str = ""


# --- Requests ---

@dataclass(slots=True)
class SearchParams:
    """Discovery request collected from the search form or the CLI."""

    city: str = ""
    country: str = ""
    keyword: str = ""
    limit: int = 10
    instructions: str = ""

    @property
    def has_location_query(self) -> bool:
        return bool(self.keyword.strip() and self.city.strip())

    @property
    def has_instructions(self) -> bool:
        return bool(self.instructions.strip())

    def validate(self) -> None:
        """Raise :class:`InvalidSearchError` if the request cannot be sent."""

        if not (self.has_location_query or self.has_instructions):
            raise InvalidSearchError(
                "A search needs a keyword and a city, or free-text instructions."
            )
        if self.limit not in LIMIT_CHOICES:
            raise InvalidSearchError(
                f"Result limit must be one of {', '.join(str(choice) for choice in LIMIT_CHOICES)}"
            )


# --- Orchestrator results ---

@dataclass
class DiscoveryResult:
    """Leads parsed from one discovery reply, plus the reply itself."""

    leads: List[Lead] = field(default_factory=list)
    raw_text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.leads


@dataclass
class EnrichmentBatch:
    """Enrichment rows parsed from one enrichment reply."""

    results: List[EnrichmentResult] = field(default_factory=list)
    raw_text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.results
