"""Tolerant parsers for the markdown tables returned by the model."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from .models import EnrichmentResult, Lead

LOGGER = logging.getLogger(__name__)

RowT = TypeVar("RowT")

_SENTINELS = {"N/A", "-"}
_LINK_TARGET = re.compile(r"\((https?://[^)]+)\)")


def new_lead_id() -> str:
    return uuid.uuid4().hex


def clean_cell(cell: str) -> str:
    """Strip bold markers and surrounding whitespace from a table cell."""
    return cell.replace("**", "").strip()


def unwrap_link(cell: str) -> str:
    """Return the URL of a ``[label](url)`` cell, or the cell unchanged."""

    match = _LINK_TARGET.search(cell)
    if match:
        return match.group(1)
    return cell


def blank_sentinel(cell: str) -> str:
    return "" if cell in _SENTINELS else cell


@dataclass(frozen=True)
class TableLayout(Generic[RowT]):
    """Describes one table shape the model is asked to produce."""

    header_terms: Tuple[str, ...]
    min_columns: int
    build_row: Callable[[Sequence[str]], Optional[RowT]]

    def matches_header(self, line: str) -> bool:
        if "|" not in line:
            return False
        lowered = line.lower()
        return all(term in lowered for term in self.header_terms)


def split_row(line: str) -> List[str]:
    """Split a ``| a | b |`` line into trimmed cells.

    The first and last segments are dropped; they are what surrounds the outer
    pipes.
    """

    segments = line.split("|")
    return [segment.strip() for segment in segments[1:-1]]


def parse_table(text: str, layout: TableLayout[RowT]) -> List[RowT]:
    """Extract the rows of the first table matching ``layout`` from ``text``."""

    lines = [line for line in (text or "").split("\n") if line.strip()]

    header_index = next(
        (index for index, line in enumerate(lines) if layout.matches_header(line)),
        None,
    )
    if header_index is None:
        LOGGER.debug("No table header containing %s found", layout.header_terms)
        return []

    rows: List[RowT] = []
    skipped = 0
    # header_index + 1 is the separator row; its content is not checked.
    for line in lines[header_index + 2:]:
        stripped = line.strip()
        if not stripped.startswith("|"):
            continue
        cells = split_row(stripped)
        if len(cells) < layout.min_columns:
            skipped += 1
            continue
        row = layout.build_row(cells)
        if row is None:
            skipped += 1
            continue
        rows.append(row)

    LOGGER.debug("Parsed %s rows (%s skipped) for header %s", len(rows), skipped, layout.header_terms)
    return rows


def _lead_row_builder(id_factory: Callable[[], str]) -> Callable[[Sequence[str]], Optional[Lead]]:
    def build(cells: Sequence[str]) -> Optional[Lead]:
        name, category, keywords, email, phone, website, address, maps_link = (
            clean_cell(cell) for cell in cells[:8]
        )
        if not name:
            return None
        return Lead(
            id=id_factory(),
            name=name,
            category=blank_sentinel(category),
            keywords=blank_sentinel(keywords),
            email=blank_sentinel(email),
            phone=blank_sentinel(phone),
            website=blank_sentinel(unwrap_link(website)),
            address=address,
            maps_link=unwrap_link(maps_link),
        )

    return build


def _build_enrichment_row(cells: Sequence[str]) -> EnrichmentResult:
    lead_id, email, website = (clean_cell(cell) for cell in cells[:3])
    return EnrichmentResult(
        id=lead_id,
        email=blank_sentinel(email),
        website=blank_sentinel(unwrap_link(website)),
    )


ENRICHMENT_LAYOUT: TableLayout[EnrichmentResult] = TableLayout(
    header_terms=("id", "website"),
    min_columns=3,
    build_row=_build_enrichment_row,
)


def parse_lead_table(text: str, *, id_factory: Optional[Callable[[], str]] = None) -> List[Lead]:
    """Parse a ``Name | Category | ... | Maps Link`` table into leads."""

    layout: TableLayout[Lead] = TableLayout(
        header_terms=("name", "category"),
        min_columns=8,
        build_row=_lead_row_builder(id_factory or new_lead_id),
    )
    return parse_table(text, layout)


def parse_enrichment_table(text: str) -> List[EnrichmentResult]:
    """Parse an ``ID | Email | Website`` table into enrichment results."""
    return parse_table(text, ENRICHMENT_LAYOUT)


__all__ = [
    "ENRICHMENT_LAYOUT",
    "TableLayout",
    "blank_sentinel",
    "clean_cell",
    "new_lead_id",
    "parse_enrichment_table",
    "parse_lead_table",
    "parse_table",
    "split_row",
    "unwrap_link",
]
