"""Command line interface for finding and enriching business leads."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigurationError, load_default_configuration
from .factory import build_orchestrator
from .io import export_filename, write_leads
from .models import LIMIT_CHOICES, SearchParams
from .session import OutcomeKind, SessionState, run_discovery, run_enrichment

EXIT_CODES = {
    OutcomeKind.SUCCESS: 0,
    OutcomeKind.FAILED: 1,
    OutcomeKind.INVALID: 2,
    OutcomeKind.EMPTY: 3,
}


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Find business leads with an AI model that can search the web and maps",
    )
    parser.add_argument("--keyword", default="", help="Niche or keyword, e.g. 'dentists'")
    parser.add_argument("--city", default="", help="City to search in")
    parser.add_argument("--country", default="", help="Country to search in")
    parser.add_argument(
        "--limit",
        type=int,
        choices=LIMIT_CHOICES,
        default=10,
        help="Number of businesses to ask for",
    )
    parser.add_argument(
        "--instructions",
        default="",
        help="Free-text request, used instead of or in addition to keyword and city",
    )
    parser.add_argument(
        "--enrich",
        action="store_true",
        help="Run a second pass for leads that are missing an email or website",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Where to write the leads (CSV or Excel). Defaults to a timestamped CSV file",
    )
    parser.add_argument(
        "--raw-output",
        default=None,
        help="Optional path for the model's unparsed discovery reply",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a configuration file (YAML or JSON); falls back to $LEAD_FINDER_CONFIG",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        orchestrator = build_orchestrator(load_default_configuration(args.config))
    except ConfigurationError as exc:
        logging.error("Configuration error: %s", exc)
        return 2

    params = SearchParams(
        city=args.city,
        country=args.country,
        keyword=args.keyword,
        limit=args.limit,
        instructions=args.instructions,
    )

    state, outcome = run_discovery(orchestrator, SessionState(), params)
    if args.raw_output and outcome.raw_text:
        Path(args.raw_output).write_text(outcome.raw_text, encoding="utf-8")
    if not outcome.ok:
        logging.error(outcome.message)
        return EXIT_CODES[outcome.kind]
    logging.info(outcome.message)

    if args.enrich:
        incomplete = [lead.id for lead in state.leads if lead.missing_contact]
        if incomplete:
            state, enrichment = run_enrichment(orchestrator, state.with_selection(incomplete))
            # The discovered leads are still worth writing if enrichment fails.
            log = logging.info if enrichment.ok else logging.warning
            log(enrichment.message)
        else:
            logging.info("Every lead already has an email and website; skipping enrichment")

    output = Path(args.output or export_filename())
    write_leads(output, state.leads)
    logging.info("Wrote %s leads to %s", len(state.leads), output.resolve())
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
