"""Prompt templates sent to the generative model."""
from __future__ import annotations

from typing import Iterable, List

from .models import Lead, SearchParams

LEAD_TABLE_HEADER = "| Name | Category | Keywords | Email | Phone | Website | Address | Maps Link |"
ENRICHMENT_TABLE_HEADER = "| ID | Email | Website |"


def _describe_target(params: SearchParams) -> str:
    if params.has_location_query:
        location = ", ".join(part.strip() for part in (params.city, params.country) if part.strip())
        return f'related to "{params.keyword.strip()}" in {location}'
    return f"matching this request: {params.instructions.strip()}"


def build_discovery_prompt(params: SearchParams) -> str:
    """Prompt asking for ``params.limit`` real businesses as a markdown table."""

    lines: List[str] = [
        f"Find EXACTLY {params.limit} REAL, existing businesses {_describe_target(params)}.",
        "",
        "CRITICAL INSTRUCTIONS:",
        "1. You MUST search using Google Maps and Google Search to find real, existing businesses.",
        "2. DO NOT invent or hallucinate contact information. If you cannot find a specific "
        'email or phone number for a business, write "N/A".',
        f"3. Provide as many valid results as requested ({params.limit}), but only if they exist. "
        "Do not make up fake businesses to fill the quota.",
    ]

    if params.has_location_query and params.has_instructions:
        lines += ["", "ADDITIONAL INSTRUCTIONS FROM THE USER:", params.instructions.strip()]

    lines += [
        "",
        "For each business, try to find:",
        "1. Business Name",
        '2. Specific Business Category (e.g. "Dental Clinic", "Italian Restaurant")',
        "3. 3 Related Keywords describing their services (comma separated)",
        "4. Email Address (if publicly available)",
        "5. Phone Number",
        "6. Website URL (if available)",
        "7. Full Address",
        "8. A Google Maps Link",
        "",
        "CRITICAL OUTPUT FORMAT:",
        "Provide the result STRICTLY as a Markdown table.",
        f"The table headers MUST be exactly: {LEAD_TABLE_HEADER}",
        "",
        "Do not add any conversational text before or after the table. Just the table.",
    ]
    return "\n".join(lines)


def _describe_leads(leads: Iterable[Lead]) -> str:
    return "\n".join(
        f"- ID: {lead.id}\n  Name: {lead.name}\n  Address: {lead.address}" for lead in leads
    )


def build_enrichment_prompt(leads: Iterable[Lead]) -> str:
    """Prompt asking for the email and website of each listed lead."""

    return "\n".join(
        [
            "You are an expert lead researcher. I have a list of businesses that are missing contact info.",
            "Your task is to perform a deep investigation for EACH business to find their "
            "**Official Website** and **Contact Email**.",
            "",
            "List of Businesses to Enrich:",
            _describe_leads(leads),
            "",
            "EXECUTION STEPS FOR EACH BUSINESS:",
            "1. **CHECK GOOGLE MAPS LISTING (Primary Source)**: find the business listing using its "
            'Name and Address. If the listing has a "Website" field, EXTRACT IT.',
            "2. **GOOGLE SEARCH (Secondary Source)**: if you found a website, search that domain for a "
            'contact email (e.g. "site:example.com email contact"). Otherwise search the business name '
            "to find its site.",
            "3. **Social Media**: if no website is found, check for a Facebook or Instagram page, as they "
            "often contain the email.",
            "",
            "OUTPUT FORMAT:",
            f"Return a Markdown table with EXACTLY these columns: {ENRICHMENT_TABLE_HEADER}",
            "",
            "CONSTRAINTS:",
            "- The ID MUST match the ID provided in the input list exactly.",
            "- If you find a website, provide the full URL.",
            '- If you cannot find an email/website after checking Maps and Search, write "N/A".',
            "- Do not invent data. Only return what you find.",
            "",
            "Output just the Markdown table.",
        ]
    )
