"""Desktop front end for searching, enriching, and exporting leads."""

from .app import LeadFinderApp, main  # noqa: F401

__all__ = ["LeadFinderApp", "main"]
