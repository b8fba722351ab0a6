"""Export helpers for the session's lead list."""
from __future__ import annotations

import csv
import io
import time
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .models import EXPORT_HEADERS, Lead


_CSV_SUFFIXES = {".csv"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def export_filename(now: Optional[float] = None, *, suffix: str = ".csv") -> str:
    """Return ``leads_export_<epoch milliseconds><suffix>``."""

    timestamp = time.time() if now is None else now
    return f"leads_export_{round(timestamp * 1000)}{suffix}"


def render_csv(leads: Iterable[Lead]) -> str:
    """Render leads as CSV text: a bare header row, then every field quoted."""

    buffer = io.StringIO()
    buffer.write(",".join(EXPORT_HEADERS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for lead in leads:
        row = lead.as_row()
        writer.writerow([row[header] for header in EXPORT_HEADERS])
    return buffer.getvalue()


def leads_to_dataframe(leads: Iterable[Lead]) -> pd.DataFrame:
    """Convert leads into a :class:`pandas.DataFrame` with the export columns."""
    return pd.DataFrame([lead.as_row() for lead in leads], columns=list(EXPORT_HEADERS))


def write_leads(path: str | Path, leads: Iterable[Lead]) -> Path:
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix in _CSV_SUFFIXES:
        file_path.write_text(render_csv(leads), encoding="utf-8")
        return file_path
    if suffix in _EXCEL_SUFFIXES:
        leads_to_dataframe(leads).to_excel(file_path, index=False, sheet_name="Leads", engine="openpyxl")
        return file_path
    raise ValueError(f"Unsupported output format '{file_path.suffix}'. Use CSV or Excel spreadsheet")
