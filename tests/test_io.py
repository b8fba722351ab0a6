from __future__ import annotations

import pandas as pd
import pytest

from lead_finder.io import export_filename, leads_to_dataframe, render_csv, write_leads
from lead_finder.models import Lead


def _sample_leads() -> list[Lead]:
    return [
        Lead(
            id="1",
            name='Joe\'s "Best" Pizza',
            category="Pizzeria",
            keywords="pizza, pasta",
            email="joe@pizza.example",
            phone="555-0100",
            website="https://pizza.example",
            address="1 Main St, Springfield",
            maps_link="https://maps/joe",
        ),
        Lead(id="2", name="Quiet Cafe"),
    ]


def test_render_csv_quotes_every_data_field() -> None:
    content = render_csv(_sample_leads())

    lines = content.splitlines()
    assert lines[0] == "Name,Category,Keywords,Email,Phone,Website,Address,Maps Link"
    assert lines[1] == (
        '"Joe\'s ""Best"" Pizza","Pizzeria","pizza, pasta","joe@pizza.example","555-0100",'
        '"https://pizza.example","1 Main St, Springfield","https://maps/joe"'
    )
    assert lines[2] == '"Quiet Cafe","","","","","","",""'


def test_render_csv_without_leads_writes_header_only() -> None:
    assert render_csv([]).splitlines() == ["Name,Category,Keywords,Email,Phone,Website,Address,Maps Link"]


def test_export_filename_uses_millisecond_timestamp() -> None:
    assert export_filename(1700000000.123) == "leads_export_1700000000123.csv"
    assert export_filename(1.5, suffix=".xlsx") == "leads_export_1500.xlsx"
    assert export_filename().startswith("leads_export_")


def test_write_leads_to_csv_and_excel(tmp_path) -> None:
    leads = _sample_leads()

    csv_path = write_leads(tmp_path / "leads.csv", leads)
    frame = pd.read_csv(csv_path, keep_default_na=False)
    assert list(frame.columns)[-1] == "Maps Link"
    assert frame.loc[0, "Name"] == 'Joe\'s "Best" Pizza'
    assert frame.loc[1, "Email"] == ""

    pytest.importorskip("openpyxl", reason="Excel export requires openpyxl")
    excel_path = write_leads(tmp_path / "leads.xlsx", leads)
    excel_frame = pd.read_excel(excel_path)
    assert excel_frame.loc[0, "Website"] == "https://pizza.example"


def test_write_leads_rejects_unknown_suffix(tmp_path) -> None:
    with pytest.raises(ValueError):
        write_leads(tmp_path / "leads.json", _sample_leads())


def test_leads_to_dataframe_keeps_column_order() -> None:
    frame = leads_to_dataframe([])
    assert list(frame.columns) == ["Name", "Category", "Keywords", "Email", "Phone", "Website", "Address", "Maps Link"]
