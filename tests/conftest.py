"""Shared pytest fixtures for duetrack tests."""

import json
from datetime import date, timedelta
import pytest


@pytest.fixture
def today():
    """Fixed reference date so classifications never depend on the clock."""
    return date(2026, 10, 18)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def write_records(tmp_path):
    """Return a helper that writes a records document to a JSON file."""

    def _write(data, name="records.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def sample_records(today):
    """A records document covering every record kind."""

    def day(offset):
        return (today + timedelta(days=offset)).isoformat()

    return {
        "payables": [
            {"label": "Energy", "due_date": day(-2), "amount": "150.00"},
            {"label": "Water", "due_date": day(2), "amount": "80.00"},
            {"label": "Internet", "due_date": day(5), "amount": "120.00"},
            {"label": "Rent", "due_date": day(20), "amount": "2000.00"},
            {"label": "Supplies", "due_date": day(-10), "amount": "300.00", "status": "PAGO"},
            {"label": "Taxes", "due_date": None, "amount": "50.00"},
        ],
        "contracts": [
            {"label": "CT-01", "end_date": day(-1), "amount": "1000"},
            {"label": "CT-02", "end_date": day(0), "amount": "2000"},
            {"label": "CT-03", "end_date": day(6), "amount": "3000"},
            {"label": "CT-04", "end_date": day(25), "amount": "4000"},
            {"label": "CT-05", "end_date": day(90), "amount": "5000"},
        ],
        "receivables": [
            {"label": "Invoice 1", "due_date": day(-3), "amount": "700"},
            {"label": "Invoice 2", "due_date": day(4), "amount": "800"},
            {"label": "Invoice 3", "due_date": day(-8), "amount": "900", "status": "RECEBIDO"},
        ],
        "travel_expenses": [
            {
                "label": "Trip A",
                "base_amount": "1000",
                "entries": [
                    {"kind": "advance", "amount": "400"},
                    {"kind": "reimbursement", "amount": "600"},
                ],
            },
            {
                "label": "Trip B",
                "base_amount": "500",
                "entries": [
                    {"kind": "advance", "amount": "500"},
                    {"kind": "return", "amount": "500"},
                ],
            },
            {
                "label": "Trip C",
                "base_amount": "250",
                "entries": [{"kind": "reimbursement", "amount": "250"}],
            },
        ],
    }
