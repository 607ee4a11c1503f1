"""Conversion of JSON record files into domain values.

This is the only place where date and amount strings are interpreted. A
records file is a JSON object with any of the lists ``payables``,
``contracts``, ``receivables`` and ``travel_expenses``:

    {
      "payables": [
        {"label": "Energy bill", "due_date": "2026-10-20", "amount": "350.00",
         "status": "ABERTO"}
      ],
      "contracts": [
        {"label": "CT-12", "end_date": "2026-11-01", "amount": "12000"}
      ],
      "receivables": [
        {"label": "Invoice 88", "due_date": "2026-10-01", "amount": "900",
         "status": "RECEBIDO"}
      ],
      "travel_expenses": [
        {"label": "Trip", "base_amount": "1000",
         "entries": [{"kind": "advance", "amount": "400"}]}
      ]
    }
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from duetrack.domain.entities import (
    DeadlineSubject,
    LedgerEntry,
    LedgerEntryKind,
    Obligation,
    SubjectDomain,
    SummaryItem,
)
from duetrack.domain.errors import DomainError, RecordFormatError, record_field_invalid
from duetrack.utils.amount_parser import parse_amount
from duetrack.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

# Record list key, the date field it carries and the statuses meaning "settled"
SUBJECT_SECTIONS = {
    "payables": (SubjectDomain.PAYABLE, "due_date", {"PAGO"}),
    "contracts": (SubjectDomain.CONTRACT, "end_date", set()),
    "receivables": (SubjectDomain.RECEIVABLE, "due_date", {"RECEBIDO"}),
}


@dataclass(frozen=True)
class TravelExpenseRecord:
    """A travel expense loaded from a records file."""

    label: Optional[str]
    obligation: Obligation


@dataclass
class RecordSet:
    """Everything loaded from one records file."""

    items: list[SummaryItem] = field(default_factory=list)
    travel_expenses: list[TravelExpenseRecord] = field(default_factory=list)


def _parse_optional_date(
    record: dict[str, Any], key: str, index: int, today: date
) -> Optional[date]:
    value = record.get(key)
    if value is None or value == "":
        return None
    try:
        return parse_date(str(value), today=today)
    except ValueError as e:
        raise RecordFormatError(record_field_invalid(index, key, str(e)))


def _parse_amount_field(
    record: dict[str, Any], key: str, index: int, default: Optional[Decimal] = None
) -> Decimal:
    value = record.get(key)
    if value is None:
        if default is not None:
            return default
        raise RecordFormatError(record_field_invalid(index, key, "missing"))
    if isinstance(value, bool):
        raise RecordFormatError(record_field_invalid(index, key, "not a number"))
    try:
        # str() keeps JSON floats such as 12.1 from picking up binary noise
        return parse_amount(str(value))
    except ValueError as e:
        raise RecordFormatError(record_field_invalid(index, key, str(e)))


def _parse_settled_flag(record: dict[str, Any], index: int) -> bool:
    value = record.get("settled", False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise RecordFormatError(
            record_field_invalid(index, "settled", "expected true or false")
        )
    return value


def _parse_label(record: dict[str, Any], index: int) -> Optional[str]:
    value = record.get("label")
    if value is not None and not isinstance(value, str):
        raise RecordFormatError(record_field_invalid(index, "label", "expected text"))
    return value


def parse_subject_record(
    record: dict[str, Any],
    domain: SubjectDomain,
    date_key: str,
    settled_statuses: set[str],
    index: int,
    today: date,
) -> SummaryItem:
    """Convert one payable, contract or receivable record."""
    if not isinstance(record, dict):
        raise RecordFormatError(f"Record {index}: expected an object")

    reference_date = _parse_optional_date(record, date_key, index, today)
    if reference_date is None and date_key != "reference_date":
        reference_date = _parse_optional_date(record, "reference_date", index, today)

    status = str(record.get("status") or "").strip().upper()
    is_settled = _parse_settled_flag(record, index) or status in settled_statuses

    return SummaryItem(
        subject=DeadlineSubject(
            reference_date=reference_date, is_settled=is_settled, domain=domain
        ),
        amount=_parse_amount_field(record, "amount", index, default=Decimal("0")),
        label=_parse_label(record, index),
    )


def parse_ledger_entry(record: dict[str, Any], index: int, today: date) -> LedgerEntry:
    """Convert one advance, return or reimbursement record."""
    if not isinstance(record, dict):
        raise RecordFormatError(f"Entry {index}: expected an object")
    try:
        kind = LedgerEntryKind(str(record.get("kind", "")).strip().upper())
    except ValueError:
        raise RecordFormatError(
            record_field_invalid(
                index, "kind", "expected one of advance, return, reimbursement"
            )
        )
    try:
        return LedgerEntry(
            kind=kind,
            amount=_parse_amount_field(record, "amount", index),
            occurred_at=_parse_optional_date(record, "occurred_at", index, today),
        )
    except DomainError as e:
        if isinstance(e, RecordFormatError):
            raise
        raise RecordFormatError(record_field_invalid(index, "amount", str(e)))


def parse_travel_expense(
    record: dict[str, Any], index: int, today: date
) -> TravelExpenseRecord:
    """Convert one travel expense record with its ledger entries."""
    if not isinstance(record, dict):
        raise RecordFormatError(f"Record {index}: expected an object")

    entries = [
        parse_ledger_entry(entry, entry_index, today)
        for entry_index, entry in enumerate(record.get("entries") or [])
    ]
    base_amount = _parse_amount_field(record, "base_amount", index)
    try:
        obligation = Obligation(base_amount=base_amount, entries=tuple(entries))
    except DomainError as e:
        raise RecordFormatError(record_field_invalid(index, "base_amount", str(e)))
    return TravelExpenseRecord(label=_parse_label(record, index), obligation=obligation)


def parse_records(data: Any, today: date) -> RecordSet:
    """Convert decoded JSON into a RecordSet.

    Raises:
        RecordFormatError: If the document or any record is malformed
    """
    if not isinstance(data, dict):
        raise RecordFormatError("Records file must contain a JSON object")

    record_set = RecordSet()
    for section, (domain, date_key, settled_statuses) in SUBJECT_SECTIONS.items():
        for index, record in enumerate(data.get(section) or []):
            record_set.items.append(
                parse_subject_record(
                    record, domain, date_key, settled_statuses, index, today
                )
            )

    for index, record in enumerate(data.get("travel_expenses") or []):
        record_set.travel_expenses.append(parse_travel_expense(record, index, today))

    logger.debug(
        "Loaded %d deadline records and %d travel expenses",
        len(record_set.items),
        len(record_set.travel_expenses),
    )
    return record_set


def load_records(path: str, today: date) -> RecordSet:
    """Load and convert a JSON records file.

    Raises:
        RecordFormatError: If the file cannot be read, is not valid UTF-8 JSON
            or a record is malformed
    """
    try:
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecordFormatError(f"Could not read records file '{path}': {e}")
    return parse_records(data, today)
