"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from duetrack.domain.entities import (
    AlertTag,
    Bucket,
    BucketTotal,
    DeadlineSubject,
    LedgerEntry,
    LedgerEntryKind,
    NotificationCounts,
    Obligation,
    SubjectDomain,
)
from duetrack.domain.errors import InvalidEntryAmount, ValidationError


def test_entities_are_frozen():
    subject = DeadlineSubject(
        reference_date=date(2026, 1, 1), is_settled=False, domain=SubjectDomain.PAYABLE
    )

    with pytest.raises(FrozenInstanceError):
        subject.is_settled = True


def test_ledger_entries_get_distinct_ids():
    first = LedgerEntry(kind=LedgerEntryKind.ADVANCE, amount=Decimal("1"))
    second = LedgerEntry(kind=LedgerEntryKind.ADVANCE, amount=Decimal("1"))

    assert first.id != second.id


def test_ledger_entry_rejects_nan():
    with pytest.raises(InvalidEntryAmount):
        LedgerEntry(kind=LedgerEntryKind.ADVANCE, amount=Decimal("NaN"))


def test_ledger_entry_rejects_unknown_kind():
    with pytest.raises(ValueError):
        LedgerEntry(kind="GIFT", amount=Decimal("1"))


def test_obligation_coerces_entries_to_tuple():
    entry = LedgerEntry(kind=LedgerEntryKind.RETURN, amount=Decimal("5"))

    obligation = Obligation(base_amount="10", entries=[entry])

    assert obligation.entries == (entry,)
    assert obligation.base_amount == Decimal("10")


def test_obligation_allows_zero_base():
    assert Obligation(base_amount=Decimal("0")).base_amount == Decimal("0")


def test_obligation_rejects_float_base():
    with pytest.raises(ValidationError):
        Obligation(base_amount=10.0)


def test_bucket_total_add():
    total = BucketTotal().add(Decimal("1.50")).add(Decimal("2.25"))

    assert total == BucketTotal(count=2, amount=Decimal("3.75"))


def test_notification_total():
    counts = NotificationCounts(ap_overdue=2, contracts_today=1, receivables_late=4)

    assert counts.total == 7


def test_enum_values_are_identifiers():
    assert Bucket.A_RECEBER.value == "A_RECEBER"
    assert AlertTag.EXPIRADO.value == "EXPIRADO"
    assert SubjectDomain("CONTRACT") is SubjectDomain.CONTRACT
