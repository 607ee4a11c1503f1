"""Tests for deadline classification."""

from datetime import date, datetime, timedelta

import pytest
from dateutil import tz

from duetrack.domain.deadline import classify, is_overdue, whole_days_between
from duetrack.domain.entities import (
    AlertTag,
    Bucket,
    ClassificationResult,
    DeadlineSubject,
    SubjectDomain,
)


def _subject(today, offset, domain=SubjectDomain.PAYABLE, settled=False):
    return DeadlineSubject(
        reference_date=today + timedelta(days=offset),
        is_settled=settled,
        domain=domain,
    )


def test_whole_days_between_signs(today):
    assert whole_days_between(today, today + timedelta(days=5)) == 5
    assert whole_days_between(today, today) == 0
    assert whole_days_between(today, today - timedelta(days=3)) == -3


def test_whole_days_between_ignores_time_of_day(today):
    late_today = datetime(today.year, today.month, today.day, 23, 59)
    early_tomorrow = datetime(today.year, today.month, today.day, 0, 1) + timedelta(days=1)

    assert whole_days_between(late_today, early_tomorrow) == 1
    assert whole_days_between(today, datetime(today.year, today.month, today.day, 18)) == 0


def test_whole_days_between_reads_aware_instants_on_business_calendar():
    sao_paulo_evening = datetime(2026, 10, 18, 23, 30, tzinfo=tz.tzoffset(None, -3 * 3600))
    utc_after_midnight = datetime(2026, 10, 19, 1, 0, tzinfo=tz.UTC)

    assert whole_days_between(sao_paulo_evening, utc_after_midnight) == 0
    assert whole_days_between(date(2026, 10, 18), utc_after_midnight) == 0
    assert whole_days_between(date(2026, 10, 18), datetime(2026, 10, 19, 3, 0, tzinfo=tz.UTC)) == 1


def test_contract_ending_at_utc_midnight_is_today(today):
    end = datetime(2026, 10, 19, 0, 30, tzinfo=tz.UTC)
    subject = DeadlineSubject(reference_date=end, is_settled=False, domain=SubjectDomain.CONTRACT)
    result = classify(subject, today)

    assert result.days_to_deadline == 0
    assert result.alert_tag == AlertTag.HOJE


def test_whole_days_between_across_month_and_year(today):
    assert whole_days_between(date(2026, 12, 31), date(2027, 1, 1)) == 1
    assert whole_days_between(date(2028, 2, 28), date(2028, 3, 1)) == 2


@pytest.mark.parametrize(
    "domain",
    [SubjectDomain.PAYABLE, SubjectDomain.CONTRACT, SubjectDomain.RECEIVABLE],
)
def test_missing_reference_date_has_no_deadline(today, domain):
    subject = DeadlineSubject(reference_date=None, is_settled=False, domain=domain)

    result = classify(subject, today)

    assert result == ClassificationResult(None, None, Bucket.SEM_PRAZO)


@pytest.mark.parametrize(
    "offset,tag,bucket",
    [
        (-365, AlertTag.VENCIDO, Bucket.VENCIDO),
        (-1, AlertTag.VENCIDO, Bucket.VENCIDO),
        (0, AlertTag.D_3, Bucket.ABERTO),
        (1, AlertTag.D_3, Bucket.ABERTO),
        (3, AlertTag.D_3, Bucket.ABERTO),
        (4, AlertTag.D_7, Bucket.ABERTO),
        (7, AlertTag.D_7, Bucket.ABERTO),
        (8, None, Bucket.ABERTO),
        (60, None, Bucket.ABERTO),
    ],
)
def test_payable_thresholds(today, offset, tag, bucket):
    result = classify(_subject(today, offset), today)

    assert result.days_to_deadline == offset
    assert result.alert_tag == tag
    assert result.bucket == bucket


@pytest.mark.parametrize(
    "offset,tag",
    [
        (-400, AlertTag.EXPIRADO),
        (-1, AlertTag.EXPIRADO),
        (0, AlertTag.HOJE),
        (1, AlertTag.D_7),
        (7, AlertTag.D_7),
        (8, AlertTag.D_30),
        (30, AlertTag.D_30),
        (31, None),
    ],
)
def test_contract_thresholds(today, offset, tag):
    result = classify(_subject(today, offset, domain=SubjectDomain.CONTRACT), today)

    assert result.days_to_deadline == offset
    assert result.alert_tag == tag


def test_contract_buckets(today):
    expired = classify(_subject(today, -1, domain=SubjectDomain.CONTRACT), today)
    active = classify(_subject(today, 10, domain=SubjectDomain.CONTRACT), today)

    assert expired.bucket == Bucket.EXPIRADO
    assert active.bucket == Bucket.ATIVO


@pytest.mark.parametrize("offset", [-30, -1, 0, 2, 5, 100])
def test_settled_payable_never_alerts(today, offset):
    result = classify(_subject(today, offset, settled=True), today)

    assert result.alert_tag is None
    assert result.bucket == Bucket.PAGO
    assert result.days_to_deadline == offset


def test_settled_contract_is_active_without_alert(today):
    result = classify(
        _subject(today, -5, domain=SubjectDomain.CONTRACT, settled=True), today
    )

    assert result == ClassificationResult(-5, None, Bucket.ATIVO)


@pytest.mark.parametrize(
    "offset,settled,bucket",
    [
        (-1, False, Bucket.ATRASADO),
        (0, False, Bucket.A_RECEBER),
        (15, False, Bucket.A_RECEBER),
        (-1, True, Bucket.RECEBIDO),
    ],
)
def test_receivable_buckets_are_never_tagged(today, offset, settled, bucket):
    result = classify(
        _subject(today, offset, domain=SubjectDomain.RECEIVABLE, settled=settled), today
    )

    assert result.alert_tag is None
    assert result.bucket == bucket


@pytest.mark.parametrize("offset", [-1, -2, -7, -30, -3650])
def test_negative_days_always_overdue(today, offset):
    payable = classify(_subject(today, offset), today)
    contract = classify(_subject(today, offset, domain=SubjectDomain.CONTRACT), today)

    assert payable.alert_tag == AlertTag.VENCIDO
    assert contract.alert_tag == AlertTag.EXPIRADO


def test_scenario_payable_due_in_five_days(today):
    result = classify(_subject(today, 5), today)

    assert result == ClassificationResult(5, AlertTag.D_7, Bucket.ABERTO)


def test_scenario_contract_ended_yesterday(today):
    result = classify(_subject(today, -1, domain=SubjectDomain.CONTRACT), today)

    assert result.days_to_deadline == -1
    assert result.alert_tag == AlertTag.EXPIRADO


def test_classify_uses_supplied_today_only():
    subject = DeadlineSubject(
        reference_date=date(2020, 1, 10), is_settled=False, domain=SubjectDomain.PAYABLE
    )

    assert classify(subject, date(2020, 1, 5)).alert_tag == AlertTag.D_7
    assert classify(subject, date(2020, 1, 8)).alert_tag == AlertTag.D_3
    assert classify(subject, date(2020, 1, 11)).alert_tag == AlertTag.VENCIDO


def test_alert_tags_use_wire_identifiers():
    assert AlertTag.D_3.value == "D-3"
    assert AlertTag.D_7.value == "D-7"
    assert AlertTag.D_30.value == "D-30"


def test_is_overdue(today):
    assert is_overdue(_subject(today, -1), today)
    assert not is_overdue(_subject(today, -1, settled=True), today)
    assert is_overdue(_subject(today, -1, domain=SubjectDomain.RECEIVABLE), today)
    assert not is_overdue(_subject(today, 0, domain=SubjectDomain.CONTRACT), today)
