"""Deadline classification for payables, contracts and receivables.

Every consumer (status cards, badges, notification counters, filters) goes
through ``classify`` so the thresholds below exist in exactly one place.
"""

import logging
from datetime import date, datetime

from duetrack.domain.entities import (
    AlertTag,
    Bucket,
    ClassificationResult,
    DeadlineSubject,
    SubjectDomain,
)
from duetrack.utils.business_calendar import to_business_date

logger = logging.getLogger(__name__)

PAYABLE_DUE_SOON_DAYS = 3
PAYABLE_DUE_WEEK_DAYS = 7
CONTRACT_DUE_WEEK_DAYS = 7
CONTRACT_DUE_MONTH_DAYS = 30

SETTLED_BUCKETS = {
    SubjectDomain.PAYABLE: Bucket.PAGO,
    SubjectDomain.CONTRACT: Bucket.ATIVO,
    SubjectDomain.RECEIVABLE: Bucket.RECEBIDO,
}


def calendar_date(value: date) -> date:
    # Aware instants are read on the business calendar; naive ones are already local
    if isinstance(value, datetime):
        return to_business_date(value)
    return value


def whole_days_between(today: date, reference_date: date) -> int:
    """Return signed whole days from ``today`` to ``reference_date``.

    Positive means the reference date is in the future, zero means today and
    negative means it has passed. Both values are reduced to calendar dates
    first, so the time of day never shifts the result. Aware datetimes are
    converted to the business time zone before truncation, so two instants on
    the same business day are zero days apart whatever zone they carry.
    """
    return (calendar_date(reference_date) - calendar_date(today)).days


def _classify_payable(days: int) -> ClassificationResult:
    if days < 0:
        return ClassificationResult(days, AlertTag.VENCIDO, Bucket.VENCIDO)
    if days <= PAYABLE_DUE_SOON_DAYS:
        return ClassificationResult(days, AlertTag.D_3, Bucket.ABERTO)
    if days <= PAYABLE_DUE_WEEK_DAYS:
        return ClassificationResult(days, AlertTag.D_7, Bucket.ABERTO)
    return ClassificationResult(days, None, Bucket.ABERTO)


def _classify_contract(days: int) -> ClassificationResult:
    if days < 0:
        return ClassificationResult(days, AlertTag.EXPIRADO, Bucket.EXPIRADO)
    if days == 0:
        return ClassificationResult(days, AlertTag.HOJE, Bucket.ATIVO)
    if days <= CONTRACT_DUE_WEEK_DAYS:
        return ClassificationResult(days, AlertTag.D_7, Bucket.ATIVO)
    if days <= CONTRACT_DUE_MONTH_DAYS:
        return ClassificationResult(days, AlertTag.D_30, Bucket.ATIVO)
    return ClassificationResult(days, None, Bucket.ATIVO)


def _classify_receivable(days: int) -> ClassificationResult:
    if days < 0:
        return ClassificationResult(days, None, Bucket.ATRASADO)
    return ClassificationResult(days, None, Bucket.A_RECEBER)


_CLASSIFIERS = {
    SubjectDomain.PAYABLE: _classify_payable,
    SubjectDomain.CONTRACT: _classify_contract,
    SubjectDomain.RECEIVABLE: _classify_receivable,
}


def classify(subject: DeadlineSubject, today: date) -> ClassificationResult:
    """Classify a subject against ``today``.

    Args:
        subject: Record with an optional reference date and settled flag
        today: Reference calendar date supplied by the caller

    Returns:
        ClassificationResult with the signed day distance, the alert tag (if
        any) and the status bucket. A subject without a reference date lands
        in ``Bucket.SEM_PRAZO`` with no distance and no tag.
    """
    if subject.reference_date is None:
        return ClassificationResult(None, None, Bucket.SEM_PRAZO)

    domain = SubjectDomain(subject.domain)
    days = whole_days_between(today, subject.reference_date)

    if subject.is_settled:
        result = ClassificationResult(days, None, SETTLED_BUCKETS[domain])
    else:
        result = _CLASSIFIERS[domain](days)

    logger.debug(
        "Classified %s due %s against %s: %s",
        domain.value,
        subject.reference_date,
        today,
        result,
    )
    return result


def is_overdue(subject: DeadlineSubject, today: date) -> bool:
    """Return True if an unsettled subject's deadline has passed."""
    result = classify(subject, today)
    return result.bucket in (Bucket.VENCIDO, Bucket.EXPIRADO, Bucket.ATRASADO)
