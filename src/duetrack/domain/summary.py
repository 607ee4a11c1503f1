"""Summary aggregation domain service."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from duetrack.domain.deadline import calendar_date, classify
from duetrack.domain.entities import (
    AlertTag,
    Bucket,
    BucketTotal,
    ClassificationResult,
    NotificationCounts,
    Obligation,
    ReimbursementStatus,
    ReimbursementSummary,
    SubjectDomain,
    SummaryItem,
    SummaryReport,
)
from duetrack.domain.ledger import reconcile

logger = logging.getLogger(__name__)


def in_period(
    reference_date: Optional[date],
    period_start: Optional[date],
    period_end: Optional[date],
) -> bool:
    """Return True if a reference date falls inside an inclusive period.

    With no bounds every item is in the period. With any bound set, an item
    without a reference date is outside it.
    """
    if period_start is None and period_end is None:
        return True
    if reference_date is None:
        return False
    reference_date = calendar_date(reference_date)
    if period_start is not None and reference_date < period_start:
        return False
    if period_end is not None and reference_date > period_end:
        return False
    return True


def aggregate(
    items: Iterable[SummaryItem],
    today: date,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
) -> SummaryReport:
    """Reduce classified items into status bucket and alert tag totals.

    Each item is classified once against the same ``today``. It contributes to
    exactly one status bucket and to at most one alert tag total; the two
    partitions are independent.

    Args:
        items: Subjects with the amounts they contribute
        today: Reference date used for every item in the pass
        period_start: Optional inclusive lower bound on the reference date
        period_end: Optional inclusive upper bound on the reference date

    Returns:
        SummaryReport
    """
    buckets: dict[Bucket, BucketTotal] = defaultdict(BucketTotal)
    alerts: dict[AlertTag, BucketTotal] = defaultdict(BucketTotal)
    totals = BucketTotal()

    for item in items:
        if not in_period(item.subject.reference_date, period_start, period_end):
            continue
        result = classify(item.subject, today)
        buckets[result.bucket] = buckets[result.bucket].add(item.amount)
        if result.alert_tag is not None:
            alerts[result.alert_tag] = alerts[result.alert_tag].add(item.amount)
        totals = totals.add(item.amount)

    logger.debug("Aggregated %d items against %s", totals.count, today)
    return SummaryReport(
        today=today,
        totals=totals,
        buckets=dict(buckets),
        alerts=dict(alerts),
        period_start=period_start,
        period_end=period_end,
    )


class SummaryService:
    """Service for building status cards and notification counters."""

    def __init__(self, today: date):
        """Initialize summary service.

        Args:
            today: Reference date shared by every classification the service
                performs, so one report never mixes two different days
        """
        self.today = today

    def classify_items(
        self, items: Iterable[SummaryItem]
    ) -> list[tuple[SummaryItem, ClassificationResult]]:
        """Pair each item with its classification."""
        return [(item, classify(item.subject, self.today)) for item in items]

    def build_summary_report(
        self,
        items: Iterable[SummaryItem],
        domain: Optional[SubjectDomain] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
    ) -> SummaryReport:
        """Build the status card report, optionally for a single domain."""
        if domain is not None:
            items = [item for item in items if item.subject.domain == domain]
        return aggregate(
            items, self.today, period_start=period_start, period_end=period_end
        )

    def notification_counts(self, items: Iterable[SummaryItem]) -> NotificationCounts:
        """Count the alerts shown under the notification bell."""
        counters: dict[str, int] = defaultdict(int)

        for item, result in self.classify_items(items):
            domain = item.subject.domain
            if domain == SubjectDomain.PAYABLE:
                if result.alert_tag == AlertTag.VENCIDO:
                    counters["ap_overdue"] += 1
                elif result.alert_tag == AlertTag.D_3:
                    counters["ap_due_3"] += 1
                elif result.alert_tag == AlertTag.D_7:
                    counters["ap_due_7"] += 1
            elif domain == SubjectDomain.CONTRACT:
                if result.alert_tag == AlertTag.D_30:
                    counters["contracts_d30"] += 1
                elif result.alert_tag == AlertTag.D_7:
                    counters["contracts_d7"] += 1
                elif result.alert_tag == AlertTag.HOJE:
                    counters["contracts_today"] += 1
            elif domain == SubjectDomain.RECEIVABLE:
                if result.bucket == Bucket.ATRASADO:
                    counters["receivables_late"] += 1

        return NotificationCounts(**counters)

    def reimbursement_summary(
        self, obligations: Iterable[Obligation]
    ) -> ReimbursementSummary:
        """Group travel expenses by reimbursement status.

        Amounts are the base amounts of the expenses; the outstanding balance
        is the sum of every reconciled balance, negative ones included.
        """
        by_status: dict[ReimbursementStatus, BucketTotal] = defaultdict(BucketTotal)
        outstanding = Decimal("0")
        count = 0

        for obligation in obligations:
            result = reconcile(obligation)
            by_status[result.status] = by_status[result.status].add(
                obligation.base_amount
            )
            outstanding += result.balance
            count += 1

        return ReimbursementSummary(
            by_status=dict(by_status), outstanding_balance=outstanding, count=count
        )
