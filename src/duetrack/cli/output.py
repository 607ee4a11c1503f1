"""Rendering helpers shared by CLI commands."""

import json
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

import click

from duetrack.domain.entities import (
    BucketTotal,
    ClassificationResult,
    NotificationCounts,
    ReconciliationResult,
    ReimbursementSummary,
    SummaryReport,
)


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def format_days(days: int | None) -> str:
    """Describe a day distance the way the payables list shows it."""
    if days is None:
        return "-"
    if days < 0:
        return f"{abs(days)}d overdue"
    if days == 0:
        return "due today"
    return f"{days}d left"


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(_jsonable(k)): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def echo_json(payload: Any) -> None:
    """Print a payload as indented JSON."""
    click.echo(json.dumps(_jsonable(payload), indent=2, ensure_ascii=False))


def bucket_total_to_dict(total: BucketTotal) -> dict[str, Any]:
    return {"count": total.count, "amount": total.amount}


def classification_to_dict(result: ClassificationResult) -> dict[str, Any]:
    return {
        "days_to_deadline": result.days_to_deadline,
        "alert_tag": result.alert_tag,
        "bucket": result.bucket,
    }


def reconciliation_to_dict(result: ReconciliationResult) -> dict[str, Any]:
    return {
        "base_amount": result.base_amount,
        "advances_total": result.advances_total,
        "returns_total": result.returns_total,
        "reimbursed_total": result.reimbursed_total,
        "balance": result.balance,
        "remaining_reimbursable": result.remaining_reimbursable,
        "status": result.status,
    }


def summary_report_to_dict(report: SummaryReport) -> dict[str, Any]:
    return {
        "today": report.today,
        "period": (
            {"from": report.period_start, "to": report.period_end}
            if report.period_start is not None or report.period_end is not None
            else None
        ),
        "totals": bucket_total_to_dict(report.totals),
        "buckets": {k: bucket_total_to_dict(v) for k, v in report.buckets.items()},
        "alerts": {k: bucket_total_to_dict(v) for k, v in report.alerts.items()},
    }


def reimbursement_summary_to_dict(summary: ReimbursementSummary) -> dict[str, Any]:
    return {
        "count": summary.count,
        "outstanding_balance": summary.outstanding_balance,
        "by_status": {
            k: bucket_total_to_dict(v) for k, v in summary.by_status.items()
        },
    }


def notification_counts_to_dict(counts: NotificationCounts) -> dict[str, Any]:
    return {
        "ap_overdue": counts.ap_overdue,
        "ap_due_3": counts.ap_due_3,
        "ap_due_7": counts.ap_due_7,
        "contracts_d30": counts.contracts_d30,
        "contracts_d7": counts.contracts_d7,
        "contracts_today": counts.contracts_today,
        "receivables_late": counts.receivables_late,
        "total": counts.total,
    }
