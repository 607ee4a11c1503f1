"""Domain model entities for duetrack.

These are pure data classes representing business concepts, independent of
how the host application stores or transports them. Classification and
reconciliation results are derived from these values on every read and are
never persisted.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from duetrack.domain.errors import InvalidEntryAmount, ValidationError


class SubjectDomain(str, Enum):
    """Kind of due-date-bearing record."""

    PAYABLE = "PAYABLE"
    CONTRACT = "CONTRACT"
    RECEIVABLE = "RECEIVABLE"


class AlertTag(str, Enum):
    """Urgency code relative to a deadline."""

    VENCIDO = "VENCIDO"
    D_3 = "D-3"
    D_7 = "D-7"
    D_30 = "D-30"
    HOJE = "HOJE"
    EXPIRADO = "EXPIRADO"


class Bucket(str, Enum):
    """Status partition used for summary counts."""

    ABERTO = "ABERTO"
    PAGO = "PAGO"
    VENCIDO = "VENCIDO"
    ATIVO = "ATIVO"
    EXPIRADO = "EXPIRADO"
    A_RECEBER = "A_RECEBER"
    ATRASADO = "ATRASADO"
    RECEBIDO = "RECEBIDO"
    SEM_PRAZO = "SEM_PRAZO"


class LedgerEntryKind(str, Enum):
    """Financial event kinds recorded against a travel expense."""

    ADVANCE = "ADVANCE"
    RETURN = "RETURN"
    REIMBURSEMENT = "REIMBURSEMENT"


class ReimbursementStatus(str, Enum):
    """Settlement state of a travel expense."""

    PENDENTE = "PENDENTE"
    PARCIAL = "PARCIAL"
    REEMBOLSADO = "REEMBOLSADO"


def _to_decimal(value) -> Decimal:
    """Coerce an int/str/Decimal amount into a Decimal.

    Floats are refused so binary rounding never reaches a balance.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Amount must be Decimal, int or str, got {type(value).__name__}")
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise TypeError(f"Could not interpret amount {value!r}: {e}")


def _new_entry_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class DeadlineSubject:
    """A record with an optional due/end date and a settled flag."""

    reference_date: Optional[date]
    is_settled: bool
    domain: SubjectDomain


@dataclass(frozen=True)
class LedgerEntry:
    """A single event against an obligation.

    The amount is always a positive magnitude; its effect on the balance
    comes from ``kind``.
    """

    kind: LedgerEntryKind
    amount: Decimal
    occurred_at: Optional[date] = None
    id: str = field(default_factory=_new_entry_id)

    def __post_init__(self):
        kind = LedgerEntryKind(self.kind)
        try:
            amount = _to_decimal(self.amount)
        except TypeError as e:
            raise InvalidEntryAmount(str(e))
        if not amount.is_finite() or amount <= 0:
            raise InvalidEntryAmount(
                f"{kind.value.lower()} amount must be greater than zero, got {self.amount}"
            )
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "amount", amount)


@dataclass(frozen=True)
class Obligation:
    """A base amount owed to an employee plus its ledger entries."""

    base_amount: Decimal
    entries: tuple[LedgerEntry, ...] = ()

    def __post_init__(self):
        try:
            base_amount = _to_decimal(self.base_amount)
        except TypeError as e:
            raise ValidationError(str(e))
        if not base_amount.is_finite() or base_amount < 0:
            raise ValidationError(
                f"Base amount must be zero or greater, got {self.base_amount}"
            )
        object.__setattr__(self, "base_amount", base_amount)
        object.__setattr__(self, "entries", tuple(self.entries))


@dataclass(frozen=True)
class ClassificationResult:
    """Deadline distance, alert tag and status bucket for one subject."""

    days_to_deadline: Optional[int]
    alert_tag: Optional[AlertTag]
    bucket: Bucket


@dataclass(frozen=True)
class ReconciliationResult:
    """Totals, outstanding balance and status of an obligation."""

    base_amount: Decimal
    advances_total: Decimal
    returns_total: Decimal
    reimbursed_total: Decimal
    balance: Decimal
    status: ReimbursementStatus

    @property
    def remaining_reimbursable(self) -> Decimal:
        """Amount that may still be formally reimbursed."""
        return max(Decimal("0"), self.base_amount - self.reimbursed_total)


@dataclass(frozen=True)
class SummaryItem:
    """A subject together with the amount it contributes to summaries."""

    subject: DeadlineSubject
    amount: Decimal = Decimal("0")
    label: Optional[str] = None


@dataclass(frozen=True)
class BucketTotal:
    """Count and amount accumulated in one bucket."""

    count: int = 0
    amount: Decimal = Decimal("0")

    def add(self, amount: Decimal) -> "BucketTotal":
        return BucketTotal(count=self.count + 1, amount=self.amount + amount)


@dataclass(frozen=True)
class SummaryReport:
    """Status card figures for one aggregation pass."""

    today: date
    totals: BucketTotal
    buckets: dict[Bucket, BucketTotal]
    alerts: dict[AlertTag, BucketTotal]
    period_start: Optional[date] = None
    period_end: Optional[date] = None

    def bucket(self, bucket: Bucket) -> BucketTotal:
        """Return the total for a bucket, empty if nothing fell into it."""
        return self.buckets.get(bucket, BucketTotal())

    def alert(self, tag: AlertTag) -> BucketTotal:
        """Return the total for an alert tag, empty if nothing carried it."""
        return self.alerts.get(tag, BucketTotal())


@dataclass(frozen=True)
class NotificationCounts:
    """Counters behind the notification bell."""

    ap_overdue: int = 0
    ap_due_3: int = 0
    ap_due_7: int = 0
    contracts_d30: int = 0
    contracts_d7: int = 0
    contracts_today: int = 0
    receivables_late: int = 0

    @property
    def total(self) -> int:
        return (
            self.ap_overdue
            + self.ap_due_3
            + self.ap_due_7
            + self.contracts_d30
            + self.contracts_d7
            + self.contracts_today
            + self.receivables_late
        )


@dataclass(frozen=True)
class ReimbursementSummary:
    """Travel expense totals per reimbursement status."""

    by_status: dict[ReimbursementStatus, BucketTotal]
    outstanding_balance: Decimal
    count: int

    def status(self, status: ReimbursementStatus) -> BucketTotal:
        return self.by_status.get(status, BucketTotal())
