"""Travel expense ledger reconciliation."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from duetrack.domain.entities import (
    LedgerEntry,
    LedgerEntryKind,
    Obligation,
    ReconciliationResult,
    ReimbursementStatus,
)
from duetrack.domain.errors import (
    NotFoundError,
    ReimbursementExceedsRemaining,
    entry_not_found,
    reimbursement_exceeds_remaining,
)

logger = logging.getLogger(__name__)


def sum_entries(entries: Iterable[LedgerEntry], kind: LedgerEntryKind) -> Decimal:
    """Sum the amounts of entries of one kind."""
    return sum((entry.amount for entry in entries if entry.kind == kind), Decimal("0"))


def reimbursement_status(
    base_amount: Decimal, reimbursed_total: Decimal
) -> ReimbursementStatus:
    """Derive the settlement status from formal reimbursements only.

    Advances and returns never change the status: an expense fully offset by
    advances stays PENDENTE until a reimbursement entry exists.
    """
    if reimbursed_total >= base_amount:
        return ReimbursementStatus.REEMBOLSADO
    if reimbursed_total > 0:
        return ReimbursementStatus.PARCIAL
    return ReimbursementStatus.PENDENTE


def reconcile(obligation: Obligation) -> ReconciliationResult:
    """Compute totals, outstanding balance and status of an obligation.

    The result is a pure sum over the entries, so their order is irrelevant.
    ``balance`` is what the employee is still owed; it is negative when the
    employee was advanced more than the expense.

    Args:
        obligation: Base amount plus its ledger entries

    Returns:
        ReconciliationResult
    """
    entries = obligation.entries
    advances_total = sum_entries(entries, LedgerEntryKind.ADVANCE)
    returns_total = sum_entries(entries, LedgerEntryKind.RETURN)
    reimbursed_total = sum_entries(entries, LedgerEntryKind.REIMBURSEMENT)

    balance = obligation.base_amount - advances_total - reimbursed_total + returns_total
    status = reimbursement_status(obligation.base_amount, reimbursed_total)

    logger.debug(
        "Reconciled obligation of %s over %d entries: balance=%s status=%s",
        obligation.base_amount,
        len(entries),
        balance,
        status.value,
    )
    return ReconciliationResult(
        base_amount=obligation.base_amount,
        advances_total=advances_total,
        returns_total=returns_total,
        reimbursed_total=reimbursed_total,
        balance=balance,
        status=status,
    )


class TravelExpenseLedger:
    """Service for recording advances, returns and reimbursements."""

    def __init__(self, base_amount: Decimal, entries: Iterable[LedgerEntry] = ()):
        """Initialize the ledger of one travel expense.

        Args:
            base_amount: Amount owed to the employee for the trip
            entries: Entries already recorded for the expense

        Raises:
            ValidationError: If base_amount is negative
        """
        self._obligation = Obligation(base_amount=base_amount, entries=tuple(entries))

    @property
    def obligation(self) -> Obligation:
        return self._obligation

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return self._obligation.entries

    def reconcile(self) -> ReconciliationResult:
        return reconcile(self._obligation)

    def _append(
        self, kind: LedgerEntryKind, amount: Decimal, occurred_at: Optional[date]
    ) -> LedgerEntry:
        # LedgerEntry validates the amount before anything is stored
        entry = LedgerEntry(kind=kind, amount=amount, occurred_at=occurred_at)
        self._obligation = Obligation(
            base_amount=self._obligation.base_amount,
            entries=self._obligation.entries + (entry,),
        )
        logger.info("Recorded %s of %s", kind.value.lower(), entry.amount)
        return entry

    def add_advance(self, amount: Decimal, occurred_at: Optional[date] = None) -> LedgerEntry:
        """Record money handed to the employee ahead of settlement.

        Raises:
            InvalidEntryAmount: If amount is not greater than zero
        """
        return self._append(LedgerEntryKind.ADVANCE, amount, occurred_at)

    def add_return(self, amount: Decimal, occurred_at: Optional[date] = None) -> LedgerEntry:
        """Record money given back by the employee.

        Raises:
            InvalidEntryAmount: If amount is not greater than zero
        """
        return self._append(LedgerEntryKind.RETURN, amount, occurred_at)

    def add_reimbursement(
        self,
        amount: Decimal,
        occurred_at: Optional[date] = None,
        enforce_cap: bool = False,
    ) -> LedgerEntry:
        """Record a formal reimbursement payment.

        Args:
            amount: Reimbursed amount
            occurred_at: Optional payment date
            enforce_cap: If True, refuse amounts above what is left to reimburse

        Returns:
            The recorded entry

        Raises:
            InvalidEntryAmount: If amount is not greater than zero
            ReimbursementExceedsRemaining: If enforce_cap is set and amount is
                above the remaining reimbursable amount
        """
        if enforce_cap:
            entry = LedgerEntry(
                kind=LedgerEntryKind.REIMBURSEMENT, amount=amount, occurred_at=occurred_at
            )
            remaining = self.reconcile().remaining_reimbursable
            if entry.amount > remaining:
                raise ReimbursementExceedsRemaining(
                    reimbursement_exceeds_remaining(entry.amount, remaining)
                )
        return self._append(LedgerEntryKind.REIMBURSEMENT, amount, occurred_at)

    def remove_entry(self, entry_id: str) -> None:
        """Delete an entry; the next reconciliation no longer sees it.

        Raises:
            NotFoundError: If no entry has the given ID
        """
        remaining = tuple(e for e in self._obligation.entries if e.id != entry_id)
        if len(remaining) == len(self._obligation.entries):
            raise NotFoundError(entry_not_found(entry_id))

        self._obligation = Obligation(
            base_amount=self._obligation.base_amount, entries=remaining
        )
        logger.info("Removed ledger entry %s", entry_id)
