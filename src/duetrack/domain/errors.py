"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidEntryAmount(ValidationError):
    """Ledger entry amount is zero, negative or not a number."""


class ReimbursementExceedsRemaining(ValidationError):
    """Reimbursement is larger than what is left to reimburse."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class RecordFormatError(ValidationError):
    """Host record could not be converted into a domain value."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing ledger entry."""
    return f"Ledger entry '{entry_id}' not found"


def reimbursement_exceeds_remaining(amount: Decimal, remaining: Decimal) -> str:
    """Return message when a reimbursement is above the remaining cap."""
    return (
        f"Reimbursement of {amount} exceeds the remaining amount to reimburse "
        f"({remaining})"
    )


def record_field_invalid(index: int, field_name: str, reason: str) -> str:
    """Return message for an unusable field in a host record."""
    return f"Record {index}: invalid '{field_name}': {reason}"
