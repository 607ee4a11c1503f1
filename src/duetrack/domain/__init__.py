"""Domain layer for duetrack application."""

from duetrack.domain.deadline import classify
from duetrack.domain.ledger import TravelExpenseLedger, reconcile
from duetrack.domain.summary import SummaryService, aggregate

__all__ = [
    "classify",
    "reconcile",
    "aggregate",
    "TravelExpenseLedger",
    "SummaryService",
]
