"""Installment ledger engine."""

from loan_ledger.ledger.dates import add_months
from loan_ledger.ledger.engine import InstallmentLedger
from loan_ledger.ledger.paid_markers import (
    InMemoryPaidMarkerStore,
    JsonFilePaidMarkerStore,
    PaidMarkerStore,
)
from loan_ledger.ledger.schedule import DAILY_LATE_FEE, generate_schedule, installment_id

__all__ = [
    "DAILY_LATE_FEE",
    "InMemoryPaidMarkerStore",
    "InstallmentLedger",
    "JsonFilePaidMarkerStore",
    "PaidMarkerStore",
    "add_months",
    "generate_schedule",
    "installment_id",
]
