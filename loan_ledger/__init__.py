"""Installment ledger engine for flat-rate consumer loans."""

from loan_ledger.amortization import AmortizationResult, compute_amortization
from loan_ledger.config import LedgerConfig, LoanLimits
from loan_ledger.ledger import (
    InMemoryPaidMarkerStore,
    InstallmentLedger,
    JsonFilePaidMarkerStore,
    PaidMarkerStore,
    generate_schedule,
)
from loan_ledger.models import (
    Client,
    Installment,
    InstallmentStatus,
    Loan,
    LoanStatus,
    PaidMarker,
)
from loan_ledger.store import PortfolioStore

__version__ = "0.1.0"

__all__ = [
    "AmortizationResult",
    "Client",
    "InMemoryPaidMarkerStore",
    "Installment",
    "InstallmentLedger",
    "InstallmentStatus",
    "JsonFilePaidMarkerStore",
    "LedgerConfig",
    "Loan",
    "LoanLimits",
    "LoanStatus",
    "PaidMarker",
    "PaidMarkerStore",
    "PortfolioStore",
    "compute_amortization",
    "generate_schedule",
]
