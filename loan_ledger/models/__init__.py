"""Domain models for the installment ledger."""

from loan_ledger.models.client import Client
from loan_ledger.models.enums import InstallmentStatus, LoanStatus
from loan_ledger.models.loan import Installment, Loan, PaidMarker

__all__ = [
    "Client",
    "Installment",
    "InstallmentStatus",
    "Loan",
    "LoanStatus",
    "PaidMarker",
]
