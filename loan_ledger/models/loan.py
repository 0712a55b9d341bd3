"""Loan, installment and paid-marker models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_ledger.models.enums import InstallmentStatus, LoanStatus


@dataclass
class Loan:
    """Credit extended to one client.

    ``total_amount`` and ``periodic_payment`` are derived from principal,
    rate and term by :func:`loan_ledger.amortization.compute_amortization`
    and must be refreshed whenever the rate changes.
    """

    loan_id: str
    client_id: str
    principal: Decimal
    interest_rate: Decimal  # Percent per installment period (e.g. 20 for 20%)
    term: int  # Number of installments
    loan_date: date
    total_amount: Decimal
    periodic_payment: Decimal
    first_payment_date: date | None = None  # Falls back to loan_date
    client_name: str = ""
    status: LoanStatus = LoanStatus.ACTIVE
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime | None = None

    @property
    def schedule_start(self) -> date:
        """Due date of the first installment."""
        return self.first_payment_date or self.loan_date


@dataclass
class Installment:
    """One scheduled repayment, regenerated on every ledger pass."""

    installment_id: str  # "{loan_id}-{installment_number}"
    loan_id: str
    client_id: str
    client_name: str
    client_phone: str
    installment_number: int  # 1, 2, 3, ...
    total_installments: int
    due_date: date
    base_amount: Decimal
    late_fee: Decimal
    total_amount: Decimal
    status: InstallmentStatus
    paid_at: datetime | None = None


@dataclass(frozen=True)
class PaidMarker:
    """Durable record that an installment was confirmed paid."""

    installment_id: str
    paid_at: datetime
    base_amount: Decimal | None = None  # None when only the id was recorded
    late_fee: Decimal = Decimal("0")
