"""Aggregations over a generated schedule.

These feed listings and report exports; formatting (currency strings, PDF
or CSV layout) is left to the consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from loan_ledger.models import Client, Installment, InstallmentStatus, Loan, LoanStatus

ZERO = Decimal("0")


@dataclass(frozen=True)
class InstallmentStats:
    """Counts and amounts across a set of installments."""

    total: int
    paid: int
    pending: int
    overdue: int
    total_amount: Decimal  # Sum of base amounts
    paid_amount: Decimal
    total_late_fees: Decimal  # Fees currently accruing on overdue installments


@dataclass(frozen=True)
class PortfolioStats:
    """Headline figures over active loans."""

    total_loaned: Decimal
    total_interest: Decimal
    active_clients: int
    active_loans: int
    overdue_installments: int


@dataclass(frozen=True)
class LoanProgress:
    """One report row: a loan and how far its repayment has got."""

    loan_id: str
    client_id: str
    client_name: str
    principal: Decimal
    interest_rate: Decimal
    term: int
    paid_installments: int
    remaining_installments: int
    total_amount: Decimal
    loan_date: date
    status: LoanStatus


def installment_stats(installments: Iterable[Installment]) -> InstallmentStats:
    """Summarize installments by status."""
    counts = {status: 0 for status in InstallmentStatus}
    total_amount = ZERO
    paid_amount = ZERO
    late_fees = ZERO

    for inst in installments:
        counts[inst.status] += 1
        total_amount += inst.base_amount
        if inst.status == InstallmentStatus.PAID:
            paid_amount += inst.base_amount
        elif inst.status == InstallmentStatus.OVERDUE:
            late_fees += inst.late_fee

    return InstallmentStats(
        total=sum(counts.values()),
        paid=counts[InstallmentStatus.PAID],
        pending=counts[InstallmentStatus.PENDING],
        overdue=counts[InstallmentStatus.OVERDUE],
        total_amount=total_amount,
        paid_amount=paid_amount,
        total_late_fees=late_fees,
    )


def portfolio_stats(loans: Iterable[Loan], installments: Iterable[Installment]) -> PortfolioStats:
    """Totals over active loans, plus the overdue installment count."""
    active = [loan for loan in loans if loan.status == LoanStatus.ACTIVE]
    overdue = sum(1 for inst in installments if inst.status == InstallmentStatus.OVERDUE)

    return PortfolioStats(
        total_loaned=sum((loan.principal for loan in active), ZERO),
        total_interest=sum((loan.total_amount - loan.principal for loan in active), ZERO),
        active_clients=len({loan.client_id for loan in active}),
        active_loans=len(active),
        overdue_installments=overdue,
    )


def loan_progress(
    clients: Iterable[Client],
    loans: Iterable[Loan],
    installments: Iterable[Installment],
) -> list[LoanProgress]:
    """Per-loan paid/remaining counts, ordered by client name then loan date.

    Loans whose client is not in ``clients`` are left out, matching the
    schedule generator's default policy.
    """
    clients_by_id = {client.client_id: client for client in clients}
    paid_by_loan: dict[str, int] = {}
    for inst in installments:
        if inst.status == InstallmentStatus.PAID:
            paid_by_loan[inst.loan_id] = paid_by_loan.get(inst.loan_id, 0) + 1

    rows = []
    for loan in loans:
        client = clients_by_id.get(loan.client_id)
        if client is None:
            continue
        paid = paid_by_loan.get(loan.loan_id, 0)
        rows.append(
            LoanProgress(
                loan_id=loan.loan_id,
                client_id=client.client_id,
                client_name=client.full_name,
                principal=loan.principal,
                interest_rate=loan.interest_rate,
                term=loan.term,
                paid_installments=paid,
                remaining_installments=loan.term - paid,
                total_amount=loan.total_amount,
                loan_date=loan.loan_date,
                status=loan.status,
            )
        )

    rows.sort(key=lambda row: (row.client_name, row.loan_date))
    return rows


def filter_by_status(
    installments: Iterable[Installment],
    status: InstallmentStatus | None = None,
) -> list[Installment]:
    """Installments with the given status; all of them when ``status`` is None."""
    if status is None:
        return list(installments)
    return [inst for inst in installments if inst.status == status]


def group_by_client(installments: Iterable[Installment]) -> dict[str, list[Installment]]:
    """Group installments by client name, keys in alphabetical order."""
    groups: dict[str, list[Installment]] = {}
    for inst in installments:
        groups.setdefault(inst.client_name, []).append(inst)
    return {name: groups[name] for name in sorted(groups)}
