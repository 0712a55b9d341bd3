"""Installment schedule generation.

The schedule is always rebuilt from scratch: loans + clients + paid markers +
"today" in, a fresh ordered list of installments out. Nothing is patched in
place, so no derived value can go stale between passes.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Iterator

from loan_ledger.config import MISSING_CLIENT_POLICIES
from loan_ledger.exceptions import ConfigurationError, ReferentialIntegrityError
from loan_ledger.ledger.dates import add_months, as_calendar_day
from loan_ledger.ledger.paid_markers import PaidMarkerStore
from loan_ledger.models import Client, Installment, InstallmentStatus, Loan

logger = logging.getLogger(__name__)

DAILY_LATE_FEE = Decimal("10")
ZERO = Decimal("0")


def installment_id(loan_id: str, installment_number: int) -> str:
    """Stable identity of an installment within its loan."""
    return f"{loan_id}-{installment_number}"


def generate_schedule(
    loans: Iterable[Loan],
    clients: Iterable[Client],
    paid_markers: PaidMarkerStore,
    today: date | datetime,
    *,
    daily_late_fee: Decimal = DAILY_LATE_FEE,
    on_missing_client: str = "skip",
) -> list[Installment]:
    """Derive every installment of every loan with its current status.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loans to schedule. Output keeps their order.
    clients : Iterable[Client]
        Clients the loans refer to.
    paid_markers : PaidMarkerStore
        Installments whose id is in this store are ``PAID`` regardless of
        their due date.
    today : date | datetime
        Reference day. A time-of-day component is discarded.
    daily_late_fee : Decimal
        Penalty per whole day an unpaid installment is past due.
    on_missing_client : str
        ``"skip"`` drops the installments of a loan whose client is unknown
        (logged as a warning); ``"raise"`` raises
        ``ReferentialIntegrityError`` instead.

    Returns
    -------
    list[Installment]
        Grouped by loan, ascending installment number within a loan.
    """
    if on_missing_client not in MISSING_CLIENT_POLICIES:
        raise ConfigurationError(f"Unknown missing-client policy: {on_missing_client!r}")

    today = as_calendar_day(today)
    clients_by_id = {client.client_id: client for client in clients}

    schedule: list[Installment] = []
    for loan in loans:
        client = clients_by_id.get(loan.client_id)
        if client is None:
            if on_missing_client == "raise":
                raise ReferentialIntegrityError(
                    f"Loan {loan.loan_id} references missing client {loan.client_id}"
                )
            logger.warning(
                "Skipping loan %s: client %s not found", loan.loan_id, loan.client_id
            )
            continue

        schedule.extend(
            _loan_installments(loan, client, paid_markers, today, daily_late_fee)
        )

    logger.debug("Generated %d installments for %s", len(schedule), today.isoformat())
    return schedule


def _loan_installments(
    loan: Loan,
    client: Client,
    paid_markers: PaidMarkerStore,
    today: date,
    daily_late_fee: Decimal,
) -> Iterator[Installment]:
    """Generate all installments for a loan."""
    start = loan.schedule_start

    for number in range(1, loan.term + 1):
        inst_id = installment_id(loan.loan_id, number)
        due_date = add_months(start, number - 1)
        base_amount = loan.periodic_payment
        late_fee = ZERO
        paid_at = None

        if paid_markers.contains(inst_id):
            status = InstallmentStatus.PAID
            marker = paid_markers.get(inst_id)
            if marker is not None:
                # Figures recorded at payment time survive later rate edits
                if marker.base_amount is not None:
                    base_amount = marker.base_amount
                late_fee = marker.late_fee
                paid_at = marker.paid_at
        elif due_date < today:
            status = InstallmentStatus.OVERDUE
            late_fee = (today - due_date).days * daily_late_fee
        else:
            status = InstallmentStatus.PENDING

        yield Installment(
            installment_id=inst_id,
            loan_id=loan.loan_id,
            client_id=client.client_id,
            client_name=client.full_name,
            client_phone=client.phone,
            installment_number=number,
            total_installments=loan.term,
            due_date=due_date,
            base_amount=base_amount,
            late_fee=late_fee,
            total_amount=base_amount + late_fee,
            status=status,
            paid_at=paid_at,
        )
