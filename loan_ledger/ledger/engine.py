"""Installment ledger: cached schedule snapshot plus the mark-paid entry point."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from loan_ledger.config import LedgerConfig
from loan_ledger.ledger.dates import as_calendar_day
from loan_ledger.ledger.paid_markers import PaidMarkerStore
from loan_ledger.ledger.schedule import generate_schedule
from loan_ledger.models import Installment, InstallmentStatus, PaidMarker
from loan_ledger.store.portfolio import PortfolioStore

logger = logging.getLogger(__name__)


class InstallmentLedger:
    """Keep an internally consistent installment snapshot for a portfolio.

    Every change the ledger is told about (``regenerate``) or performs
    itself (``mark_paid``) rebuilds the whole schedule. ``mark_paid`` adds
    the marker and regenerates before returning, so a caller never sees a
    marker that the snapshot does not yet reflect.

    Parameters
    ----------
    store : PortfolioStore
        Source of clients and loans.
    paid_markers : PaidMarkerStore
        Append-only record of paid installments.
    config : LedgerConfig | None
        Late fee and missing-client policy. Defaults to ``LedgerConfig()``.
    clock : Callable[[], date]
        Supplies "today" when ``regenerate`` is called without one.
    now : Callable[[], datetime]
        Supplies the paid timestamp recorded by ``mark_paid``.
    """

    def __init__(
        self,
        store: PortfolioStore,
        paid_markers: PaidMarkerStore,
        *,
        config: LedgerConfig | None = None,
        clock: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.paid_markers = paid_markers
        self.config = config or LedgerConfig()
        self.config.validate()
        self._clock = clock
        self._now = now
        self._snapshot: list[Installment] | None = None
        self._index: dict[str, Installment] = {}
        self._today: date | None = None

    @property
    def installments(self) -> list[Installment]:
        """Last generated schedule; generated on first access."""
        if self._snapshot is None:
            self.regenerate()
        return list(self._snapshot)

    @property
    def today(self) -> date | None:
        """Reference day of the current snapshot."""
        return self._today

    def regenerate(self, today: date | datetime | None = None) -> list[Installment]:
        """Rebuild the schedule from the current loans, clients and paid markers.

        Call after any change to the store or to the paid-marker store made
        outside the ledger.
        """
        if today is None:
            today = self._clock()

        snapshot = generate_schedule(
            self.store.loans.values(),
            self.store.clients.values(),
            self.paid_markers,
            today,
            daily_late_fee=self.config.daily_late_fee,
            on_missing_client=self.config.on_missing_client,
        )

        self._snapshot = snapshot
        self._index = {inst.installment_id: inst for inst in snapshot}
        self._today = as_calendar_day(today)
        return list(snapshot)

    def get(self, installment_id: str) -> Installment | None:
        """Look up an installment in the current snapshot."""
        if self._snapshot is None:
            self.regenerate()
        return self._index.get(installment_id)

    def mark_paid(self, installment_id: str) -> Installment | None:
        """Mark an installment paid and regenerate the schedule.

        The schedule is first brought up to date with the store (same
        reference day as the last pass), and the late fee and base amount
        of that pass are frozen in the marker. Ids that are not in the
        schedule, including those of deleted loans, are ignored. Marking an
        already paid installment changes nothing.

        Returns
        -------
        Installment | None
            The installment as it appears in the regenerated schedule, or
            ``None`` if the id is not part of the schedule.

        Raises
        ------
        StorageError
            If the marker store cannot persist the marker. The installment
            stays unpaid and the snapshot is still regenerated.
        """
        self.regenerate(self._today)
        current = self._index.get(installment_id)
        if current is None:
            logger.warning("Ignoring mark_paid for unknown installment %s", installment_id)
            return None

        if current.status == InstallmentStatus.PAID:
            logger.debug("Installment %s already paid", installment_id)
            return current

        marker = PaidMarker(
            installment_id=installment_id,
            paid_at=self._now(),
            base_amount=current.base_amount,
            late_fee=current.late_fee,
        )
        try:
            self.paid_markers.add(marker)
        finally:
            # The snapshot follows the marker store even when the write fails
            self.regenerate(self._today)

        logger.info(
            "Installment %s marked paid (late fee %s)", installment_id, marker.late_fee
        )
        return self._index.get(installment_id)
