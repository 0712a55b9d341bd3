"""Sample portfolio scenario: clients, loans and a partly paid ledger."""

from __future__ import annotations

import logging
import random
from datetime import date

from loan_ledger.config import LedgerConfig
from loan_ledger.generators import ClientGenerator, LoanGenerator
from loan_ledger.ledger import InMemoryPaidMarkerStore, InstallmentLedger, PaidMarkerStore
from loan_ledger.models import InstallmentStatus
from loan_ledger.store import PortfolioStore

logger = logging.getLogger(__name__)


class SamplePortfolioScenario:
    """Build a realistic portfolio for demos and manual checks.

    This scenario creates:
    - Clients with valid CPF/phone data
    - One or more loans per client
    - Paid markers for a share of the installments already due, leaving
      the rest overdue so late fees show up
    """

    def __init__(
        self,
        num_clients: int = 20,
        max_loans_per_client: int = 2,
        on_time_rate: float = 0.80,
        seed: int | None = None,
        *,
        today: date | None = None,
        config: LedgerConfig | None = None,
        paid_markers: PaidMarkerStore | None = None,
    ) -> None:
        """Initialize the scenario.

        Parameters
        ----------
        num_clients : int
            Number of clients to generate.
        max_loans_per_client : int
            Each client gets between 1 and this many loans.
        on_time_rate : float
            Share of due installments that get marked paid (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        today : date | None
            Reference day for loan dates and the ledger (default: today).
        config : LedgerConfig | None
            Ledger configuration.
        paid_markers : PaidMarkerStore | None
            Where paid markers go (default: in-memory).
        """
        self.num_clients = num_clients
        self.max_loans_per_client = max_loans_per_client
        self.on_time_rate = on_time_rate
        self.today = today or date.today()
        self.config = config or LedgerConfig()

        self._rng = random.Random(seed)
        self._client_gen = ClientGenerator(seed=seed)
        self._loan_gen = LoanGenerator(seed=seed)

        self.store = PortfolioStore(limits=self.config.limits)
        self.ledger = InstallmentLedger(
            self.store,
            paid_markers if paid_markers is not None else InMemoryPaidMarkerStore(),
            config=self.config,
            clock=lambda: self.today,
        )

    def generate(self) -> InstallmentLedger:
        """Generate all data for the scenario.

        Returns
        -------
        InstallmentLedger
            Ledger over the generated store, regenerated for ``today``.
        """
        logger.info("Starting sample portfolio scenario: %d clients", self.num_clients)

        for client in self._client_gen.generate_batch(self.num_clients):
            self.store.add_client(client)
            for _ in range(self._rng.randint(1, self.max_loans_per_client)):
                loan = self._loan_gen.generate(
                    client.client_id, client.full_name, today=self.today
                )
                self.store.add_loan(loan)

        logger.info("Generated %d loans", len(self.store.loans))

        due = [
            inst
            for inst in self.ledger.regenerate(self.today)
            if inst.status == InstallmentStatus.OVERDUE
        ]
        paid = 0
        for inst in due:
            if self._rng.random() < self.on_time_rate:
                self.ledger.mark_paid(inst.installment_id)
                paid += 1

        logger.info("Marked %d of %d due installments paid", paid, len(due))
        return self.ledger
