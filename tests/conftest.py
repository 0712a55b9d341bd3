"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_ledger.ledger import InMemoryPaidMarkerStore, InstallmentLedger
from loan_ledger.models import Client, Loan
from loan_ledger.store import PortfolioStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Reference day for every ledger pass in the suite."""
    return date(2024, 6, 15)


@pytest.fixture
def paid_at() -> datetime:
    """Timestamp recorded when an installment is marked paid."""
    return datetime(2024, 6, 15, 14, 30)


@pytest.fixture
def sample_client() -> Client:
    """Sample client."""
    return Client(
        client_id="client-001",
        full_name="Maria Silva",
        cpf="529.982.247-25",
        phone="(11) 91234-5678",
    )


@pytest.fixture
def sample_loan(sample_client: Client) -> Loan:
    """5000 at 20% over 10 installments, first payment 10 days before ``today``."""
    return Loan(
        loan_id="loan-001",
        client_id=sample_client.client_id,
        client_name=sample_client.full_name,
        principal=Decimal("5000"),
        interest_rate=Decimal("20"),
        term=10,
        loan_date=date(2024, 6, 1),
        first_payment_date=date(2024, 6, 5),
        total_amount=Decimal("15000"),
        periodic_payment=Decimal("1500"),
    )


@pytest.fixture
def store(sample_client: Client, sample_loan: Loan) -> PortfolioStore:
    """Store holding the sample client and loan."""
    store = PortfolioStore()
    store.add_client(sample_client)
    store.add_loan(sample_loan)
    return store


@pytest.fixture
def paid_markers() -> InMemoryPaidMarkerStore:
    """Empty in-memory paid-marker store."""
    return InMemoryPaidMarkerStore()


@pytest.fixture
def ledger(
    store: PortfolioStore,
    paid_markers: InMemoryPaidMarkerStore,
    today: date,
    paid_at: datetime,
) -> InstallmentLedger:
    """Ledger with a fixed clock."""
    return InstallmentLedger(
        store,
        paid_markers,
        clock=lambda: today,
        now=lambda: paid_at,
    )
