"""Tests for PortfolioStore."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_ledger.config import LoanLimits
from loan_ledger.exceptions import (
    EntityNotFoundError,
    InvalidClientDataError,
    InvalidEntityStateError,
    InvalidLoanTermsError,
    ReferentialIntegrityError,
)
from loan_ledger.models import Client, Loan, LoanStatus
from loan_ledger.store import PortfolioStore


@pytest.fixture
def empty_store() -> PortfolioStore:
    """Create a fresh store for each test."""
    return PortfolioStore()


class TestClients:
    """Tests for client operations."""

    def test_add_client(self, empty_store: PortfolioStore, sample_client: Client) -> None:
        empty_store.add_client(sample_client)

        assert empty_store.clients["client-001"] == sample_client
        assert empty_store.get_client_loans("client-001") == []

    def test_create_client(self, empty_store: PortfolioStore) -> None:
        client = empty_store.create_client(
            "  Ana <b>Lima</b> ",
            cpf="529.982.247-25",
            phone="(21) 98765-4321",
            address="Rua A, 10",
            email="ana@example.com",
        )

        assert client.client_id in empty_store.clients
        assert client.full_name == "Ana bLima/b"
        assert client.cpf == "529.982.247-25"
        assert isinstance(client.created_at, datetime)

    def test_create_client_generates_unique_ids(self, empty_store: PortfolioStore) -> None:
        ids = {empty_store.create_client(f"Client {i}").client_id for i in range(5)}

        assert len(ids) == 5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"full_name": "   "},
            {"full_name": "Ana", "cpf": "111.111.111-11"},
            {"full_name": "Ana", "phone": "123"},
            {"full_name": "Ana", "email": "not-an-email"},
        ],
    )
    def test_create_client_rejects_bad_fields(
        self, empty_store: PortfolioStore, kwargs: dict
    ) -> None:
        with pytest.raises(InvalidClientDataError):
            empty_store.create_client(**kwargs)

        assert empty_store.clients == {}

    def test_get_unknown_client(self, empty_store: PortfolioStore) -> None:
        with pytest.raises(EntityNotFoundError, match="Client nope not found"):
            empty_store.get_client("nope")

    def test_edit_client_propagates_name(self, store: PortfolioStore) -> None:
        client = store.edit_client("client-001", full_name="Maria Souza")

        assert client.full_name == "Maria Souza"
        assert client.updated_at is not None
        assert store.get_loan("loan-001").client_name == "Maria Souza"

    def test_edit_client_phone_only(self, store: PortfolioStore) -> None:
        store.edit_client("client-001", phone="(31) 3333-4444")

        assert store.get_client("client-001").phone == "(31) 3333-4444"
        assert store.get_loan("loan-001").client_name == "Maria Silva"

    def test_edit_client_invalid_leaves_client_unchanged(self, store: PortfolioStore) -> None:
        with pytest.raises(InvalidClientDataError):
            store.edit_client("client-001", cpf="123")

        assert store.get_client("client-001").cpf == "529.982.247-25"

    def test_edit_client_unknown_field(self, store: PortfolioStore) -> None:
        with pytest.raises(TypeError):
            store.edit_client("client-001", nickname="Mari")

    def test_delete_client_cascades(self, store: PortfolioStore) -> None:
        second = store.create_loan("client-001", Decimal("100"), Decimal("0"), 2, date(2024, 1, 1))

        deleted = store.delete_client("client-001")

        assert sorted(deleted) == sorted(["loan-001", second.loan_id])
        assert store.clients == {}
        assert store.loans == {}

    def test_delete_client_keeps_other_clients_loans(self, store: PortfolioStore) -> None:
        other = store.create_client("João Souza")
        loan = store.create_loan(other.client_id, Decimal("100"), Decimal("0"), 2, date(2024, 1, 1))

        store.delete_client("client-001")

        assert list(store.loans) == [loan.loan_id]

    def test_delete_unknown_client(self, empty_store: PortfolioStore) -> None:
        with pytest.raises(EntityNotFoundError):
            empty_store.delete_client("nope")


class TestLoans:
    """Tests for loan operations."""

    def test_add_loan_requires_client(self, empty_store: PortfolioStore, sample_loan: Loan) -> None:
        with pytest.raises(ReferentialIntegrityError, match="client-001"):
            empty_store.add_loan(sample_loan)

    def test_create_loan_computes_amortization(self, store: PortfolioStore) -> None:
        loan = store.create_loan(
            "client-001",
            Decimal("5000"),
            Decimal("20"),
            10,
            date(2024, 6, 1),
            first_payment_date=date(2024, 7, 1),
        )

        assert loan.total_amount == Decimal("15000")
        assert loan.periodic_payment == Decimal("1500")
        assert loan.client_name == "Maria Silva"
        assert loan.status == LoanStatus.ACTIVE
        assert loan.first_payment_date == date(2024, 7, 1)
        assert store.get_client_loans("client-001")[-1] == loan

    def test_create_loan_default_first_payment(self, store: PortfolioStore) -> None:
        loan = store.create_loan("client-001", 1000, 5, 4, date(2024, 6, 1))

        assert loan.first_payment_date == date(2024, 6, 1)
        assert loan.principal == Decimal("1000")

    def test_create_loan_unknown_client(self, store: PortfolioStore) -> None:
        with pytest.raises(ReferentialIntegrityError):
            store.create_loan("nope", Decimal("1000"), Decimal("5"), 4, date(2024, 6, 1))

    @pytest.mark.parametrize(
        "principal,rate,term",
        [
            (Decimal("0"), Decimal("5"), 4),
            (Decimal("-100"), Decimal("5"), 4),
            (Decimal("1000"), Decimal("-1"), 4),
            (Decimal("1000"), Decimal("5"), 0),
            (Decimal("1000"), Decimal("5"), -3),
        ],
    )
    def test_create_loan_rejects_bad_terms(
        self, store: PortfolioStore, principal: Decimal, rate: Decimal, term: int
    ) -> None:
        with pytest.raises(InvalidLoanTermsError):
            store.create_loan("client-001", principal, rate, term, date(2024, 6, 1))

        assert list(store.loans) == ["loan-001"]

    def test_create_loan_first_payment_before_loan_date(self, store: PortfolioStore) -> None:
        with pytest.raises(InvalidLoanTermsError, match="precedes"):
            store.create_loan(
                "client-001",
                Decimal("1000"),
                Decimal("5"),
                4,
                date(2024, 6, 1),
                first_payment_date=date(2024, 5, 31),
            )

    def test_store_limits_apply(self, sample_client: Client) -> None:
        store = PortfolioStore(limits=LoanLimits(max_term=12))
        store.add_client(sample_client)

        with pytest.raises(InvalidLoanTermsError, match="maximum"):
            store.create_loan("client-001", Decimal("1000"), Decimal("5"), 24, date(2024, 6, 1))

    def test_edit_loan_rate(self, store: PortfolioStore) -> None:
        loan = store.edit_loan_rate("loan-001", Decimal("10"))

        assert loan.interest_rate == Decimal("10")
        assert loan.total_amount == Decimal("10000")
        assert loan.periodic_payment == Decimal("1000")
        assert loan.updated_at is not None

    def test_edit_loan_rate_to_zero(self, store: PortfolioStore) -> None:
        loan = store.edit_loan_rate("loan-001", 0)

        assert loan.total_amount == Decimal("5000")
        assert loan.periodic_payment == Decimal("500")

    def test_edit_loan_rate_invalid_leaves_loan_unchanged(self, store: PortfolioStore) -> None:
        with pytest.raises(InvalidLoanTermsError):
            store.edit_loan_rate("loan-001", Decimal("-5"))

        loan = store.get_loan("loan-001")
        assert loan.interest_rate == Decimal("20")
        assert loan.total_amount == Decimal("15000")
        assert loan.updated_at is None

    def test_create_loan_non_numeric_amount(self, store: PortfolioStore) -> None:
        with pytest.raises(InvalidLoanTermsError, match="Principal must be a number"):
            store.create_loan("client-001", "lots", Decimal("5"), 4, date(2024, 6, 1))

    def test_edit_loan_rate_non_numeric(self, store: PortfolioStore) -> None:
        with pytest.raises(InvalidLoanTermsError, match="Interest rate must be a number"):
            store.edit_loan_rate("loan-001", "high")

        assert store.get_loan("loan-001").interest_rate == Decimal("20")

    def test_edit_completed_loan_rate(self, store: PortfolioStore) -> None:
        store.get_loan("loan-001").status = LoanStatus.COMPLETED

        with pytest.raises(InvalidEntityStateError, match="completed"):
            store.edit_loan_rate("loan-001", Decimal("10"))

    def test_edit_unknown_loan(self, store: PortfolioStore) -> None:
        with pytest.raises(EntityNotFoundError, match="Loan nope not found"):
            store.edit_loan_rate("nope", Decimal("5"))

    def test_delete_loan(self, store: PortfolioStore) -> None:
        store.delete_loan("loan-001")

        assert store.loans == {}
        assert store.get_client_loans("client-001") == []
        assert "client-001" in store.clients

    def test_delete_unknown_loan(self, store: PortfolioStore) -> None:
        with pytest.raises(EntityNotFoundError):
            store.delete_loan("nope")


class TestSummary:
    """Tests for summary counts."""

    def test_summary(self, store: PortfolioStore) -> None:
        store.create_loan("client-001", Decimal("100"), Decimal("0"), 2, date(2024, 1, 1))

        assert store.summary() == {
            "clients": 1,
            "loans": 2,
            "scheduled_installments": 12,
        }

    def test_empty_summary(self, empty_store: PortfolioStore) -> None:
        assert empty_store.summary() == {
            "clients": 0,
            "loans": 0,
            "scheduled_installments": 0,
        }
