"""Client and loan collections with referential integrity."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_ledger.amortization import compute_amortization
from loan_ledger.config import LoanLimits
from loan_ledger.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from loan_ledger.models import Client, Loan, LoanStatus
from loan_ledger.validation import (
    sanitize_input,
    to_decimal,
    validate_client_fields,
    validate_loan_terms,
    validate_payment_dates,
)

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ("full_name", "cpf", "phone", "address", "email")


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class PortfolioStore:
    """In-memory store for clients and their loans.

    Installments are not stored: they are derived from the loans on every
    ledger pass, so deleting a loan (or a client, which cascades to its
    loans) removes its installments from the next schedule.
    """

    clients: dict[str, Client] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)
    limits: LoanLimits = field(default_factory=LoanLimits)

    # Relationship indexes
    _client_loans: dict[str, list[str]] = field(default_factory=dict)

    # Clients

    def add_client(self, client: Client) -> None:
        """Add a client to the store."""
        self.clients[client.client_id] = client
        self._client_loans.setdefault(client.client_id, [])

    def create_client(
        self,
        full_name: str,
        cpf: str = "",
        phone: str = "",
        address: str = "",
        email: str = "",
    ) -> Client:
        """Validate the fields and add a new client with a generated id."""
        full_name = sanitize_input(full_name)
        address = sanitize_input(address)
        validate_client_fields(full_name, cpf=cpf, phone=phone, email=email)

        client = Client(
            client_id=_new_id(),
            full_name=full_name,
            cpf=cpf,
            phone=phone,
            address=address,
            email=email,
        )
        self.add_client(client)
        logger.info("Created client %s", client.client_id)
        return client

    def edit_client(self, client_id: str, **changes: str) -> Client:
        """Update client fields; a name change is copied onto the client's loans."""
        client = self.get_client(client_id)

        unknown = set(changes) - set(CLIENT_FIELDS)
        if unknown:
            raise TypeError(f"Unknown client fields: {sorted(unknown)}")

        updated = {name: getattr(client, name) for name in CLIENT_FIELDS}
        updated.update({name: sanitize_input(value) for name, value in changes.items()})
        validate_client_fields(
            updated["full_name"],
            cpf=updated["cpf"],
            phone=updated["phone"],
            email=updated["email"],
        )

        for name, value in updated.items():
            setattr(client, name, value)
        client.updated_at = datetime.now()

        if "full_name" in changes:
            for loan in self.get_client_loans(client_id):
                loan.client_name = client.full_name
                loan.updated_at = client.updated_at

        return client

    def delete_client(self, client_id: str) -> list[str]:
        """Delete a client and, first, every loan it holds.

        Returns
        -------
        list[str]
            Ids of the deleted loans.
        """
        self.get_client(client_id)

        loan_ids = list(self._client_loans.get(client_id, []))
        for loan_id in loan_ids:
            self.delete_loan(loan_id)

        del self.clients[client_id]
        self._client_loans.pop(client_id, None)
        logger.info("Deleted client %s with %d loans", client_id, len(loan_ids))
        return loan_ids

    def get_client(self, client_id: str) -> Client:
        """Get a client by id."""
        try:
            return self.clients[client_id]
        except KeyError:
            raise EntityNotFoundError(f"Client {client_id} not found") from None

    # Loans

    def add_loan(self, loan: Loan) -> None:
        """Add a loan to the store."""
        if loan.client_id not in self.clients:
            raise ReferentialIntegrityError(f"Client {loan.client_id} not found")

        self.loans[loan.loan_id] = loan
        self._client_loans[loan.client_id].append(loan.loan_id)

    def create_loan(
        self,
        client_id: str,
        principal: Decimal,
        interest_rate: Decimal,
        term: int,
        loan_date: date,
        first_payment_date: date | None = None,
    ) -> Loan:
        """Validate the terms, compute amortization and add a new loan.

        Raises
        ------
        ReferentialIntegrityError
            If the client does not exist.
        InvalidLoanTermsError
            If the terms or dates are not acceptable.
        """
        if client_id not in self.clients:
            raise ReferentialIntegrityError(f"Client {client_id} not found")

        principal = to_decimal(principal, "Principal")
        interest_rate = to_decimal(interest_rate, "Interest rate")
        validate_loan_terms(principal, interest_rate, term, self.limits)
        validate_payment_dates(loan_date, first_payment_date)

        result = compute_amortization(principal, interest_rate, term)
        loan = Loan(
            loan_id=_new_id(),
            client_id=client_id,
            client_name=self.clients[client_id].full_name,
            principal=principal,
            interest_rate=interest_rate,
            term=term,
            loan_date=loan_date,
            first_payment_date=first_payment_date or loan_date,
            total_amount=result.total_amount,
            periodic_payment=result.periodic_payment,
        )
        self.add_loan(loan)
        logger.info(
            "Created loan %s for client %s: %s over %d installments",
            loan.loan_id,
            client_id,
            loan.total_amount,
            term,
        )
        return loan

    def edit_loan_rate(self, loan_id: str, new_rate: Decimal) -> Loan:
        """Change a loan's rate and recompute its total and periodic amounts.

        Installment identities are untouched; unpaid installments pick up the
        new periodic payment on the next ledger pass.
        """
        loan = self.get_loan(loan_id)
        if loan.status == LoanStatus.COMPLETED:
            raise InvalidEntityStateError(f"Loan {loan_id} is completed")
        new_rate = to_decimal(new_rate, "Interest rate")
        validate_loan_terms(loan.principal, new_rate, loan.term, self.limits)

        result = compute_amortization(loan.principal, new_rate, loan.term)
        loan.interest_rate = new_rate
        loan.total_amount = result.total_amount
        loan.periodic_payment = result.periodic_payment
        loan.updated_at = datetime.now()

        logger.info("Loan %s rate changed to %s%%", loan_id, new_rate)
        return loan

    def delete_loan(self, loan_id: str) -> None:
        """Delete a loan; its installments disappear from the next schedule."""
        loan = self.get_loan(loan_id)

        del self.loans[loan_id]
        client_loans = self._client_loans.get(loan.client_id, [])
        if loan_id in client_loans:
            client_loans.remove(loan_id)
        logger.info("Deleted loan %s", loan_id)

    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by id."""
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    # Query methods

    def get_client_loans(self, client_id: str) -> list[Loan]:
        """Get all loans for a client."""
        loan_ids = self._client_loans.get(client_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "clients": len(self.clients),
            "loans": len(self.loans),
            "scheduled_installments": sum(loan.term for loan in self.loans.values()),
        }
