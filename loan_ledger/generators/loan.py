"""Sample loan generator."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from loan_ledger.amortization import compute_amortization
from loan_ledger.generators.base import BaseGenerator
from loan_ledger.models import Loan


class LoanGenerator(BaseGenerator):
    """Generate synthetic flat-rate loans for existing clients."""

    TERMS = [3, 6, 10, 12, 18, 24]
    # Periodic rates in percent, weighted toward the common 5-10% band
    RATES = [Decimal("0"), Decimal("5"), Decimal("8"), Decimal("10"), Decimal("15"), Decimal("20")]
    RATE_WEIGHTS = [0.05, 0.30, 0.30, 0.20, 0.10, 0.05]

    def generate(
        self,
        client_id: str,
        client_name: str = "",
        today: date | None = None,
    ) -> Loan:
        """Generate a loan originated within the last year.

        Parameters
        ----------
        client_id : str
            Borrower id.
        client_name : str
            Borrower name copied onto the loan.
        today : date | None
            Reference day for origination dates (default: today).

        Returns
        -------
        Loan
            Loan with amortization fields filled in.
        """
        today = today or date.today()

        principal = Decimal(self.rng.randint(5, 200) * 100)
        rate = self.rng.choices(self.RATES, weights=self.RATE_WEIGHTS, k=1)[0]
        term = self.rng.choice(self.TERMS)

        loan_date = today - timedelta(days=self.rng.randint(0, 365))
        # First payment usually a month after origination
        first_payment_date = loan_date + timedelta(days=self.rng.choice([7, 15, 30, 30, 30]))

        result = compute_amortization(principal, rate, term)

        return Loan(
            loan_id=self.fake.uuid4(),
            client_id=client_id,
            client_name=client_name,
            principal=principal,
            interest_rate=rate,
            term=term,
            loan_date=loan_date,
            first_payment_date=first_payment_date,
            total_amount=result.total_amount,
            periodic_payment=result.periodic_payment,
        )
