"""Flat-rate amortization for installment loans.

Interest is simple (non-compounding): the periodic rate is charged once per
installment period on the original principal, so every installment carries
the same payment amount.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationResult:
    """Derived repayment figures for a loan."""

    total_amount: Decimal
    periodic_payment: Decimal
    total_interest: Decimal


def compute_amortization(
    principal: Decimal,
    periodic_rate_percent: Decimal,
    term_count: int,
) -> AmortizationResult:
    """Compute total repayable amount and the fixed periodic payment.

    Parameters
    ----------
    principal : Decimal
        Amount lent. Must be positive.
    periodic_rate_percent : Decimal
        Interest percentage charged per installment period (``20`` = 20%).
    term_count : int
        Number of installments. Must be a positive integer; callers
        validate with :func:`loan_ledger.validation.validate_loan_terms`.

    Returns
    -------
    AmortizationResult
        ``total_amount = principal + principal * rate * term / 100`` and
        ``periodic_payment = total_amount / term``, unrounded.
    """
    principal = Decimal(principal)
    rate = Decimal(periodic_rate_percent)

    total_interest = principal * rate * term_count / 100
    total_amount = principal + total_interest

    return AmortizationResult(
        total_amount=total_amount,
        periodic_payment=total_amount / term_count,
        total_interest=total_interest,
    )
