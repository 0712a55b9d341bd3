"""Input validation for loan terms and client records.

The amortization calculator and schedule generator trust their inputs, so
every create/edit path in :mod:`loan_ledger.store.portfolio` runs these
checks first.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from loan_ledger.config import LoanLimits
from loan_ledger.exceptions import InvalidClientDataError, InvalidLoanTermsError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Brazilian phone, with or without +55 and area code
PHONE_RE = re.compile(r"^(\+55\s?)?(\(?\d{2}\)?\s?)?\d{4,5}-?\d{4}$")


def to_decimal(value: object, name: str) -> Decimal:
    """Convert a caller-supplied amount, raising ``InvalidLoanTermsError`` if it is not a number."""
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidLoanTermsError(f"{name} must be a number, got {value!r}") from exc


def validate_loan_terms(
    principal: Decimal,
    interest_rate: Decimal,
    term: int,
    limits: LoanLimits | None = None,
) -> None:
    """Reject loan terms that would make amortization degenerate.

    Raises
    ------
    InvalidLoanTermsError
        If principal is not in ``(0, max_principal]``, the rate is not in
        ``[0, max_interest_rate]`` or the term is not an integer in
        ``[1, max_term]``.
    """
    limits = limits or LoanLimits()

    if isinstance(term, bool) or not isinstance(term, int):
        raise InvalidLoanTermsError(f"Term must be an integer, got {term!r}")
    if term <= 0:
        raise InvalidLoanTermsError(f"Term must be positive, got {term}")
    if term > limits.max_term:
        raise InvalidLoanTermsError(f"Term {term} exceeds maximum of {limits.max_term}")

    principal = to_decimal(principal, "Principal")
    if not principal.is_finite() or principal <= 0:
        raise InvalidLoanTermsError(f"Principal must be positive, got {principal}")
    if principal > limits.max_principal:
        raise InvalidLoanTermsError(
            f"Principal {principal} exceeds maximum of {limits.max_principal}"
        )

    rate = to_decimal(interest_rate, "Interest rate")
    if not rate.is_finite() or rate < 0:
        raise InvalidLoanTermsError(f"Interest rate must be >= 0, got {rate}")
    if rate > limits.max_interest_rate:
        raise InvalidLoanTermsError(
            f"Interest rate {rate} exceeds maximum of {limits.max_interest_rate}"
        )


def validate_payment_dates(loan_date: date, first_payment_date: date | None) -> None:
    """Ensure the first payment does not precede the loan origination date."""
    if first_payment_date is not None and first_payment_date < loan_date:
        raise InvalidLoanTermsError(
            f"First payment date {first_payment_date} precedes loan date {loan_date}"
        )


def validate_cpf(cpf: str) -> bool:
    """Check a Brazilian CPF number, including both check digits."""
    digits = re.sub(r"\D", "", cpf)

    if len(digits) != 11:
        return False
    # 000.000.000-00, 111.111.111-11, ... pass the checksum but are invalid
    if digits == digits[0] * 11:
        return False

    for check_pos in (9, 10):
        total = sum(int(digits[i]) * (check_pos + 1 - i) for i in range(check_pos))
        remainder = (total * 10) % 11
        if remainder == 10:
            remainder = 0
        if remainder != int(digits[check_pos]):
            return False

    return True


def validate_email(email: str) -> bool:
    """Loose e-mail shape check."""
    return bool(EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    """Brazilian landline or mobile number."""
    return bool(PHONE_RE.match(phone))


def sanitize_input(value: str) -> str:
    """Trim whitespace and strip angle brackets."""
    return value.strip().replace("<", "").replace(">", "")


def validate_client_fields(
    full_name: str,
    cpf: str = "",
    phone: str = "",
    email: str = "",
) -> None:
    """Validate client fields; empty optional fields are accepted.

    Raises
    ------
    InvalidClientDataError
        On the first malformed field.
    """
    if not sanitize_input(full_name):
        raise InvalidClientDataError("Client name is required")
    if cpf and not validate_cpf(cpf):
        raise InvalidClientDataError(f"Invalid CPF: {cpf}")
    if phone and not validate_phone(phone):
        raise InvalidClientDataError(f"Invalid phone: {phone}")
    if email and not validate_email(email):
        raise InvalidClientDataError(f"Invalid email: {email}")
