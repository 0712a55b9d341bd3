"""Faker-backed sample data generators."""

from loan_ledger.generators.client import ClientGenerator
from loan_ledger.generators.loan import LoanGenerator

__all__ = ["ClientGenerator", "LoanGenerator"]
