"""In-memory stores for clients and loans."""

from loan_ledger.store.portfolio import PortfolioStore

__all__ = ["PortfolioStore"]
