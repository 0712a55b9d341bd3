"""Scenarios for generating sample loan portfolios."""

from loan_ledger.scenarios.portfolio import SamplePortfolioScenario

__all__ = ["SamplePortfolioScenario"]
