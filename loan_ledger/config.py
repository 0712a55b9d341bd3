"""Configuration management for loan-ledger."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path

from loan_ledger.exceptions import ConfigurationError

MISSING_CLIENT_POLICIES = ("skip", "raise")


@dataclass
class LoanLimits:
    """Upper bounds accepted when creating or editing a loan."""

    max_principal: Decimal = Decimal("1000000")
    max_interest_rate: Decimal = Decimal("100")  # percent per installment period
    max_term: int = 60


@dataclass
class LedgerConfig:
    """Main configuration for loan-ledger."""

    daily_late_fee: Decimal = Decimal("10")
    on_missing_client: str = "skip"
    paid_markers_path: Path | None = None
    limits: LoanLimits = field(default_factory=LoanLimits)
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Check field values, raising ``ConfigurationError`` on the first bad one."""
        if self.on_missing_client not in MISSING_CLIENT_POLICIES:
            raise ConfigurationError(
                f"on_missing_client must be one of {MISSING_CLIENT_POLICIES}, "
                f"got {self.on_missing_client!r}"
            )
        if self.daily_late_fee < 0:
            raise ConfigurationError(f"daily_late_fee must be >= 0, got {self.daily_late_fee}")
        if self.log_format not in ("standard", "json"):
            raise ConfigurationError(f"log_format must be 'standard' or 'json', got {self.log_format!r}")

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        fee_str = os.getenv("LEDGER_DAILY_LATE_FEE", "10")
        try:
            daily_late_fee = Decimal(fee_str)
        except InvalidOperation as exc:
            raise ConfigurationError(f"LEDGER_DAILY_LATE_FEE is not a number: {fee_str!r}") from exc

        paid_path = os.getenv("LEDGER_PAID_MARKERS_PATH")

        config = cls(
            daily_late_fee=daily_late_fee,
            on_missing_client=os.getenv("LEDGER_ON_MISSING_CLIENT", "skip").lower(),
            paid_markers_path=Path(paid_path) if paid_path else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard").lower(),
        )
        config.validate()
        return config
