"""Custom exception hierarchy for loan-ledger."""


class LedgerError(Exception):
    """Base exception for all loan-ledger errors."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(LedgerError):
    """Raised when caller-supplied data fails validation."""


class InvalidLoanTermsError(ValidationError):
    """Raised when principal, rate, term or payment dates are not acceptable."""


class InvalidClientDataError(ValidationError):
    """Raised when client fields (CPF, phone, email, name) are malformed."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class StorageError(LedgerError):
    """Raised when a paid-marker store cannot be read or written."""
