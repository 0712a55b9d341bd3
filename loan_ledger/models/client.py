"""Client (borrower) model."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Client:
    """Borrower profile."""

    client_id: str
    full_name: str
    cpf: str = ""
    phone: str = ""
    address: str = ""
    email: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime | None = None
