"""Sample client generator."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterator

from loan_ledger.generators.base import BaseGenerator
from loan_ledger.models import Client


class ClientGenerator(BaseGenerator):
    """Generate synthetic borrower profiles with valid CPF and phone numbers."""

    # Area codes of the largest metro regions
    AREA_CODES = [11, 21, 31, 41, 51, 61, 71, 81, 85, 91]

    def generate(self) -> Client:
        """Generate a single client.

        Returns
        -------
        Client
            Generated client.
        """
        created_at = datetime.now() - timedelta(days=self.rng.randint(0, 3 * 365))

        return Client(
            client_id=self.fake.uuid4(),
            full_name=self.fake.name(),
            cpf=self.fake.cpf(),
            phone=self._generate_phone(),
            address=self._generate_address(),
            email=self.fake.email(),
            created_at=created_at,
        )

    def generate_batch(self, count: int) -> Iterator[Client]:
        """Generate multiple clients.

        Parameters
        ----------
        count : int
            Number of clients to generate.

        Yields
        ------
        Client
            Generated clients.
        """
        for _ in range(count):
            yield self.generate()

    def _generate_phone(self) -> str:
        """Mobile number formatted as ``(DD) 9XXXX-XXXX``."""
        area = self.rng.choice(self.AREA_CODES)
        return f"({area}) 9{self.rng.randint(1000, 9999)}-{self.rng.randint(1000, 9999)}"

    def _generate_address(self) -> str:
        return (
            f"{self.fake.street_name()}, {self.rng.randint(1, 2000)} - "
            f"{self.fake.city()}/{self.fake.estado_sigla()}"
        )
