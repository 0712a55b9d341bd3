"""Paid-marker stores: the single source of truth for "paid".

Installments are never mutated directly. Whether an installment is paid is
decided by membership of its id in a :class:`PaidMarkerStore`, which the
schedule generator consults on every pass.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator, Protocol

from loan_ledger.exceptions import StorageError
from loan_ledger.models import PaidMarker
from loan_ledger.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class PaidMarkerStore(Protocol):
    """Append-only set of paid installment ids."""

    def contains(self, installment_id: str) -> bool: ...

    def add(self, marker: PaidMarker) -> None: ...

    def get(self, installment_id: str) -> PaidMarker | None: ...

    def __iter__(self) -> Iterator[PaidMarker]: ...


class InMemoryPaidMarkerStore:
    """Dict-backed paid-marker store."""

    def __init__(self, markers: list[PaidMarker] | None = None) -> None:
        self._markers: dict[str, PaidMarker] = {}
        for marker in markers or []:
            self.add(marker)

    def contains(self, installment_id: str) -> bool:
        return installment_id in self._markers

    def add(self, marker: PaidMarker) -> None:
        """Record a marker. An id that is already present keeps its first marker."""
        self._markers.setdefault(marker.installment_id, marker)

    def get(self, installment_id: str) -> PaidMarker | None:
        return self._markers.get(installment_id)

    def __iter__(self) -> Iterator[PaidMarker]:
        return iter(list(self._markers.values()))

    def __len__(self) -> int:
        return len(self._markers)

    def __contains__(self, installment_id: object) -> bool:
        return installment_id in self._markers


class JsonFilePaidMarkerStore(InMemoryPaidMarkerStore):
    """Paid-marker store persisted to a JSON file.

    The file is loaded once on construction and rewritten after every
    ``add`` so marked installments survive restarts.

    Parameters
    ----------
    path : str | Path
        JSON file holding a list of markers. Created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        for marker in self._load():
            self._markers.setdefault(marker.installment_id, marker)
        logger.debug("Loaded %d paid markers from %s", len(self._markers), self.path)

    def add(self, marker: PaidMarker) -> None:
        """Write the file with ``marker`` appended, then record it in memory.

        A failed write raises ``StorageError`` and leaves the store as it was.
        """
        if self.contains(marker.installment_id):
            return
        self._save([*self._markers.values(), marker])
        self._markers[marker.installment_id] = marker

    def _load(self) -> list[PaidMarker]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            return [_marker_from_dict(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError, InvalidOperation) as exc:
            raise StorageError(f"Cannot read paid markers from {self.path}: {exc}") from exc

    def _save(self, markers: list[PaidMarker]) -> None:
        data = [to_dict(marker) for marker in markers]
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write paid markers to {self.path}: {exc}") from exc


def _marker_from_dict(data: dict | str) -> PaidMarker:
    """Rebuild a marker written by :func:`to_dict`; legacy entries may be bare ids."""
    if isinstance(data, str):
        return PaidMarker(installment_id=data, paid_at=datetime.now())

    base_amount = data.get("base_amount")
    return PaidMarker(
        installment_id=data["installment_id"],
        paid_at=datetime.fromisoformat(data["paid_at"]),
        base_amount=Decimal(base_amount) if base_amount is not None else None,
        late_fee=Decimal(data.get("late_fee", "0")),
    )
