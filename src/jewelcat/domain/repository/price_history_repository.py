"""Abstract append-only repository for the price audit log.

Entries are never updated or removed once appended.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from jewelcat.domain.model.price_history import PriceHistoryEntry


class PriceHistoryRepository(ABC):

    @abstractmethod
    def append(self, entry: PriceHistoryEntry) -> None:
        """Record *entry* at the end of the ledger."""

    @abstractmethod
    def query(self, entity_id: str | None = None) -> Iterable[PriceHistoryEntry]:
        """Return entries newest first, optionally for one material.

        The result is lazy, finite and restartable: iterating it twice
        yields the same entries both times.
        """
