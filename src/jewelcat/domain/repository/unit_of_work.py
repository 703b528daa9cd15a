"""Abstract unit of work.

Groups the repositories that must change together.  A price update and
its audit entry are committed through the same unit of work, so either
both become visible or neither does.

Usage::

    with uow:
        material = uow.materials.get_by_id(material_id)
        ...
        uow.commit()

Leaving the block without ``commit()`` (including by exception) discards
every change made inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelcat.domain.repository.material_repository import MaterialRepository
from jewelcat.domain.repository.price_history_repository import PriceHistoryRepository
from jewelcat.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    materials: MaterialRepository
    products: ProductRepository
    price_history: PriceHistoryRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._end()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since entering the block durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes; a no-op after ``commit()``."""

    @abstractmethod
    def _begin(self) -> None:
        """Load fresh state and bind the repositories."""

    def _end(self) -> None:
        """Release anything acquired in ``_begin``."""
