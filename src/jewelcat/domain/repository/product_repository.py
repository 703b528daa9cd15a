"""Abstract repository for Product aggregate (composition store)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelcat.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str, *, include_deleted: bool = False) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, *, include_deleted: bool = False) -> list[Product]:
        """Return every product, active ones only unless asked otherwise."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
