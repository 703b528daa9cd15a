"""Domain service: Reference Guard.

Answers "is this material still in use?" before a soft delete.  A
material is in use when any active product has a composition line that
references it, whichever variant the line points at.

This is a check-then-act guard evaluated synchronously at deletion time.
Callers run it inside the same unit of work as the delete.
"""

from __future__ import annotations

import logging

from jewelcat.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ReferenceGuard:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def count_references(self, material_id: str) -> int:
        """Number of active products that reference *material_id*."""
        count = sum(
            1
            for product in self._product_repo.list_all(include_deleted=False)
            if product.references(material_id)
        )
        logger.debug("Material %s referenced by %d active product(s)", material_id, count)
        return count
