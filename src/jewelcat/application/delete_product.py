"""Application service: Delete Product use case (soft delete).

A deleted product no longer counts as a reference to its materials.
"""

from __future__ import annotations

import logging

from jewelcat.domain.exceptions import NotFoundError
from jewelcat.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> None:
        with self._uow:
            product = self._uow.products.get_by_id(product_id, include_deleted=False)
            if product is None:
                raise NotFoundError(f"Product '{product_id}' not found")
            product.mark_deleted()
            self._uow.products.save(product)
            self._uow.commit()

        logger.info("Soft-deleted product %s", product_id)
