"""Application service: Reprice Catalog use case (query).

Prices every active product against one catalog snapshot.  A product
that cannot be priced, whether its composition no longer resolves or its
amounts do not combine, is reported as "price unavailable" with the
reason; it never gets a number.  Nothing is written back.
"""

from __future__ import annotations

import logging

from jewelcat.application.dto import ProductPriceDTO
from jewelcat.application.price_product import price_product, to_price_dto, unavailable
from jewelcat.domain.exceptions import DomainException
from jewelcat.domain.model.catalog_snapshot import CatalogSnapshot
from jewelcat.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RepriceCatalogHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ProductPriceDTO]:
        with self._uow:
            products = self._uow.products.list_all(include_deleted=False)
            snapshot = CatalogSnapshot.of(self._uow.materials.list_all(include_deleted=False))

        results: list[ProductPriceDTO] = []
        for product in sorted(products, key=lambda p: p.id):
            try:
                results.append(to_price_dto(product, price_product(product, snapshot)))
            except DomainException as exc:
                logger.warning("Price unavailable for product %s: %s", product.id, exc)
                results.append(unavailable(product, str(exc)))

        logger.info(
            "Repriced %d product(s), %d unavailable",
            len(results), sum(1 for r in results if not r.available),
        )
        return results
