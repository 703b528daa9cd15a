"""Application service: Price Product use case (query).

Prices are never stored.  Each request captures a snapshot of the
active catalog and recomputes from it, so a material price change is
visible on the very next read.
"""

from __future__ import annotations

from jewelcat.application.dto import ProductPriceDTO
from jewelcat.application.mapping import line_cost_to_dto
from jewelcat.domain.exceptions import NotFoundError
from jewelcat.domain.model.catalog_snapshot import CatalogSnapshot
from jewelcat.domain.model.product import Product
from jewelcat.domain.repository.unit_of_work import UnitOfWork
from jewelcat.domain.service import composition_pricer
from jewelcat.domain.service.price_quote import PriceQuote, quote


class PriceProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> ProductPriceDTO:
        """Return the current price of a product.

        Raises DanglingReferenceError or InactiveVariantError when the
        composition no longer resolves; no partial figure is produced.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id, include_deleted=False)
            if product is None:
                raise NotFoundError(f"Product '{product_id}' not found")
            snapshot = CatalogSnapshot.of(self._uow.materials.list_all(include_deleted=False))

        return to_price_dto(product, price_product(product, snapshot))


def price_product(product: Product, snapshot: CatalogSnapshot) -> PriceQuote:
    breakdown = composition_pricer.price(product.lines, snapshot)
    return quote(
        breakdown,
        additional_charges=product.additional_charges,
        gst_percentage=product.gst_percentage,
        discount=product.discount,
    )


def to_price_dto(product: Product, result: PriceQuote) -> ProductPriceDTO:
    return ProductPriceDTO(
        product_id=product.id,
        product_name=product.name,
        available=True,
        lines=[line_cost_to_dto(cost) for cost in result.breakdown.lines],
        subtotal=str(result.subtotal),
        additional_charges=str(result.additional_charges),
        gst=str(result.gst_amount),
        discount=str(result.discount_amount),
        final_price=str(result.final_price),
    )


def unavailable(product: Product, reason: str) -> ProductPriceDTO:
    return ProductPriceDTO(
        product_id=product.id,
        product_name=product.name,
        available=False,
        unavailable_reason=reason,
    )
