"""Application service: Save Product use case.

Creates a product or replaces the composition of an existing one.
Every line is checked against the active catalog at save time and the
addressed variant's ``variant_id`` is captured into the line.  Later
material edits do not revalidate saved products; the pricer reports
any slot that no longer matches.
"""

from __future__ import annotations

import logging

from jewelcat.application.dto import CompositionLineSpec, ProductSpec
from jewelcat.application.mapping import build_line, parse_kind
from jewelcat.domain.exceptions import InactiveVariantError, NotFoundError, ValidationError
from jewelcat.domain.model.product import (
    DEFAULT_GST,
    AdditionalCharge,
    CompositionLine,
    Discount,
    DiscountType,
    Product,
    is_index,
)
from jewelcat.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    Money,
    Percentage,
    to_decimal,
)
from jewelcat.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SaveProductHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        currency: str = DEFAULT_CURRENCY,
        default_gst: Percentage = DEFAULT_GST,
    ) -> None:
        self._uow = uow
        self._currency = currency
        self._default_gst = default_gst

    def handle(self, spec: ProductSpec) -> Product:
        with self._uow:
            product_id = spec.id or self._uow.products.next_id()
            existing = self._uow.products.get_by_id(product_id, include_deleted=True)
            if existing is not None and existing.is_deleted:
                raise NotFoundError(f"Product '{product_id}' has been deleted")

            product = Product.create(
                id=product_id,
                name=spec.name,
                lines=[self._validated_line(line) for line in spec.lines],
                additional_charges=[
                    AdditionalCharge(label=label, amount=Money.of(amount, self._currency))
                    for label, amount in spec.additional_charges
                ],
                gst_percentage=(
                    Percentage.parse(spec.gst_percentage)
                    if spec.gst_percentage is not None
                    else self._default_gst
                ),
                discount=self._discount(spec),
            )
            self._uow.products.save(product)
            self._uow.commit()

        logger.info(
            "%s product %s with %d composition line(s)",
            "Updated" if existing else "Created", product.id, len(product.lines),
        )
        return product

    # --- Internal helpers -----------------------------------------------------

    def _validated_line(self, spec: CompositionLineSpec) -> CompositionLine:
        if not is_index(spec.variant_index):
            raise ValidationError(
                f"Variant index must be an integer, got {spec.variant_index!r}"
            )
        kind = parse_kind(spec.material_kind)
        material = self._uow.materials.get_by_id(spec.material_ref, include_deleted=False)
        if material is None:
            raise NotFoundError(f"Material '{spec.material_ref}' not found")
        if material.kind is not kind:
            raise ValidationError(
                f"Material '{spec.material_ref}' is a {material.kind.value}, "
                f"not a {kind.value}"
            )

        variant = material.variant_at(spec.variant_index)
        if not variant.is_active:
            raise InactiveVariantError(material.id, spec.variant_index, variant.name)
        return build_line(spec, variant_id=variant.variant_id)

    @staticmethod
    def _discount(spec: ProductSpec) -> Discount | None:
        if spec.discount_type is None:
            return None
        try:
            discount_type = DiscountType(spec.discount_type.strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Discount type must be 'flat' or 'percentage', got {spec.discount_type!r}"
            ) from exc
        value = to_decimal(
            spec.discount_value if spec.discount_value is not None else 0, "discount"
        )
        return Discount(type=discount_type, value=value)
