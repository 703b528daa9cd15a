"""Application service: Update Variant Price use case.

The price write and its audit entry go through one unit of work, so
they are committed together or not at all.  The old price recorded in
the audit entry is the one read inside that unit of work, immediately
before the write; nothing read earlier in the request is trusted.

Product prices are not touched: they are recomputed on every read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from jewelcat.application.dto import MaterialDTO
from jewelcat.application.mapping import material_to_dto
from jewelcat.domain.exceptions import NotFoundError, ValidationError
from jewelcat.domain.model.price_history import PriceHistoryEntry, utc_now
from jewelcat.domain.model.value_objects import Money, to_decimal
from jewelcat.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateVariantPriceHandler:

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(
        self,
        material_id: str,
        variant_index: int,
        new_price: str | int | float | Decimal,
        changed_by: str,
    ) -> MaterialDTO:
        """Set the unit price of one variant and log the change.

        Setting the price it already has is a no-op: nothing is written
        and no audit entry is produced.
        """
        # Reject malformed input before opening the unit of work
        amount = to_decimal(new_price, "price")
        if amount < 0:
            raise ValidationError(f"Price cannot be negative, got {amount}")
        if not changed_by or not changed_by.strip():
            raise ValidationError("The acting admin must be identified")

        with self._uow:
            material = self._uow.materials.get_by_id(material_id, include_deleted=False)
            if material is None:
                raise NotFoundError(f"Material '{material_id}' not found")

            currency = material.variant_at(variant_index).unit_price.currency
            old_price = material.change_variant_price(variant_index, Money(amount, currency))
            if old_price is None:
                logger.info(
                    "Price of %s variant %d already %s; nothing to do",
                    material_id, variant_index, amount,
                )
                return material_to_dto(material)

            variant = material.variants[variant_index]
            self._uow.materials.save(material)
            self._uow.price_history.append(
                PriceHistoryEntry(
                    entity_type=material.kind,
                    entity_id=material.id,
                    variant_name=variant.name,
                    variant_id=variant.variant_id,
                    old_price=old_price,
                    new_price=variant.unit_price,
                    changed_at=self._clock(),
                    changed_by=changed_by.strip(),
                )
            )
            self._uow.commit()

        logger.info(
            "Price of %s '%s' changed %s -> %s by %s",
            material.kind.value, variant.name, old_price, variant.unit_price, changed_by,
            extra={"material_id": material_id, "variant_index": variant_index, "changed_by": changed_by},
        )
        return material_to_dto(material)
