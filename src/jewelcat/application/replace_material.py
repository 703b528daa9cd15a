"""Application service: Replace Material use case (full update).

Replaces every field of a material.  Uniqueness of the code or name is
checked again, excluding the material itself.  Variants submitted with
their existing ``variant_id`` keep their identity; when such a variant's
price changes, the change is audited exactly as a single price update
would be, in the same unit of work.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from jewelcat.application.dto import MaterialDTO, MaterialSpec
from jewelcat.application.mapping import build_material, material_to_dto
from jewelcat.domain.exceptions import DuplicateCodeError, NotFoundError, ValidationError
from jewelcat.domain.model.material import Material
from jewelcat.domain.model.price_history import PriceHistoryEntry, utc_now
from jewelcat.domain.model.value_objects import DEFAULT_CURRENCY
from jewelcat.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ReplaceMaterialHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        currency: str = DEFAULT_CURRENCY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow = uow
        self._currency = currency
        self._clock = clock

    def handle(self, material_id: str, spec: MaterialSpec, changed_by: str) -> MaterialDTO:
        if not changed_by or not changed_by.strip():
            raise ValidationError("The acting admin must be identified")

        with self._uow:
            current = self._uow.materials.get_by_id(material_id, include_deleted=False)
            if current is None:
                raise NotFoundError(f"Material '{material_id}' not found")

            replacement = build_material(spec, material_id, self._currency)
            if replacement.kind is not current.kind:
                raise ValidationError(
                    f"Cannot turn a {current.kind.value} into a {replacement.kind.value}"
                )

            clash = self._uow.materials.get_by_key(
                replacement.kind, replacement.unique_key, include_deleted=False
            )
            if clash is not None and clash.id != material_id:
                raise DuplicateCodeError(
                    f"A {replacement.kind.value} with code/name "
                    f"'{replacement.unique_key}' already exists"
                )

            entries = self._price_changes(current, replacement, changed_by.strip())
            self._uow.materials.save(replacement)
            for entry in entries:
                self._uow.price_history.append(entry)
            self._uow.commit()

        logger.info(
            "Replaced %s %s (%d audited price change(s))",
            replacement.kind.value, material_id, len(entries),
        )
        return material_to_dto(replacement)

    def _price_changes(
        self, current: Material, replacement: Material, changed_by: str
    ) -> list[PriceHistoryEntry]:
        before = {v.variant_id: v.unit_price for v in current.variants}
        changed_at = self._clock()
        return [
            PriceHistoryEntry(
                entity_type=replacement.kind,
                entity_id=replacement.id,
                variant_name=variant.name,
                variant_id=variant.variant_id,
                old_price=before[variant.variant_id],
                new_price=variant.unit_price,
                changed_at=changed_at,
                changed_by=changed_by,
            )
            for variant in replacement.variants
            if variant.variant_id in before and before[variant.variant_id] != variant.unit_price
        ]
