"""Application service: Create Material use case."""

from __future__ import annotations

import logging

from jewelcat.application.dto import MaterialDTO, MaterialSpec
from jewelcat.application.mapping import build_material, material_to_dto
from jewelcat.domain.exceptions import DuplicateCodeError
from jewelcat.domain.model.value_objects import DEFAULT_CURRENCY
from jewelcat.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreateMaterialHandler:

    def __init__(self, uow: UnitOfWork, currency: str = DEFAULT_CURRENCY) -> None:
        self._uow = uow
        self._currency = currency

    def handle(self, spec: MaterialSpec) -> MaterialDTO:
        """Add a new metal or gemstone to the catalog.

        Codes (metals) and names (gemstones) only need to be unique among
        active materials; a soft-deleted one does not block reuse.
        """
        with self._uow:
            material = build_material(spec, self._uow.materials.next_id(), self._currency)

            existing = self._uow.materials.get_by_key(
                material.kind, material.unique_key, include_deleted=False
            )
            if existing is not None:
                raise DuplicateCodeError(
                    f"A {material.kind.value} with code/name '{material.unique_key}' already exists"
                )

            self._uow.materials.save(material)
            self._uow.commit()

        logger.info(
            "Created %s %s (%s) with %d variant(s)",
            material.kind.value, material.id, material.unique_key, len(material.variants),
        )
        return material_to_dto(material)
