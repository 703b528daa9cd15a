"""Application service: Delete Material use case (soft delete).

Deletion is blocked, never cascaded, while any active product still
references the material.  The reference count and the delete happen in
one unit of work; a composition edit committed by another process in
between is not detected.
"""

from __future__ import annotations

import logging

from jewelcat.domain.exceptions import NotFoundError, ReferencedError
from jewelcat.domain.repository.unit_of_work import UnitOfWork
from jewelcat.domain.service.reference_guard import ReferenceGuard

logger = logging.getLogger(__name__)


class DeleteMaterialHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, material_id: str) -> None:
        with self._uow:
            material = self._uow.materials.get_by_id(material_id, include_deleted=False)
            if material is None:
                raise NotFoundError(f"Material '{material_id}' not found")

            count = ReferenceGuard(self._uow.products).count_references(material_id)
            if count > 0:
                logger.warning(
                    "Refused to delete %s %s: %d product(s) reference it",
                    material.kind.value, material_id, count,
                    extra={"material_id": material_id},
                )
                raise ReferencedError(material_id, count)

            material.mark_deleted()
            self._uow.materials.save(material)
            self._uow.commit()

        logger.info("Soft-deleted %s %s", material.kind.value, material_id)
