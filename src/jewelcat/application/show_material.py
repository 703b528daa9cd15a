"""Application service: Show Material use case (query)."""

from __future__ import annotations

from jewelcat.application.dto import MaterialDTO
from jewelcat.application.mapping import material_to_dto
from jewelcat.domain.exceptions import NotFoundError
from jewelcat.domain.repository.unit_of_work import UnitOfWork


class ShowMaterialHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, material_id: str, include_deleted: bool = False) -> MaterialDTO:
        with self._uow:
            material = self._uow.materials.get_by_id(material_id, include_deleted=include_deleted)
        if material is None:
            raise NotFoundError(f"Material '{material_id}' not found")
        return material_to_dto(material)
