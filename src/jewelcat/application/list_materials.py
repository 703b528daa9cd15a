"""Application service: List Materials use case (query)."""

from __future__ import annotations

from jewelcat.application.dto import MaterialDTO
from jewelcat.application.mapping import material_to_dto, parse_kind
from jewelcat.domain.repository.unit_of_work import UnitOfWork


class ListMaterialsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, kind: str | None = None, include_deleted: bool = False) -> list[MaterialDTO]:
        material_kind = parse_kind(kind) if kind else None
        with self._uow:
            materials = self._uow.materials.list_all(
                kind=material_kind, include_deleted=include_deleted
            )
        return [material_to_dto(m) for m in sorted(materials, key=lambda m: (m.kind.value, m.name))]
