"""Application service: Show Price History use case (query).

Read-only view of the audit log, newest entry first.
"""

from __future__ import annotations

from itertools import islice

from jewelcat.application.dto import PriceHistoryEntryDTO
from jewelcat.application.mapping import entry_to_dto
from jewelcat.domain.exceptions import ValidationError
from jewelcat.domain.repository.unit_of_work import UnitOfWork


class ShowPriceHistoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, entity_id: str | None = None, limit: int | None = None
    ) -> list[PriceHistoryEntryDTO]:
        if limit is not None and limit <= 0:
            raise ValidationError("Limit must be positive")
        with self._uow:
            entries = islice(self._uow.price_history.query(entity_id), limit)
            return [entry_to_dto(e) for e in entries]
