"""JSON-backed implementation of PriceHistoryRepository."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from decimal import Decimal

from jewelcat.domain.model.price_history import PriceHistoryEntry
from jewelcat.domain.model.value_objects import DEFAULT_CURRENCY, MaterialKind, Money
from jewelcat.domain.repository.price_history_repository import PriceHistoryRepository


class PriceHistoryView:
    """Newest-first view over the ledger as it stood when queried.

    Each iteration starts over from the newest entry; records are only
    converted to domain objects as they are reached.
    """

    def __init__(self, records: tuple[dict, ...], entity_id: str | None) -> None:
        self._records = records
        self._entity_id = entity_id

    def __iter__(self) -> Iterator[PriceHistoryEntry]:
        for raw in reversed(self._records):
            if self._entity_id is None or raw["entityId"] == self._entity_id:
                yield JsonPriceHistoryRepository._to_domain(raw)


class JsonPriceHistoryRepository(PriceHistoryRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- PriceHistoryRepository interface -------------------------------------

    def append(self, entry: PriceHistoryEntry) -> None:
        self._records.append(self._to_raw(entry))

    def query(self, entity_id: str | None = None) -> PriceHistoryView:
        # Append order is chronological order
        return PriceHistoryView(tuple(self._records), entity_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: PriceHistoryEntry) -> dict:
        return {
            "entityType": entry.entity_type.value,
            "entityId": entry.entity_id,
            "variantName": entry.variant_name,
            "variantId": entry.variant_id,
            "oldPrice": str(entry.old_price.amount),
            "newPrice": str(entry.new_price.amount),
            "currency": entry.new_price.currency,
            "changedAt": entry.changed_at.isoformat(),
            "changedBy": entry.changed_by,
        }

    @staticmethod
    def _to_domain(raw: dict) -> PriceHistoryEntry:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        return PriceHistoryEntry(
            entity_type=MaterialKind(raw["entityType"]),
            entity_id=raw["entityId"],
            variant_name=raw["variantName"],
            variant_id=raw.get("variantId"),
            old_price=Money(Decimal(raw["oldPrice"]), currency),
            new_price=Money(Decimal(raw["newPrice"]), currency),
            changed_at=datetime.fromisoformat(raw["changedAt"]),
            changed_by=raw["changedBy"],
        )
