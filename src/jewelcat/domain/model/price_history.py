"""Price history ledger entries.

Entries are immutable once written.  The variant name is captured by
value so an entry stays readable after the variant is renamed or the
material is soft-deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from jewelcat.domain.model.value_objects import MaterialKind, Money


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PriceHistoryEntry:
    entity_type: MaterialKind
    entity_id: str
    variant_name: str
    old_price: Money
    new_price: Money
    changed_at: datetime
    changed_by: str
    variant_id: str | None = None
