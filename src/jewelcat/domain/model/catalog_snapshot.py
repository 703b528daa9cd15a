"""Immutable view of the active material catalog at one instant.

The pricer only ever sees a snapshot, never a repository, so a price is
a pure function of (composition, snapshot).
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from jewelcat.domain.model.material import Material


@dataclass(frozen=True)
class CatalogSnapshot:
    materials: Mapping[str, Material]

    @staticmethod
    def of(materials: Iterable[Material]) -> CatalogSnapshot:
        """Copy *materials* so later catalog edits cannot leak into the view.

        Soft-deleted materials are left out: a reference to one is as
        unresolvable as a reference to a missing one.
        """
        captured = {m.id: copy.deepcopy(m) for m in materials if not m.is_deleted}
        return CatalogSnapshot(materials=MappingProxyType(captured))

    def get(self, material_id: str) -> Material | None:
        return self.materials.get(material_id)

    def __len__(self) -> int:
        return len(self.materials)
