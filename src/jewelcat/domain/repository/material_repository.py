"""Abstract repository for Metal and Gemstone aggregates.

Defined in the domain layer so the domain never depends on
infrastructure.  Every query takes an explicit ``include_deleted``
argument; implementations must never filter soft-deleted rows in or out
behind the caller's back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelcat.domain.model.material import Material
from jewelcat.domain.model.value_objects import MaterialKind


class MaterialRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique material ID."""

    @abstractmethod
    def get_by_id(self, material_id: str, *, include_deleted: bool = False) -> Material | None:
        """Return a material by its ID, or None if not found."""

    @abstractmethod
    def get_by_key(
        self, kind: MaterialKind, unique_key: str, *, include_deleted: bool = False
    ) -> Material | None:
        """Return the material of *kind* whose unique key (code or name) matches."""

    @abstractmethod
    def list_all(
        self, *, kind: MaterialKind | None = None, include_deleted: bool = False
    ) -> list[Material]:
        """Return materials, optionally restricted to one kind."""

    @abstractmethod
    def save(self, material: Material) -> None:
        """Persist a new or updated material."""
