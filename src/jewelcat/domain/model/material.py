"""Material aggregates — Metal and Gemstone.

Materials are the shared raw-material catalog.  Each one owns an ordered
list of priced variants; products address a variant by its position in
that list, so the list order is part of the public contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import ClassVar

from jewelcat.domain.exceptions import IndexOutOfRangeError, ValidationError
from jewelcat.domain.model.value_objects import (
    MakingChargeType,
    MaterialKind,
    Money,
    Percentage,
    new_id,
)

METAL_COLORS = ("Yellow", "White", "Rose", "Silver", "Grey", "Other")
GEMSTONE_TYPES = ("precious", "semi-precious", "organic")
GEMSTONE_ORIGINS = ("Natural", "Lab-Created", "Treated")


@dataclass(frozen=True)
class MaterialVariant:
    """A priced sub-option of a material (e.g. 22K vs 18K gold).

    ``unit_price`` is per gram for metals and per carat for gemstones.
    ``variant_id`` is generated once and survives reordering, which lets
    compositions detect that the slot they captured now holds something
    else.
    """

    name: str
    unit_price: Money
    is_active: bool = True
    variant_id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Variant name is required")


@dataclass(frozen=True)
class MetalVariant(MaterialVariant):
    purity: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        super().__post_init__()
        if not Decimal("0") <= self.purity <= Decimal("100"):
            raise ValidationError(f"Purity must be between 0 and 100, got {self.purity}")


@dataclass(frozen=True)
class GemstoneVariant(MaterialVariant):
    cut: str = ""
    clarity: str = ""
    color: str = ""
    shape: str = ""
    origin: str = "Natural"
    certification: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.origin not in GEMSTONE_ORIGINS:
            raise ValidationError(
                f"Gemstone origin must be one of {', '.join(GEMSTONE_ORIGINS)}"
            )


@dataclass(kw_only=True)
class Material(ABC):
    """Common behaviour of Metal and Gemstone aggregate roots.

    Use the subclasses' ``create()`` factories for new materials; they
    enforce all invariants.  The ``__init__`` stays simple so repositories
    can reconstitute persisted materials without re-validating.

    Invariants:
    - at least one variant
    - a soft-deleted material is never mutated again
    """

    kind: ClassVar[MaterialKind]
    variant_type: ClassVar[type[MaterialVariant]] = MaterialVariant

    id: str
    name: str
    variants: list[MaterialVariant]
    is_deleted: bool = False

    # --- Identity -------------------------------------------------------------

    @property
    @abstractmethod
    def unique_key(self) -> str:
        """Value that must be unique among active materials of the same kind."""

    # --- Variant access -------------------------------------------------------

    def variant_at(self, index: int) -> MaterialVariant:
        if index < 0 or index >= len(self.variants):
            raise IndexOutOfRangeError(self.id, index, len(self.variants))
        return self.variants[index]

    def index_of_variant(self, variant_id: str) -> int | None:
        for i, variant in enumerate(self.variants):
            if variant.variant_id == variant_id:
                return i
        return None

    # --- Mutations ------------------------------------------------------------

    def change_variant_price(self, index: int, new_price: Money) -> Money | None:
        """Write *new_price* into slot *index*.

        Returns the price that was stored immediately before the write, or
        None when the price is unchanged and nothing was written.
        """
        self._assert_not_deleted()
        variant = self.variant_at(index)
        old_price = variant.unit_price
        if old_price == new_price:
            return None
        self.variants[index] = replace(variant, unit_price=new_price)
        return old_price

    def mark_deleted(self) -> None:
        self._assert_not_deleted()
        self.is_deleted = True

    # --- Validation helpers ---------------------------------------------------

    def _assert_not_deleted(self) -> None:
        if self.is_deleted:
            raise ValidationError(f"Material '{self.id}' has been deleted")

    @classmethod
    def _validate_variants(cls, variants: list[MaterialVariant]) -> list[MaterialVariant]:
        if not variants:
            raise ValidationError("At least one variant is required")
        for variant in variants:
            if not isinstance(variant, cls.variant_type):
                raise ValidationError(
                    f"{cls.__name__} variants must be {cls.variant_type.__name__}, "
                    f"got {type(variant).__name__}"
                )
        ids = [v.variant_id for v in variants]
        if len(set(ids)) != len(ids):
            raise ValidationError("Variant IDs must be unique within a material")
        return list(variants)


@dataclass(kw_only=True)
class Metal(Material):
    kind: ClassVar[MaterialKind] = MaterialKind.METAL
    variant_type: ClassVar[type[MaterialVariant]] = MetalVariant

    code: str
    color: str = "Other"
    default_wastage_percentage: Percentage = Percentage(Decimal("3"))
    default_making_charge_type: MakingChargeType = MakingChargeType.FLAT
    default_making_charges: Decimal = Decimal("0")

    @property
    def unique_key(self) -> str:
        return self.code

    @staticmethod
    def create(
        *,
        id: str,
        code: str,
        name: str,
        color: str,
        variants: list[MaterialVariant],
        default_wastage_percentage: Percentage = Percentage(Decimal("3")),
        default_making_charge_type: MakingChargeType = MakingChargeType.FLAT,
        default_making_charges: Decimal = Decimal("0"),
    ) -> Metal:
        """Create a new metal, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Metal name is required")
        if not code or not code.strip():
            raise ValidationError("Metal code is required")
        if color not in METAL_COLORS:
            raise ValidationError(f"Metal color must be one of {', '.join(METAL_COLORS)}")
        if default_making_charges < 0:
            raise ValidationError("Default making charges cannot be negative")
        if (
            default_making_charge_type is MakingChargeType.PERCENTAGE
            and default_making_charges > 100
        ):
            raise ValidationError("Percentage making charges cannot exceed 100")

        return Metal(
            id=id,
            code=code.strip().upper(),
            name=name.strip(),
            color=color,
            variants=Metal._validate_variants(variants),
            default_wastage_percentage=default_wastage_percentage,
            default_making_charge_type=default_making_charge_type,
            default_making_charges=default_making_charges,
        )


@dataclass(kw_only=True)
class Gemstone(Material):
    kind: ClassVar[MaterialKind] = MaterialKind.GEMSTONE
    variant_type: ClassVar[type[MaterialVariant]] = GemstoneVariant

    gemstone_type: str = "precious"
    hardness: Decimal = Decimal("10")

    @property
    def unique_key(self) -> str:
        return self.name.lower()

    @staticmethod
    def create(
        *,
        id: str,
        name: str,
        gemstone_type: str,
        hardness: Decimal,
        variants: list[MaterialVariant],
    ) -> Gemstone:
        """Create a new gemstone, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Gemstone name is required")
        if gemstone_type not in GEMSTONE_TYPES:
            raise ValidationError(
                f"Gemstone type must be one of {', '.join(GEMSTONE_TYPES)}"
            )
        if not Decimal("1") <= hardness <= Decimal("10"):
            raise ValidationError("Hardness must be between 1 and 10")

        return Gemstone(
            id=id,
            name=name.strip(),
            gemstone_type=gemstone_type,
            hardness=hardness,
            variants=Gemstone._validate_variants(variants),
        )
