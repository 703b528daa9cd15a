"""Product aggregate — the holder of a composition.

A product does not own the materials it is made of.  Each composition
line is a weak reference (material id + variant position) resolved
against the live catalog whenever the product is priced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from jewelcat.domain.exceptions import ValidationError
from jewelcat.domain.model.value_objects import (
    MakingChargeType,
    MaterialKind,
    MaterialQuantity,
    Money,
    Percentage,
)

MAX_COMPOSITION_LINES = 50
DEFAULT_GST = Percentage(Decimal("3"))


def is_index(value: object) -> bool:
    """True for a plain int; bools and numeric strings do not count."""
    return isinstance(value, int) and not isinstance(value, bool)


class DiscountType(Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class CompositionLine:
    """One material quantity in a product's physical makeup.

    ``variant_id`` is captured from the addressed slot when the product is
    saved.  The overrides replace the metal's defaults for this line only
    and are ignored for gemstone lines.  A making-charge override is a
    (type, amount) pair: both are given or neither is.

    ``part`` (metal), ``setting``, ``position`` and ``stone_count``
    (gemstone) describe the piece and never affect the price.
    """

    material_kind: MaterialKind
    material_ref: str
    variant_index: int
    quantity: MaterialQuantity
    variant_id: str | None = None
    wastage_percentage: Percentage | None = None
    making_charge_type: MakingChargeType | None = None
    making_charges: Decimal | None = None
    part: str = ""
    setting: str = ""
    position: str = ""
    stone_count: int = 1

    def __post_init__(self) -> None:
        if not self.material_ref:
            raise ValidationError("Composition line must reference a material")
        if not is_index(self.variant_index):
            raise ValidationError("Variant index must be an integer")
        if self.variant_index < 0:
            raise ValidationError("Variant index cannot be negative")
        if not is_index(self.stone_count) or self.stone_count < 1:
            raise ValidationError("Stone count must be a positive integer")
        if (self.making_charge_type is None) != (self.making_charges is None):
            raise ValidationError(
                "Making charge type and making charges must be overridden together"
            )
        if self.making_charges is not None and self.making_charges < 0:
            raise ValidationError("Making charges cannot be negative")
        if (
            self.making_charge_type is MakingChargeType.PERCENTAGE
            and self.making_charges is not None
            and self.making_charges > 100
        ):
            raise ValidationError("Percentage making charges cannot exceed 100")

    def references(self, material_id: str) -> bool:
        return self.material_ref == material_id


@dataclass(frozen=True)
class AdditionalCharge:
    label: str
    amount: Money

    def __post_init__(self) -> None:
        if not self.label or not self.label.strip():
            raise ValidationError("Additional charge label is required")


@dataclass(frozen=True)
class Discount:
    type: DiscountType
    value: Decimal

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValidationError("Discount value cannot be negative")


@dataclass
class Product:
    """Aggregate root holding a product's composition and price adjustments.

    Use ``Product.create()`` for new or edited products.  Positions are
    trusted as of save time; later material edits do not revalidate them.
    """

    id: str
    name: str
    lines: list[CompositionLine]
    additional_charges: list[AdditionalCharge] = field(default_factory=list)
    gst_percentage: Percentage = DEFAULT_GST
    discount: Discount | None = None
    is_deleted: bool = False

    @staticmethod
    def create(
        id: str,
        name: str,
        lines: list[CompositionLine],
        additional_charges: list[AdditionalCharge] | None = None,
        gst_percentage: Percentage = DEFAULT_GST,
        discount: Discount | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not lines:
            raise ValidationError(
                "Product must have at least one metal or gemstone composition line"
            )
        if len(lines) > MAX_COMPOSITION_LINES:
            raise ValidationError(f"Maximum {MAX_COMPOSITION_LINES} composition lines per product")

        return Product(
            id=id,
            name=name.strip(),
            lines=list(lines),
            additional_charges=list(additional_charges or []),
            gst_percentage=gst_percentage,
            discount=discount,
        )

    def references(self, material_id: str) -> bool:
        """True if any line uses *material_id*, whatever the variant."""
        return any(line.references(material_id) for line in self.lines)

    def mark_deleted(self) -> None:
        if self.is_deleted:
            raise ValidationError(f"Product '{self.id}' is already deleted")
        self.is_deleted = True
