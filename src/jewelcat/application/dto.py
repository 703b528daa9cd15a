"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Numeric inputs arrive
as strings or numbers and are coerced by the domain value objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field

Number = str | int | float


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class VariantSpec:
    """Input: one variant of a material.

    ``variant_id`` is only given when replacing a material and the
    variant is meant to keep its identity.
    """

    name: str
    unit_price: Number
    is_active: bool = True
    variant_id: str | None = None
    purity: Number = 0
    cut: str = ""
    clarity: str = ""
    color: str = ""
    shape: str = ""
    origin: str = "Natural"
    certification: str = ""


@dataclass(frozen=True)
class MaterialSpec:
    """Input: a complete metal or gemstone definition.

    ``color_or_type`` is the metal color or the gemstone type.
    """

    kind: str
    name: str
    variants: list[VariantSpec]
    color_or_type: str = ""
    code: str = ""
    default_wastage_percentage: Number = 3
    default_making_charge_type: str = "flat"
    default_making_charges: Number = 0
    hardness: Number = 10


@dataclass(frozen=True)
class CompositionLineSpec:
    material_kind: str
    material_ref: str
    variant_index: int
    quantity: Number
    wastage_percentage: Number | None = None
    making_charge_type: str | None = None
    making_charges: Number | None = None
    part: str = ""
    setting: str = ""
    position: str = ""
    stone_count: int = 1


@dataclass(frozen=True)
class ProductSpec:
    name: str
    lines: list[CompositionLineSpec]
    id: str | None = None
    additional_charges: list[tuple[str, Number]] = field(default_factory=list)
    gst_percentage: Number | None = None
    discount_type: str | None = None
    discount_value: Number | None = None


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class VariantDTO:
    index: int
    variant_id: str
    name: str
    unit_price: str
    is_active: bool
    attributes: dict[str, str]


@dataclass(frozen=True)
class MaterialDTO:
    id: str
    kind: str
    name: str
    code: str
    color_or_type: str
    variants: list[VariantDTO]
    is_deleted: bool


@dataclass(frozen=True)
class PriceHistoryEntryDTO:
    entity_type: str
    entity_id: str
    variant_name: str
    old_price: str
    new_price: str
    changed_at: str
    changed_by: str


@dataclass(frozen=True)
class LineCostDTO:
    material_name: str
    variant_name: str
    quantity: str
    unit_price: str
    base: str
    wastage: str
    making: str
    line_total: str


@dataclass(frozen=True)
class ProductPriceDTO:
    """Output: a product's current price, or why it is unavailable.

    When ``available`` is False every amount is None and callers show
    "price unavailable" instead of a number.
    """

    product_id: str
    product_name: str
    available: bool
    lines: list[LineCostDTO] = field(default_factory=list)
    subtotal: str | None = None
    additional_charges: str | None = None
    gst: str | None = None
    discount: str | None = None
    final_price: str | None = None
    unavailable_reason: str | None = None
