"""Domain service: Composition Pricer.

Computes a product's price from its composition lines and a catalog
snapshot.  The function is pure: it reads no repository, clock or
module-level state, so identical inputs always give identical output.

Pricing rules:
  Metal line     base     = grams × price per gram
                 wastage  = base × wastage% / 100
                 making   = flat amount, or base × making% / 100
                 total    = base + wastage + making
  Gemstone line  total    = carats × price per carat

Line amounts keep full Decimal precision.  Rounding (half up, to the
minor currency unit) happens exactly once, on the subtotal.

Any line that cannot be resolved against the snapshot aborts the whole
computation: a partial total is never returned.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from jewelcat.domain.exceptions import DanglingReferenceError, InactiveVariantError
from jewelcat.domain.model.catalog_snapshot import CatalogSnapshot
from jewelcat.domain.model.material import Material, MaterialVariant, Metal
from jewelcat.domain.model.product import CompositionLine
from jewelcat.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    MakingChargeType,
    MaterialKind,
    Money,
    Percentage,
)


@dataclass(frozen=True)
class LineCost:
    """Cost of one composition line, unrounded."""

    position: int
    material_kind: MaterialKind
    material_id: str
    material_name: str
    variant_index: int
    variant_name: str
    quantity: Decimal
    unit_price: Money
    base: Money
    wastage: Money
    making: Money

    @property
    def line_total(self) -> Money:
        return self.base + self.wastage + self.making


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    lines: tuple[LineCost, ...]

    @property
    def metal_total(self) -> Money:
        return _sum(
            (line.line_total for line in self.lines if line.material_kind is MaterialKind.METAL),
            self.subtotal.currency,
        )

    @property
    def gemstone_total(self) -> Money:
        return _sum(
            (line.line_total for line in self.lines if line.material_kind is MaterialKind.GEMSTONE),
            self.subtotal.currency,
        )


def price(lines: Sequence[CompositionLine], snapshot: CatalogSnapshot) -> PriceBreakdown:
    """Price *lines* against *snapshot*.

    Raises DanglingReferenceError if a line's material or variant slot
    cannot be resolved, and InactiveVariantError if it resolves to a
    disabled variant.
    """
    costs = tuple(_price_line(position, line, snapshot) for position, line in enumerate(lines))
    currency = costs[0].unit_price.currency if costs else DEFAULT_CURRENCY
    subtotal = _sum((cost.line_total for cost in costs), currency)
    return PriceBreakdown(subtotal=subtotal.rounded(), lines=costs)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _price_line(position: int, line: CompositionLine, snapshot: CatalogSnapshot) -> LineCost:
    material, variant = _resolve(line, snapshot)
    quantity = line.quantity.value
    base = variant.unit_price * quantity
    zero = Money.zero(base.currency)

    if isinstance(material, Metal):
        wastage = _wastage_percentage(line, material).of(base)
        making = _making_cost(line, material, base)
    else:
        wastage = zero
        making = zero

    return LineCost(
        position=position,
        material_kind=material.kind,
        material_id=material.id,
        material_name=material.name,
        variant_index=line.variant_index,
        variant_name=variant.name,
        quantity=quantity,
        unit_price=variant.unit_price,
        base=base,
        wastage=wastage,
        making=making,
    )


def _resolve(line: CompositionLine, snapshot: CatalogSnapshot) -> tuple[Material, MaterialVariant]:
    material = snapshot.get(line.material_ref)
    if material is None:
        raise DanglingReferenceError(
            line.material_ref, line.variant_index, "material not found or deleted"
        )
    if material.kind is not line.material_kind:
        raise DanglingReferenceError(
            line.material_ref,
            line.variant_index,
            f"expected a {line.material_kind.value}, found a {material.kind.value}",
        )
    # Never clamp: an out-of-range slot means the catalog changed under us.
    if line.variant_index >= len(material.variants):
        raise DanglingReferenceError(
            line.material_ref,
            line.variant_index,
            f"material has {len(material.variants)} variant(s)",
        )

    variant = material.variants[line.variant_index]
    if line.variant_id is not None and variant.variant_id != line.variant_id:
        raise DanglingReferenceError(
            line.material_ref,
            line.variant_index,
            "variant slot now holds a different variant",
        )
    if not variant.is_active:
        raise InactiveVariantError(line.material_ref, line.variant_index, variant.name)
    return material, variant


def _wastage_percentage(line: CompositionLine, metal: Metal) -> Percentage:
    if line.wastage_percentage is not None:
        return line.wastage_percentage
    return metal.default_wastage_percentage


def _making_cost(line: CompositionLine, metal: Metal, base: Money) -> Money:
    # Type and amount always come from the same source
    if line.making_charge_type is not None and line.making_charges is not None:
        charge_type, charges = line.making_charge_type, line.making_charges
    else:
        charge_type = metal.default_making_charge_type
        charges = metal.default_making_charges

    if charge_type is MakingChargeType.FLAT:
        return Money(charges, base.currency)
    return Percentage(charges).of(base)


def _sum(amounts, currency: str = DEFAULT_CURRENCY) -> Money:
    total = Money.zero(currency)
    for amount in amounts:
        total = total + amount
    return total
