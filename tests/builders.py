"""Catalog objects shared by the tests.

Gold22K mirrors the reference scenario: 6000 per gram, 3% wastage and a
flat making charge of 500.
"""

from __future__ import annotations

from decimal import Decimal

from jewelcat.domain.model.material import Gemstone, GemstoneVariant, Metal, MetalVariant
from jewelcat.domain.model.product import CompositionLine, Product
from jewelcat.domain.model.value_objects import (
    MakingChargeType,
    MaterialKind,
    MaterialQuantity,
    Money,
    Percentage,
)

ZERO_GST = Percentage(Decimal("0"))


def gold(
    id: str = "gold",
    price: str = "6000",
    making_type: MakingChargeType = MakingChargeType.FLAT,
    making: str = "500",
) -> Metal:
    return Metal(
        id=id,
        code="GOLD22K",
        name="Gold22K",
        color="Yellow",
        variants=[
            MetalVariant(
                name="22K Gold",
                unit_price=Money.of(price),
                purity=Decimal("91.6"),
                variant_id="gold-22k",
            ),
            MetalVariant(
                name="18K Gold",
                unit_price=Money.of("5625"),
                purity=Decimal("75"),
                variant_id="gold-18k",
            ),
        ],
        default_wastage_percentage=Percentage(Decimal("3")),
        default_making_charge_type=making_type,
        default_making_charges=Decimal(making),
    )


def ruby(id: str = "ruby") -> Gemstone:
    return Gemstone(
        id=id,
        name="Ruby",
        gemstone_type="precious",
        hardness=Decimal("9"),
        variants=[
            GemstoneVariant(
                name="Burmese Ruby",
                unit_price=Money.of("45000"),
                cut="Brilliant",
                shape="Oval",
                variant_id="ruby-burmese",
            ),
            GemstoneVariant(
                name="Retired Ruby",
                unit_price=Money.of("30000"),
                cut="Step",
                shape="Cushion",
                is_active=False,
                variant_id="ruby-retired",
            ),
        ],
    )


def metal_line(
    ref: str = "gold", index: int = 0, grams: str = "10", variant_id: str | None = None
) -> CompositionLine:
    return CompositionLine(
        material_kind=MaterialKind.METAL,
        material_ref=ref,
        variant_index=index,
        quantity=MaterialQuantity(Decimal(grams)),
        variant_id=variant_id,
    )


def gem_line(
    ref: str = "ruby", index: int = 0, carats: str = "0.5", variant_id: str | None = None
) -> CompositionLine:
    return CompositionLine(
        material_kind=MaterialKind.GEMSTONE,
        material_ref=ref,
        variant_index=index,
        quantity=MaterialQuantity(Decimal(carats)),
        variant_id=variant_id,
    )


def ring(id: str = "ring", lines: list[CompositionLine] | None = None) -> Product:
    """A product priced without GST so totals equal the composition subtotal."""
    return Product(
        id=id,
        name="Gold Ring",
        lines=lines if lines is not None else [metal_line()],
        gst_percentage=ZERO_GST,
    )
