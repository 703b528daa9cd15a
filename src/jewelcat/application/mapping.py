"""Conversions between DTOs and domain objects shared by the use cases."""

from __future__ import annotations

from jewelcat.application.dto import (
    CompositionLineSpec,
    LineCostDTO,
    MaterialDTO,
    MaterialSpec,
    PriceHistoryEntryDTO,
    VariantDTO,
    VariantSpec,
)
from jewelcat.domain.exceptions import ValidationError
from jewelcat.domain.model.material import (
    Gemstone,
    GemstoneVariant,
    Material,
    MaterialVariant,
    Metal,
    MetalVariant,
)
from jewelcat.domain.model.price_history import PriceHistoryEntry
from jewelcat.domain.model.product import CompositionLine
from jewelcat.domain.model.value_objects import (
    MakingChargeType,
    MaterialKind,
    MaterialQuantity,
    Money,
    Percentage,
    new_id,
    to_decimal,
)
from jewelcat.domain.service.composition_pricer import LineCost


def parse_kind(raw: str) -> MaterialKind:
    try:
        return MaterialKind(raw.strip().lower())
    except (ValueError, AttributeError) as exc:
        raise ValidationError(
            f"Material kind must be 'metal' or 'gemstone', got {raw!r}"
        ) from exc


def parse_making_charge_type(raw: str) -> MakingChargeType:
    try:
        return MakingChargeType(raw.strip().lower())
    except (ValueError, AttributeError) as exc:
        raise ValidationError(
            f"Making charge type must be 'flat' or 'percentage', got {raw!r}"
        ) from exc


# --- Materials ----------------------------------------------------------------


def build_variant(kind: MaterialKind, spec: VariantSpec, currency: str) -> MaterialVariant:
    common = {
        "name": spec.name,
        "unit_price": Money.of(spec.unit_price, currency),
        "is_active": spec.is_active,
        "variant_id": spec.variant_id or new_id(),
    }
    if kind is MaterialKind.METAL:
        return MetalVariant(**common, purity=to_decimal(spec.purity, "purity"))
    return GemstoneVariant(
        **common,
        cut=spec.cut,
        clarity=spec.clarity,
        color=spec.color,
        shape=spec.shape,
        origin=spec.origin,
        certification=spec.certification,
    )


def build_material(spec: MaterialSpec, material_id: str, currency: str) -> Material:
    """Build a validated Metal or Gemstone from *spec*."""
    kind = parse_kind(spec.kind)
    variants = [build_variant(kind, v, currency) for v in spec.variants]

    if kind is MaterialKind.METAL:
        return Metal.create(
            id=material_id,
            code=spec.code,
            name=spec.name,
            color=spec.color_or_type,
            variants=variants,
            default_wastage_percentage=Percentage.parse(spec.default_wastage_percentage),
            default_making_charge_type=parse_making_charge_type(spec.default_making_charge_type),
            default_making_charges=to_decimal(spec.default_making_charges, "making charges"),
        )
    return Gemstone.create(
        id=material_id,
        name=spec.name,
        gemstone_type=spec.color_or_type,
        hardness=to_decimal(spec.hardness, "hardness"),
        variants=variants,
    )


def material_to_dto(material: Material) -> MaterialDTO:
    if isinstance(material, Metal):
        code, color_or_type = material.code, material.color
    elif isinstance(material, Gemstone):
        code, color_or_type = "", material.gemstone_type
    else:
        raise TypeError(f"Unknown material type {type(material).__name__}")

    return MaterialDTO(
        id=material.id,
        kind=material.kind.value,
        name=material.name,
        code=code,
        color_or_type=color_or_type,
        variants=[
            VariantDTO(
                index=i,
                variant_id=v.variant_id,
                name=v.name,
                unit_price=str(v.unit_price),
                is_active=v.is_active,
                attributes=_variant_attributes(v),
            )
            for i, v in enumerate(material.variants)
        ],
        is_deleted=material.is_deleted,
    )


def _variant_attributes(variant: MaterialVariant) -> dict[str, str]:
    if isinstance(variant, MetalVariant):
        return {"purity": str(variant.purity)}
    if isinstance(variant, GemstoneVariant):
        attrs = {
            "cut": variant.cut,
            "clarity": variant.clarity,
            "color": variant.color,
            "shape": variant.shape,
            "origin": variant.origin,
            "certification": variant.certification,
        }
        return {k: v for k, v in attrs.items() if v}
    return {}


# --- Compositions -------------------------------------------------------------


def build_line(spec: CompositionLineSpec, variant_id: str | None = None) -> CompositionLine:
    return CompositionLine(
        material_kind=parse_kind(spec.material_kind),
        material_ref=spec.material_ref,
        variant_index=spec.variant_index,
        quantity=MaterialQuantity.parse(spec.quantity),
        variant_id=variant_id,
        wastage_percentage=(
            Percentage.parse(spec.wastage_percentage)
            if spec.wastage_percentage is not None
            else None
        ),
        making_charge_type=(
            parse_making_charge_type(spec.making_charge_type)
            if spec.making_charge_type is not None
            else None
        ),
        making_charges=(
            to_decimal(spec.making_charges, "making charges")
            if spec.making_charges is not None
            else None
        ),
        part=spec.part,
        setting=spec.setting,
        position=spec.position,
        stone_count=spec.stone_count,
    )


def line_cost_to_dto(cost: LineCost) -> LineCostDTO:
    return LineCostDTO(
        material_name=cost.material_name,
        variant_name=cost.variant_name,
        quantity=str(cost.quantity),
        unit_price=str(cost.unit_price),
        base=str(cost.base.rounded()),
        wastage=str(cost.wastage.rounded()),
        making=str(cost.making.rounded()),
        line_total=str(cost.line_total.rounded()),
    )


# --- Price history ------------------------------------------------------------


def entry_to_dto(entry: PriceHistoryEntry) -> PriceHistoryEntryDTO:
    return PriceHistoryEntryDTO(
        entity_type=entry.entity_type.value,
        entity_id=entry.entity_id,
        variant_name=entry.variant_name,
        old_price=str(entry.old_price),
        new_price=str(entry.new_price),
        changed_at=entry.changed_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
        changed_by=entry.changed_by,
    )
