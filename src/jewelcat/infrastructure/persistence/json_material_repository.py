"""JSON-backed implementation of MaterialRepository.

Operates on the ``materials`` list of a catalog document loaded by
JsonUnitOfWork; nothing touches the file directly.
"""

from __future__ import annotations

from decimal import Decimal

from jewelcat.domain.model.material import (
    Gemstone,
    GemstoneVariant,
    Material,
    MaterialVariant,
    Metal,
    MetalVariant,
)
from jewelcat.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    MakingChargeType,
    MaterialKind,
    Money,
    Percentage,
    new_id,
)
from jewelcat.domain.repository.material_repository import MaterialRepository


class JsonMaterialRepository(MaterialRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- MaterialRepository interface -----------------------------------------

    def next_id(self) -> str:
        return new_id()

    def get_by_id(self, material_id: str, *, include_deleted: bool = False) -> Material | None:
        for raw in self._records:
            if raw["id"] == material_id and (include_deleted or not raw["isDeleted"]):
                return self._to_domain(raw)
        return None

    def get_by_key(
        self, kind: MaterialKind, unique_key: str, *, include_deleted: bool = False
    ) -> Material | None:
        for material in self.list_all(kind=kind, include_deleted=include_deleted):
            if material.unique_key == unique_key:
                return material
        return None

    def list_all(
        self, *, kind: MaterialKind | None = None, include_deleted: bool = False
    ) -> list[Material]:
        return [
            self._to_domain(raw)
            for raw in self._records
            if (include_deleted or not raw["isDeleted"])
            and (kind is None or raw["kind"] == kind.value)
        ]

    def save(self, material: Material) -> None:
        raw = self._to_raw(material)
        for i, existing in enumerate(self._records):
            if existing["id"] == material.id:
                self._records[i] = raw
                return
        self._records.append(raw)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(material: Material) -> dict:
        raw: dict = {
            "id": material.id,
            "kind": material.kind.value,
            "name": material.name,
            "variants": [_variant_to_raw(v) for v in material.variants],
            "isDeleted": material.is_deleted,
        }
        if isinstance(material, Metal):
            raw.update({
                "code": material.code,
                "colorOrType": material.color,
                "defaultWastagePercentage": str(material.default_wastage_percentage.value),
                "defaultMakingChargeType": material.default_making_charge_type.value,
                "defaultMakingCharges": str(material.default_making_charges),
            })
        elif isinstance(material, Gemstone):
            raw.update({
                "code": "",
                "colorOrType": material.gemstone_type,
                "hardness": str(material.hardness),
            })
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Material:
        kind = MaterialKind(raw["kind"])
        variants = [_variant_to_domain(kind, v) for v in raw["variants"]]
        if kind is MaterialKind.METAL:
            return Metal(
                id=raw["id"],
                code=raw["code"],
                name=raw["name"],
                color=raw["colorOrType"],
                variants=variants,
                default_wastage_percentage=Percentage(Decimal(raw["defaultWastagePercentage"])),
                default_making_charge_type=MakingChargeType(raw["defaultMakingChargeType"]),
                default_making_charges=Decimal(raw["defaultMakingCharges"]),
                is_deleted=raw["isDeleted"],
            )
        return Gemstone(
            id=raw["id"],
            name=raw["name"],
            gemstone_type=raw["colorOrType"],
            hardness=Decimal(raw.get("hardness", "10")),
            variants=variants,
            is_deleted=raw["isDeleted"],
        )


def _variant_to_raw(variant: MaterialVariant) -> dict:
    raw = {
        "id": variant.variant_id,
        "name": variant.name,
        "unitPrice": str(variant.unit_price.amount),
        "currency": variant.unit_price.currency,
        "isActive": variant.is_active,
    }
    if isinstance(variant, MetalVariant):
        raw["purity"] = str(variant.purity)
    elif isinstance(variant, GemstoneVariant):
        raw.update({
            "cut": variant.cut,
            "clarity": variant.clarity,
            "color": variant.color,
            "shape": variant.shape,
            "origin": variant.origin,
            "certification": variant.certification,
        })
    return raw


def _variant_to_domain(kind: MaterialKind, raw: dict) -> MaterialVariant:
    common = {
        "variant_id": raw["id"],
        "name": raw["name"],
        "unit_price": Money(Decimal(raw["unitPrice"]), raw.get("currency", DEFAULT_CURRENCY)),
        "is_active": raw.get("isActive", True),
    }
    if kind is MaterialKind.METAL:
        return MetalVariant(**common, purity=Decimal(raw.get("purity", "0")))
    return GemstoneVariant(
        **common,
        cut=raw.get("cut", ""),
        clarity=raw.get("clarity", ""),
        color=raw.get("color", ""),
        shape=raw.get("shape", ""),
        origin=raw.get("origin", "Natural"),
        certification=raw.get("certification", ""),
    )
