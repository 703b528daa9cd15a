"""JSON-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from jewelcat.domain.model.product import (
    AdditionalCharge,
    CompositionLine,
    Discount,
    DiscountType,
    Product,
)
from jewelcat.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    MakingChargeType,
    MaterialKind,
    MaterialQuantity,
    Money,
    Percentage,
    new_id,
)
from jewelcat.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return new_id()

    def get_by_id(self, product_id: str, *, include_deleted: bool = False) -> Product | None:
        for raw in self._records:
            if raw["id"] == product_id and (include_deleted or not raw["isDeleted"]):
                return self._to_domain(raw)
        return None

    def list_all(self, *, include_deleted: bool = False) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._records
            if include_deleted or not raw["isDeleted"]
        ]

    def save(self, product: Product) -> None:
        raw = self._to_raw(product)
        for i, existing in enumerate(self._records):
            if existing["id"] == product.id:
                self._records[i] = raw
                return
        self._records.append(raw)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "lines": [_line_to_raw(line) for line in product.lines],
            "additionalCharges": [
                {
                    "label": c.label,
                    "amount": str(c.amount.amount),
                    "currency": c.amount.currency,
                }
                for c in product.additional_charges
            ],
            "gstPercentage": str(product.gst_percentage.value),
            "discount": (
                {"type": product.discount.type.value, "value": str(product.discount.value)}
                if product.discount
                else None
            ),
            "isDeleted": product.is_deleted,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        discount = raw.get("discount")
        return Product(
            id=raw["id"],
            name=raw["name"],
            lines=[_line_to_domain(line) for line in raw["lines"]],
            additional_charges=[
                AdditionalCharge(
                    label=c["label"],
                    amount=Money(Decimal(c["amount"]), c.get("currency", DEFAULT_CURRENCY)),
                )
                for c in raw.get("additionalCharges", [])
            ],
            gst_percentage=Percentage(Decimal(raw.get("gstPercentage", "3"))),
            discount=(
                Discount(type=DiscountType(discount["type"]), value=Decimal(discount["value"]))
                if discount
                else None
            ),
            is_deleted=raw["isDeleted"],
        )


def _line_to_raw(line: CompositionLine) -> dict:
    raw = {
        "materialKind": line.material_kind.value,
        "materialRef": line.material_ref,
        "variantIndex": line.variant_index,
        "variantId": line.variant_id,
        "quantity": str(line.quantity.value),
    }
    if line.wastage_percentage is not None:
        raw["wastagePercentage"] = str(line.wastage_percentage.value)
    if line.making_charge_type is not None:
        raw["makingChargeType"] = line.making_charge_type.value
    if line.making_charges is not None:
        raw["makingCharges"] = str(line.making_charges)
    if line.material_kind is MaterialKind.METAL:
        raw["part"] = line.part
    else:
        raw.update({
            "setting": line.setting,
            "position": line.position,
            "stoneCount": line.stone_count,
        })
    return raw


def _line_to_domain(raw: dict) -> CompositionLine:
    return CompositionLine(
        material_kind=MaterialKind(raw["materialKind"]),
        material_ref=raw["materialRef"],
        variant_index=raw["variantIndex"],
        quantity=MaterialQuantity(Decimal(raw["quantity"])),
        variant_id=raw.get("variantId"),
        wastage_percentage=(
            Percentage(Decimal(raw["wastagePercentage"])) if "wastagePercentage" in raw else None
        ),
        making_charge_type=(
            MakingChargeType(raw["makingChargeType"]) if "makingChargeType" in raw else None
        ),
        making_charges=Decimal(raw["makingCharges"]) if "makingCharges" in raw else None,
        part=raw.get("part", ""),
        setting=raw.get("setting", ""),
        position=raw.get("position", ""),
        stone_count=raw.get("stoneCount", 1),
    )
