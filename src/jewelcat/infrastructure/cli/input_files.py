"""Parse JSON input files into application DTOs.

Input files use the same camelCase field names as the persisted
catalog, e.g.::

    {"kind": "metal", "code": "GOLD22K", "name": "Gold 22K",
     "colorOrType": "Yellow",
     "variants": [{"name": "22K", "unitPrice": 6000, "purity": 91.6}],
     "defaultWastagePercentage": 3, "defaultMakingChargeType": "flat",
     "defaultMakingCharges": 500}
"""

from __future__ import annotations

import json
from typing import IO

import click

from jewelcat.application.dto import (
    CompositionLineSpec,
    MaterialSpec,
    ProductSpec,
    VariantSpec,
)


def read_json(file: IO[str]) -> dict:
    try:
        data = json.load(file)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise click.BadParameter("Expected a JSON object at the top level.")
    return data


def material_spec(data: dict) -> MaterialSpec:
    try:
        return MaterialSpec(
            kind=data["kind"],
            name=data["name"],
            code=data.get("code", ""),
            color_or_type=data.get("colorOrType", ""),
            variants=[_variant_spec(v) for v in data["variants"]],
            default_wastage_percentage=data.get("defaultWastagePercentage", 3),
            default_making_charge_type=data.get("defaultMakingChargeType", "flat"),
            default_making_charges=data.get("defaultMakingCharges", 0),
            hardness=data.get("hardness", 10),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise click.BadParameter(f"Missing or malformed material field: {exc}") from exc


def _variant_spec(data: dict) -> VariantSpec:
    return VariantSpec(
        name=data["name"],
        unit_price=data["unitPrice"],
        is_active=data.get("isActive", True),
        variant_id=data.get("id"),
        purity=data.get("purity", 0),
        cut=data.get("cut", ""),
        clarity=data.get("clarity", ""),
        color=data.get("color", ""),
        shape=data.get("shape", ""),
        origin=data.get("origin", "Natural"),
        certification=data.get("certification", ""),
    )


def product_spec(data: dict) -> ProductSpec:
    try:
        discount = data.get("discount") or {}
        return ProductSpec(
            id=data.get("id"),
            name=data["name"],
            lines=[_line_spec(line) for line in data["lines"]],
            additional_charges=[
                (c["label"], c["amount"]) for c in data.get("additionalCharges", [])
            ],
            gst_percentage=data.get("gstPercentage"),
            discount_type=discount.get("type"),
            discount_value=discount.get("value"),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise click.BadParameter(f"Missing or malformed product field: {exc}") from exc


def _line_spec(data: dict) -> CompositionLineSpec:
    return CompositionLineSpec(
        material_kind=data["materialKind"],
        material_ref=data["materialRef"],
        variant_index=data["variantIndex"],
        quantity=data["quantity"],
        wastage_percentage=data.get("wastagePercentage"),
        making_charge_type=data.get("makingChargeType"),
        making_charges=data.get("makingCharges"),
        part=data.get("part", ""),
        setting=data.get("setting", ""),
        position=data.get("position", ""),
        stone_count=data.get("stoneCount", 1),
    )
