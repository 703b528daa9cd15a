"""Domain service: Price Quote.

Turns a composition breakdown into the figure a customer pays by adding
product-level charges, GST and an optional discount.  Each derived
amount is rounded half up to the minor unit as it is produced; the
composition subtotal itself arrives already rounded.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from jewelcat.domain.model.product import AdditionalCharge, Discount, DiscountType
from jewelcat.domain.model.value_objects import Money, Percentage
from jewelcat.domain.service.composition_pricer import PriceBreakdown

FULL = Percentage(Decimal("100"))


@dataclass(frozen=True)
class PriceQuote:
    breakdown: PriceBreakdown
    additional_charges: Money
    gst_percentage: Percentage
    gst_amount: Money
    calculated_price: Money
    discount_amount: Money
    final_price: Money

    @property
    def subtotal(self) -> Money:
        return self.breakdown.subtotal


def quote(
    breakdown: PriceBreakdown,
    additional_charges: Sequence[AdditionalCharge],
    gst_percentage: Percentage,
    discount: Discount | None,
) -> PriceQuote:
    subtotal = breakdown.subtotal
    charges = Money.zero(subtotal.currency)
    for charge in additional_charges:
        charges = charges + charge.amount
    charges = charges.rounded()

    taxable = subtotal + charges
    gst_amount = gst_percentage.of(taxable).rounded()
    calculated = taxable + gst_amount

    discount_amount = _discount_amount(calculated, discount)
    final = calculated - discount_amount

    return PriceQuote(
        breakdown=breakdown,
        additional_charges=charges,
        gst_percentage=gst_percentage,
        gst_amount=gst_amount,
        calculated_price=calculated,
        discount_amount=discount_amount,
        final_price=final.rounded(),
    )


def _discount_amount(calculated: Money, discount: Discount | None) -> Money:
    if discount is None or discount.value <= 0:
        return Money.zero(calculated.currency)

    if discount.type is DiscountType.PERCENTAGE:
        pct = Percentage(min(discount.value, FULL.value))
        return pct.of(calculated).rounded()

    # Flat discounts are capped so the final price never goes negative.
    flat = Money(discount.value, calculated.currency).rounded()
    return min(flat, calculated)
