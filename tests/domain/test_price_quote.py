"""Unit tests for the Price Quote stage (charges, GST, discount)."""

from decimal import Decimal

from jewelcat.domain.model.catalog_snapshot import CatalogSnapshot
from jewelcat.domain.model.product import AdditionalCharge, Discount, DiscountType
from jewelcat.domain.model.value_objects import Money, Percentage
from jewelcat.domain.service.composition_pricer import price
from jewelcat.domain.service.price_quote import quote
from tests.builders import gold, metal_line

GST_3 = Percentage(Decimal("3"))
NO_GST = Percentage(Decimal("0"))


def _breakdown():
    # Subtotal INR 62,300.00
    return price([metal_line()], CatalogSnapshot.of([gold()]))


class TestGst:

    def test_gst_on_subtotal(self):
        q = quote(_breakdown(), [], GST_3, None)
        assert q.gst_amount == Money.of("1869.00")
        assert q.calculated_price == Money.of("64169.00")
        assert q.final_price == Money.of("64169.00")

    def test_zero_gst_passes_subtotal_through(self):
        q = quote(_breakdown(), [], NO_GST, None)
        assert q.final_price == q.subtotal == Money.of("62300.00")


class TestAdditionalCharges:

    def test_charges_are_taxed(self):
        charges = [AdditionalCharge("Hallmarking", Money.of("250"))]
        q = quote(_breakdown(), charges, GST_3, None)
        assert q.additional_charges == Money.of("250.00")
        assert q.gst_amount == Money.of("1876.50")
        assert q.calculated_price == Money.of("64426.50")


class TestDiscount:

    def test_percentage_discount(self):
        q = quote(_breakdown(), [], GST_3, Discount(DiscountType.PERCENTAGE, Decimal("10")))
        assert q.discount_amount == Money.of("6416.90")
        assert q.final_price == Money.of("57752.10")

    def test_percentage_discount_capped_at_100(self):
        q = quote(_breakdown(), [], NO_GST, Discount(DiscountType.PERCENTAGE, Decimal("150")))
        assert q.final_price == Money.zero()

    def test_flat_discount(self):
        q = quote(_breakdown(), [], NO_GST, Discount(DiscountType.FLAT, Decimal("300")))
        assert q.final_price == Money.of("62000.00")

    def test_flat_discount_never_goes_negative(self):
        q = quote(_breakdown(), [], NO_GST, Discount(DiscountType.FLAT, Decimal("100000")))
        assert q.discount_amount == Money.of("62300.00")
        assert q.final_price == Money.zero()

    def test_zero_discount_ignored(self):
        q = quote(_breakdown(), [], NO_GST, Discount(DiscountType.FLAT, Decimal("0")))
        assert q.discount_amount == Money.zero()
