"""Integration tests for the PriceProduct and RepriceCatalog use cases."""

from decimal import Decimal

import pytest

from jewelcat.application.price_product import PriceProductHandler
from jewelcat.application.reprice_catalog import RepriceCatalogHandler
from jewelcat.domain.exceptions import DanglingReferenceError, InactiveVariantError, NotFoundError
from jewelcat.domain.model.material import GemstoneVariant
from jewelcat.domain.model.product import AdditionalCharge, Discount, DiscountType, Product
from jewelcat.domain.model.value_objects import Money, Percentage
from tests.builders import gem_line, gold, metal_line, ring, ruby
from tests.fakes import FakeUnitOfWork


class TestPriceProduct:

    def test_reference_scenario(self):
        uow = FakeUnitOfWork(materials=[gold()], products=[ring()])
        dto = PriceProductHandler(uow).handle("ring")
        assert dto.available
        assert dto.subtotal == "INR 62,300.00"
        assert dto.final_price == "INR 62,300.00"
        (line,) = dto.lines
        assert line.base == "INR 60,000.00"
        assert line.wastage == "INR 1,800.00"
        assert line.making == "INR 500.00"
        assert line.line_total == "INR 62,300.00"

    def test_full_quote(self):
        product = Product(
            id="pendant",
            name="Ruby Pendant",
            lines=[metal_line(), gem_line()],
            additional_charges=[AdditionalCharge("Certification", Money.of("1200"))],
            gst_percentage=Percentage(Decimal("3")),
            discount=Discount(DiscountType.FLAT, Decimal("1000")),
        )
        uow = FakeUnitOfWork(materials=[gold(), ruby()], products=[product])
        dto = PriceProductHandler(uow).handle("pendant")
        # 84800 + 1200 = 86000; GST 2580; less 1000
        assert dto.subtotal == "INR 84,800.00"
        assert dto.gst == "INR 2,580.00"
        assert dto.discount == "INR 1,000.00"
        assert dto.final_price == "INR 87,580.00"

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            PriceProductHandler(FakeUnitOfWork(materials=[gold()])).handle("ring")

    def test_deleted_product(self):
        product = ring()
        product.mark_deleted()
        uow = FakeUnitOfWork(materials=[gold()], products=[product])
        with pytest.raises(NotFoundError):
            PriceProductHandler(uow).handle("ring")

    def test_dangling_index_fails_without_a_number(self):
        uow = FakeUnitOfWork(materials=[gold()], products=[ring(lines=[metal_line(index=5)])])
        with pytest.raises(DanglingReferenceError):
            PriceProductHandler(uow).handle("ring")

    def test_deactivated_variant(self):
        stone = ruby()
        uow = FakeUnitOfWork(materials=[gold(), stone], products=[ring(lines=[gem_line()])])
        stone.variants[0] = GemstoneVariant(
            name="Burmese Ruby", unit_price=Money.of("45000"),
            is_active=False, variant_id="ruby-burmese",
        )
        with pytest.raises(InactiveVariantError):
            PriceProductHandler(uow).handle("ring")

    def test_material_deleted_after_save(self):
        metal = gold()
        metal.mark_deleted()
        uow = FakeUnitOfWork(materials=[metal], products=[ring()])
        with pytest.raises(DanglingReferenceError, match="not found or deleted"):
            PriceProductHandler(uow).handle("ring")

    def test_variant_removed_shifts_slot(self):
        metal = gold()
        del metal.variants[0]
        product = ring(lines=[metal_line(index=0, variant_id="gold-22k")])
        uow = FakeUnitOfWork(materials=[metal], products=[product])
        with pytest.raises(DanglingReferenceError, match="different variant"):
            PriceProductHandler(uow).handle("ring")


class TestRepriceCatalog:

    def _uow(self) -> FakeUnitOfWork:
        return FakeUnitOfWork(
            materials=[gold(), ruby()],
            products=[
                ring("a-ring"),
                ring("b-broken", [metal_line(), metal_line(index=7)]),
                ring("c-pendant", [gem_line()]),
            ],
        )

    def test_prices_every_active_product_in_id_order(self):
        results = RepriceCatalogHandler(self._uow()).handle()
        assert [r.product_id for r in results] == ["a-ring", "b-broken", "c-pendant"]

    def test_broken_product_reported_unavailable(self):
        results = {r.product_id: r for r in RepriceCatalogHandler(self._uow()).handle()}
        broken = results["b-broken"]
        assert not broken.available
        assert broken.final_price is None
        assert "variant 7" in broken.unavailable_reason

    def test_others_still_priced(self):
        results = {r.product_id: r for r in RepriceCatalogHandler(self._uow()).handle()}
        assert results["a-ring"].final_price == "INR 62,300.00"
        assert results["c-pendant"].final_price == "INR 22,500.00"

    def test_deleted_products_skipped(self):
        uow = self._uow()
        uow.products.get_by_id("b-broken").mark_deleted()
        results = RepriceCatalogHandler(uow).handle()
        assert all(r.available for r in results)
        assert len(results) == 2

    def test_writes_nothing(self):
        uow = self._uow()
        RepriceCatalogHandler(uow).handle()
        assert uow.commits == 0

    def test_non_pricing_domain_error_reported_per_product(self):
        # A charge stored in another currency cannot be added to an INR subtotal
        foreign = ring("b-foreign")
        foreign.additional_charges = [AdditionalCharge("Shipping", Money(Decimal("10"), "USD"))]
        uow = FakeUnitOfWork(materials=[gold()], products=[ring("a-ring"), foreign])
        results = {r.product_id: r for r in RepriceCatalogHandler(uow).handle()}
        assert not results["b-foreign"].available
        assert "Cannot combine" in results["b-foreign"].unavailable_reason
        assert results["a-ring"].final_price == "INR 62,300.00"
