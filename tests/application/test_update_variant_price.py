"""Integration tests for the UpdateVariantPrice use case.

Uses the in-memory unit of work — no file I/O.
"""

from datetime import datetime, timezone

import pytest

from jewelcat.application.price_product import PriceProductHandler
from jewelcat.application.update_variant_price import UpdateVariantPriceHandler
from jewelcat.domain.exceptions import IndexOutOfRangeError, NotFoundError, ValidationError
from jewelcat.domain.model.value_objects import Money
from tests.builders import gold, ring
from tests.fakes import FailingPriceHistoryRepository, FakeUnitOfWork

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def _setup() -> tuple[UpdateVariantPriceHandler, FakeUnitOfWork]:
    uow = FakeUnitOfWork(materials=[gold()], products=[ring()])
    return UpdateVariantPriceHandler(uow, clock=lambda: FIXED_NOW), uow


def _history(uow: FakeUnitOfWork) -> list:
    return list(uow.price_history.query("gold"))


class TestPriceChange:

    def test_updates_price(self):
        handler, uow = _setup()
        dto = handler.handle("gold", 0, "6200", "alice")
        assert dto.variants[0].unit_price == "INR 6,200.00"
        assert uow.materials.get_by_id("gold").variants[0].unit_price == Money.of("6200")
        assert uow.commits == 1

    def test_writes_one_audit_entry(self):
        handler, uow = _setup()
        handler.handle("gold", 0, 6200, "alice")
        (entry,) = _history(uow)
        assert entry.old_price == Money.of("6000")
        assert entry.new_price == Money.of("6200")
        assert entry.variant_name == "22K Gold"
        assert entry.variant_id == "gold-22k"
        assert entry.changed_by == "alice"
        assert entry.changed_at == FIXED_NOW

    def test_old_price_is_the_value_immediately_before(self):
        handler, uow = _setup()
        handler.handle("gold", 0, "6200", "alice")
        handler.handle("gold", 0, "6100", "bob")
        newest, oldest = _history(uow)
        assert oldest.new_price == newest.old_price == Money.of("6200")
        assert newest.new_price == Money.of("6100")

    def test_product_price_follows_on_next_read(self):
        handler, uow = _setup()
        assert PriceProductHandler(uow).handle("ring").final_price == "INR 62,300.00"
        handler.handle("gold", 0, "6200", "alice")
        assert PriceProductHandler(uow).handle("ring").final_price == "INR 64,360.00"

    def test_zero_price_allowed(self):
        handler, uow = _setup()
        handler.handle("gold", 1, "0", "alice")
        assert uow.materials.get_by_id("gold").variants[1].unit_price == Money.zero()


class TestIdempotence:

    def test_same_price_twice_logs_once(self):
        handler, uow = _setup()
        handler.handle("gold", 0, "6200", "alice")
        handler.handle("gold", 0, "6200", "alice")
        assert len(_history(uow)) == 1
        assert uow.commits == 1

    def test_setting_the_stored_price_writes_nothing(self):
        handler, uow = _setup()
        dto = handler.handle("gold", 0, "6000.00", "alice")
        assert dto.variants[0].unit_price == "INR 6,000.00"
        assert _history(uow) == []
        assert uow.commits == 0


class TestRejections:

    def test_unknown_material(self):
        handler, uow = _setup()
        with pytest.raises(NotFoundError, match="not found"):
            handler.handle("platinum", 0, "1", "alice")

    def test_deleted_material(self):
        handler, uow = _setup()
        uow.materials.get_by_id("gold").mark_deleted()
        with pytest.raises(NotFoundError):
            handler.handle("gold", 0, "6200", "alice")

    def test_index_out_of_range(self):
        handler, uow = _setup()
        with pytest.raises(IndexOutOfRangeError):
            handler.handle("gold", 2, "6200", "alice")
        assert _history(uow) == []

    def test_negative_price(self):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            handler.handle("gold", 0, "-1", "alice")

    def test_non_numeric_price(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid price"):
            handler.handle("gold", 0, "cheap", "alice")

    def test_actor_required(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="acting admin"):
            handler.handle("gold", 0, "6200", " ")


class TestAtomicity:

    def test_failed_audit_write_leaves_price_unchanged(self):
        handler, uow = _setup()
        uow.price_history = FailingPriceHistoryRepository()
        with pytest.raises(RuntimeError, match="audit log unavailable"):
            handler.handle("gold", 0, "6200", "alice")
        assert uow.materials.get_by_id("gold").variants[0].unit_price == Money.of("6000")
        assert uow.commits == 0
