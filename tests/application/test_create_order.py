"""Integration tests for the CreateOrder use case.

Uses the in-memory unit of work, no database.
"""

import pytest

from commerce.application.create_order import CreateOrderHandler
from commerce.application.dto import OrderItemSpec
from commerce.domain.exceptions import (
    InvalidReferenceError,
    TransactionError,
    ValidationError,
)
from tests.fakes import FakeUnitOfWorkFactory, default_store, make_product


def _setup(fail_on_commit: bool = False):
    uow = FakeUnitOfWorkFactory(default_store(), fail_on_commit=fail_on_commit)
    return CreateOrderHandler(uow), uow


class TestCreateOrderHappyPath:

    def test_single_item_order(self):
        handler, uow = _setup()
        dto = handler.handle(1, 40, [OrderItemSpec(10, 2)])

        assert dto.user_id == 1
        assert dto.status == "pending"
        assert dto.total_amount == "40.00"
        assert [(i.product_id, i.quantity) for i in dto.items] == [(10, 2)]
        assert uow.commits == 1

    def test_items_match_request_and_are_visible_afterwards(self):
        handler, uow = _setup()
        specs = [OrderItemSpec(10, 1), OrderItemSpec(11, 3), OrderItemSpec(10, 5)]
        dto = handler.handle(1, "99.90", specs)

        assert len(dto.items) == len(specs)
        stored = uow.store.orders[dto.id]
        assert [(i.product_id, i.quantity.value) for i in stored.items] == [
            (10, 1), (11, 3), (10, 5),
        ]
        assert all(i.order_id == dto.id for i in stored.items)

    def test_sequential_ids(self):
        handler, _ = _setup()
        first = handler.handle(1, 10, [OrderItemSpec(10, 1)])
        second = handler.handle(2, 10, [OrderItemSpec(11, 1)])
        assert second.id == first.id + 1

    def test_quantity_may_arrive_as_text(self):
        handler, _ = _setup()
        dto = handler.handle(1, 10, [OrderItemSpec(10, "4")])
        assert dto.items[0].quantity == 4

    def test_zero_total_is_accepted(self):
        handler, _ = _setup()
        assert handler.handle(1, 0, [OrderItemSpec(10, 1)]).total_amount == "0.00"


class TestCreateOrderValidation:

    @pytest.mark.parametrize("items", [None, []])
    def test_missing_items(self, items):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match="Items and totalAmount are required"):
            handler.handle(1, 40, items)
        assert uow.store.orders == {}

    def test_missing_total(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="required"):
            handler.handle(1, None, [OrderItemSpec(10, 1)])

    def test_non_numeric_total(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid money amount"):
            handler.handle(1, "forty", [OrderItemSpec(10, 1)])

    def test_zero_quantity(self):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle(1, 40, [OrderItemSpec(10, 0)])
        assert uow.lookups["products"] == 0

    def test_quantity_beyond_column_range(self):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match="must not exceed"):
            handler.handle(1, 40, [OrderItemSpec(10, 10**20)])
        assert uow.store.orders == {}

    @pytest.mark.parametrize("spec", [OrderItemSpec(None, 1), OrderItemSpec(10, None)])
    def test_item_missing_a_field_is_a_field_error(self, spec):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match=r"items\[1\]: productId and quantity") as excinfo:
            handler.handle(1, 40, [OrderItemSpec(999, 1), spec])
        assert not isinstance(excinfo.value, InvalidReferenceError)
        assert uow.lookups["products"] == 0


class TestCreateOrderReferentialIntegrity:

    def test_unknown_product_persists_nothing(self):
        handler, uow = _setup()
        with pytest.raises(InvalidReferenceError) as info:
            handler.handle(1, 40, [OrderItemSpec(999, 2)])

        assert info.value.invalid_ids == [999]
        assert uow.store.orders == {}
        assert uow.store.item_count() == 0
        assert uow.commits == 0

    def test_reports_exactly_the_invalid_ids(self):
        handler, _ = _setup()
        with pytest.raises(InvalidReferenceError, match="Invalid product IDs: 998, 999") as info:
            handler.handle(1, 40, [
                OrderItemSpec(10, 1),
                OrderItemSpec(999, 1),
                OrderItemSpec(998, 1),
                OrderItemSpec(999, 2),
            ])
        assert info.value.invalid_ids == [998, 999]

    def test_one_lookup_per_order(self):
        handler, uow = _setup()
        handler.handle(1, 40, [OrderItemSpec(10, 1), OrderItemSpec(11, 1), OrderItemSpec(12, 1)])
        assert uow.lookups["products"] == 1

    def test_soft_deleted_product_is_invalid(self):
        store = default_store()
        store.products[13] = make_product(13, deleted=True)
        handler = CreateOrderHandler(FakeUnitOfWorkFactory(store))
        with pytest.raises(InvalidReferenceError):
            handler.handle(1, 40, [OrderItemSpec(13, 1)])


class TestCreateOrderAtomicity:

    def test_commit_failure_leaves_no_rows(self):
        handler, uow = _setup(fail_on_commit=True)
        with pytest.raises(TransactionError):
            handler.handle(1, 40, [OrderItemSpec(10, 1), OrderItemSpec(11, 1)])
        assert uow.store.orders == {}
        assert uow.store.item_count() == 0
