"""Integration tests for order ingestion (row aggregation + batch commit)."""

import logging

from commerce.application.create_orders_batch import CreateOrdersBatchHandler
from commerce.application.migrate_orders import MigrateOrdersHandler, aggregate_order_rows
from tests.fakes import FakeUnitOfWorkFactory, default_store


def _row(user_id, total, product_id, quantity):
    return {
        "userId": str(user_id),
        "totalAmount": str(total),
        "productId": str(product_id),
        "quantity": str(quantity),
    }


class TestAggregation:

    def test_rows_group_by_user(self):
        groups, skipped = aggregate_order_rows([
            _row(1, 40, 10, 2),
            _row(2, 15, 11, 1),
            _row(1, 40, 12, 1),
        ])
        assert skipped == []
        assert [(g.user_id, len(g.items)) for g in groups] == [(1, 2), (2, 1)]
        assert [s.product_id for s in groups[0].items] == [10, 12]

    def test_rows_are_consumed_lazily(self):
        def rows():
            yield _row(1, 40, 10, 2)
            yield _row(1, 40, 11, 1)

        groups, _ = aggregate_order_rows(rows())
        assert len(groups[0].items) == 2

    def test_last_total_wins_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            groups, _ = aggregate_order_rows([
                _row(1, 40, 10, 2),
                _row(1, 55, 11, 1),
            ])
        assert groups[0].total_amount == "55"
        assert "disagree on totalAmount" in caplog.text

    def test_blank_total_does_not_override(self):
        groups, _ = aggregate_order_rows([_row(1, 40, 10, 2), _row(1, "", 11, 1)])
        assert groups[0].total_amount == "40"

    def test_unreadable_user_drops_only_that_row(self):
        groups, skipped = aggregate_order_rows([_row("x", 40, 10, 2), _row(1, 40, 10, 1)])
        assert len(groups) == 1
        assert skipped[0].source == "line 2"

    def test_bad_product_cell_poisons_the_group(self):
        groups, skipped = aggregate_order_rows([
            _row(1, 40, 10, 2),
            _row(1, 40, "ten", 1),
            _row(2, 15, 11, 1),
        ])
        assert [g.user_id for g in groups] == [2]
        assert skipped[0].source == "userId=1"
        assert "line 3" in skipped[0].reason


class TestMigrateOrders:

    def _handler(self, store=None, fail_on_commit=False):
        uow = FakeUnitOfWorkFactory(store or default_store(), fail_on_commit=fail_on_commit)
        return MigrateOrdersHandler(CreateOrdersBatchHandler(uow)), uow

    def test_n_groups_with_k_bad_commit_n_minus_k(self):
        handler, uow = self._handler()
        rows = [
            _row(1, 40, 10, 2),
            _row(1, 40, 11, 1),
            _row(2, 15, 999, 1),   # user 2 references a missing product
            _row(3, 20, 12, 4),
            _row(3, 20, 997, 1),   # and so does user 3
        ]
        report = handler.handle(rows)

        assert report.migrated == 1
        assert len(uow.store.orders) == 1
        assert {s.source: s.invalid_ids for s in report.skipped} == {
            "userId=2": (999,),
            "userId=3": (997,),
        }

    def test_reading_skips_come_first_in_report(self):
        handler, _ = self._handler()
        report = handler.handle([_row("?", 1, 10, 1), _row(2, 15, 999, 1), _row(1, 5, 10, 1)])
        assert [s.source for s in report.skipped] == ["line 2", "userId=2"]
        assert report.migrated == 1

    def test_per_group_commit_mode(self):
        handler, uow = self._handler()
        handler.handle([_row(1, 40, 10, 2), _row(2, 15, 11, 1)], per_group_commit=True)
        assert uow.commits == 2
