"""Application service: Create Orders Batch use case.

Used by bulk ingestion. Each candidate group is screened on its own: a
group that references a missing product or user (or carries a malformed
total / quantity) is skipped and reported, and the batch carries on.

By default every surviving group is committed in ONE transaction, so a
commit-time failure loses the whole batch. With ``per_group_commit`` each
group gets its own transaction instead and a failed commit only costs
that group.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from commerce.application.dto import IngestionReport, OrderGroup, SkipRecord
from commerce.domain.exceptions import TransactionError, ValidationError
from commerce.domain.model.order import Order, OrderItem
from commerce.domain.model.value_objects import Money, Quantity
from commerce.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from commerce.domain.service.referential_validator import (
    ReferenceCheck,
    validate_references,
)

logger = logging.getLogger(__name__)


class CreateOrdersBatchHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        groups: Iterable[OrderGroup],
        per_group_commit: bool = False,
    ) -> IngestionReport:
        groups = list(groups)
        if per_group_commit:
            return self._commit_each(groups)

        report = IngestionReport()
        with self._uow_factory() as uow:
            accepted = self._screen(uow, groups, report)
            for order in accepted:
                uow.orders.add(order)
            uow.commit()

        self._record_created(report, accepted)
        logger.info(
            "Batch committed: %d order(s) created, %d group(s) skipped",
            report.migrated,
            len(report.skipped),
        )
        return report

    def _commit_each(self, groups: Sequence[OrderGroup]) -> IngestionReport:
        report = IngestionReport()
        for group in groups:
            # Inserts flush on add, so a constraint failure can surface there
            # or at commit; either way only this group is lost.
            try:
                with self._uow_factory() as uow:
                    accepted = self._screen(uow, [group], report)
                    if not accepted:
                        continue
                    uow.orders.add(accepted[0])
                    uow.commit()
            except TransactionError as exc:
                logger.exception("Commit failed for order of user %s", group.user_id)
                report.skipped.append(
                    SkipRecord(f"userId={group.user_id}", f"commit failed: {exc}")
                )
                continue
            self._record_created(report, accepted)
        logger.info(
            "Per-group commit finished: %d order(s) created, %d group(s) skipped",
            report.migrated,
            len(report.skipped),
        )
        return report

    # --- Screening ------------------------------------------------------------

    def _screen(
        self,
        uow: UnitOfWork,
        groups: Sequence[OrderGroup],
        report: IngestionReport,
    ) -> list[Order]:
        """Turn valid groups into unsaved Orders; record the rest as skipped.

        Product and user ids of the whole slice are checked with one lookup
        each rather than one lookup per group.
        """
        products = validate_references(
            {spec.product_id for group in groups for spec in group.items},
            uow.products.existing_ids,
        )
        users = validate_references(
            {group.user_id for group in groups}, uow.users.existing_ids
        )

        accepted: list[Order] = []
        for group in groups:
            skip = self._reference_problem(group, products, users)
            if skip is None:
                try:
                    accepted.append(self._build_order(group))
                    continue
                except ValidationError as exc:
                    skip = SkipRecord(f"userId={group.user_id}", str(exc))
            logger.warning("Skipping order for user %s: %s", group.user_id, skip.reason)
            report.skipped.append(skip)
        return accepted

    @staticmethod
    def _reference_problem(
        group: OrderGroup,
        products: ReferenceCheck,
        users: ReferenceCheck,
    ) -> SkipRecord | None:
        source = f"userId={group.user_id}"
        if group.user_id in users.invalid:
            return SkipRecord(source, f"User {group.user_id} not found", (group.user_id,))

        bad = sorted({s.product_id for s in group.items} & products.invalid)
        if bad:
            joined = ", ".join(str(i) for i in bad)
            return SkipRecord(source, f"Invalid product IDs: {joined}", tuple(bad))
        return None

    @staticmethod
    def _build_order(group: OrderGroup) -> Order:
        if group.total_amount is None or group.total_amount == "":
            raise ValidationError("totalAmount is required")
        items = [
            OrderItem(id=None, product_id=spec.product_id, quantity=Quantity.of(spec.quantity))
            for spec in group.items
        ]
        return Order.create(
            user_id=group.user_id,
            total_amount=Money.of(group.total_amount),
            items=items,
        )

    @staticmethod
    def _record_created(report: IngestionReport, orders: list[Order]) -> None:
        report.created_ids.extend(order.id for order in orders)  # type: ignore[misc]
        report.migrated += len(orders)
