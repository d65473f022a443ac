"""Application service: Migrate Orders use case (bulk ingestion).

Consumes flat ``userId,totalAmount,productId,quantity`` rows, where every
row is one item and rows sharing a userId make up one order. Rows are
aggregated as they stream in; once the source is exhausted the groups are
handed to the batch handler.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from commerce.application.create_orders_batch import CreateOrdersBatchHandler
from commerce.application.dto import IngestionReport, OrderGroup, OrderItemSpec, SkipRecord
from commerce.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

ORDER_FIELDS = ("userId", "totalAmount", "productId", "quantity")


def parse_id(row: Mapping[str, str | None], name: str) -> int:
    raw = (row.get(name) or "").strip()
    if not raw:
        raise ValidationError(f"{name} is required")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid {name}: {raw!r}") from exc


@dataclass
class _PendingGroup:
    user_id: int
    total_amount: str | None = None
    items: list[OrderItemSpec] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)


def aggregate_order_rows(
    rows: Iterable[Mapping[str, str | None]],
) -> tuple[list[OrderGroup], list[SkipRecord]]:
    """Group item rows by userId.

    A row whose userId cannot be read is dropped on its own. Any other bad
    cell poisons the whole group, so an order is never created with some of
    its items missing. When rows of one group disagree on totalAmount the
    last non-empty value wins.
    """
    pending: dict[int, _PendingGroup] = {}
    skipped: list[SkipRecord] = []

    # Line 1 is the header.
    for line_no, row in enumerate(rows, start=2):
        try:
            user_id = parse_id(row, "userId")
        except ValidationError as exc:
            logger.warning("Skipping line %d: %s", line_no, exc)
            skipped.append(SkipRecord(f"line {line_no}", str(exc)))
            continue

        group = pending.setdefault(user_id, _PendingGroup(user_id))

        total = (row.get("totalAmount") or "").strip()
        if total:
            if group.total_amount is not None and group.total_amount != total:
                logger.warning(
                    "Rows for user %s disagree on totalAmount (%s vs %s); using %s",
                    user_id,
                    group.total_amount,
                    total,
                    total,
                )
            group.total_amount = total

        try:
            product_id = parse_id(row, "productId")
        except ValidationError as exc:
            group.problems.append(f"line {line_no}: {exc}")
            continue
        group.items.append(
            OrderItemSpec(product_id=product_id, quantity=(row.get("quantity") or "").strip())
        )

    groups: list[OrderGroup] = []
    for group in pending.values():
        if group.problems:
            reason = "; ".join(group.problems)
            logger.warning("Skipping order for user %s: %s", group.user_id, reason)
            skipped.append(SkipRecord(f"userId={group.user_id}", reason))
            continue
        groups.append(OrderGroup(group.user_id, group.total_amount, tuple(group.items)))
    return groups, skipped


class MigrateOrdersHandler:

    def __init__(self, batch_handler: CreateOrdersBatchHandler) -> None:
        self._batch_handler = batch_handler

    def handle(
        self,
        rows: Iterable[Mapping[str, str | None]],
        per_group_commit: bool = False,
    ) -> IngestionReport:
        groups, row_skips = aggregate_order_rows(rows)
        logger.info(
            "Order source processed: %d candidate order(s), %d rejected while reading",
            len(groups),
            len(row_skips),
        )

        report = self._batch_handler.handle(groups, per_group_commit=per_group_commit)
        report.skipped[:0] = row_skips
        return report
