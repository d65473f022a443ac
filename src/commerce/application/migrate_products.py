"""Application service: Migrate Products use case (bulk ingestion).

Rows with a missing or malformed field are skipped as they are read.
Seller existence is checked with a bounded pool of concurrent lookups,
one per distinct seller id, fanned in before anything is written. Every
product that survives is inserted in a single atomic batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor

from commerce.application.dto import IngestionReport, SkipRecord
from commerce.application.migrate_orders import parse_id
from commerce.domain.exceptions import ValidationError
from commerce.domain.model.product import Product
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("name", "price", "description", "stock", "sellerId")

DEFAULT_MAX_CONCURRENCY = 8


def parse_product_row(row: Mapping[str, str | None]) -> Product:
    missing = [name for name in PRODUCT_FIELDS if not (row.get(name) or "").strip()]
    if missing:
        raise ValidationError(f"Missing field(s): {', '.join(missing)}")

    stock_raw = row["stock"].strip()  # type: ignore[union-attr]
    try:
        stock = int(stock_raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid stock: {stock_raw!r}") from exc

    return Product.create(
        name=row["name"],  # type: ignore[arg-type]
        price=Money.of(row["price"]),
        stock=stock,
        seller_id=parse_id(row, "sellerId"),
        description=row["description"].strip(),  # type: ignore[union-attr]
    )


class MigrateProductsHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        user_exists: Callable[[int], bool],
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._uow_factory = uow_factory
        self._user_exists = user_exists
        self._max_concurrency = max_concurrency

    def handle(self, rows: Iterable[Mapping[str, str | None]]) -> IngestionReport:
        report = IngestionReport()
        candidates: list[tuple[int, Product]] = []
        lookups: dict[int, Future[bool]] = {}

        with ThreadPoolExecutor(
            max_workers=self._max_concurrency, thread_name_prefix="seller-check"
        ) as pool:
            # Line 1 is the header.
            for line_no, row in enumerate(rows, start=2):
                try:
                    product = parse_product_row(row)
                except ValidationError as exc:
                    logger.warning("Skipping line %d: %s", line_no, exc)
                    report.skipped.append(SkipRecord(f"line {line_no}", str(exc)))
                    continue

                if product.seller_id not in lookups:
                    lookups[product.seller_id] = pool.submit(
                        self._user_exists, product.seller_id
                    )
                candidates.append((line_no, product))

            sellers = {seller_id: f.result() for seller_id, f in lookups.items()}

        valid: list[Product] = []
        for line_no, product in candidates:
            if sellers[product.seller_id]:
                valid.append(product)
                continue
            logger.warning(
                "Skipping product %s: seller_id %s not found", product.name, product.seller_id
            )
            report.skipped.append(
                SkipRecord(
                    f"line {line_no}",
                    f"Seller {product.seller_id} not found",
                    (product.seller_id,),
                )
            )

        if not valid:
            logger.info("No valid products to insert")
            return report

        with self._uow_factory() as uow:
            uow.products.add_all(valid)
            uow.commit()

        report.created_ids.extend(p.id for p in valid)  # type: ignore[misc]
        report.migrated = len(valid)
        logger.info(
            "Product migration committed: %d inserted, %d skipped",
            report.migrated,
            len(report.skipped),
        )
        return report
