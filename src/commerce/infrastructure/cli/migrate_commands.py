"""CLI commands for bulk ingestion.

Both commands run to completion or exit non-zero. Rows that are skipped
are listed in the summary; they never fail the run on their own.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from commerce.application.create_orders_batch import CreateOrdersBatchHandler
from commerce.application.dto import IngestionReport
from commerce.application.migrate_orders import ORDER_FIELDS, MigrateOrdersHandler
from commerce.application.migrate_products import PRODUCT_FIELDS, MigrateProductsHandler
from commerce.domain.exceptions import DomainException, TransactionError
from commerce.infrastructure.bootstrap import (
    settings,
    unit_of_work_factory,
    user_existence_check,
)
from commerce.infrastructure.csv_source import read_csv_rows

logger = logging.getLogger(__name__)

_CSV_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def _print_report(kind: str, report: IngestionReport) -> None:
    click.echo(f"{report.migrated} {kind}(s) migrated, {len(report.skipped)} skipped")
    if not report.skipped:
        return
    click.echo()
    click.echo(f"  {'Source':<16} {'Reason'}")
    click.echo(f"  {'-'*60}")
    for skip in report.skipped:
        click.echo(f"  {skip.source:<16} {skip.reason}")


@click.command("orders")
@click.argument("csv_file", type=_CSV_PATH)
@click.option(
    "--commit-mode",
    type=click.Choice(["file", "group"]),
    default="file",
    show_default=True,
    help="One transaction for the whole file, or one per order.",
)
def migrate_orders(csv_file: Path, commit_mode: str) -> None:
    """Import orders from a userId,totalAmount,productId,quantity CSV."""
    logger.info("Starting order migration from %s", csv_file)
    handler = MigrateOrdersHandler(CreateOrdersBatchHandler(unit_of_work_factory()))

    try:
        report = handler.handle(
            read_csv_rows(csv_file, ORDER_FIELDS),
            per_group_commit=commit_mode == "group",
        )
    except TransactionError as exc:
        logger.exception("Order migration failed; nothing was imported")
        raise click.ClickException(f"Migration failed: {exc}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_report("order", report)


@click.command("products")
@click.argument("csv_file", type=_CSV_PATH)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum concurrent seller lookups (default from settings).",
)
def migrate_products(csv_file: Path, concurrency: int | None) -> None:
    """Import products from a name,price,description,stock,sellerId CSV."""
    logger.info("Starting product migration from %s", csv_file)
    handler = MigrateProductsHandler(
        uow_factory=unit_of_work_factory(),
        user_exists=user_existence_check(),
        max_concurrency=concurrency or settings().ingest_concurrency,
    )

    try:
        report = handler.handle(read_csv_rows(csv_file, PRODUCT_FIELDS))
    except TransactionError as exc:
        logger.exception("Product migration failed; nothing was imported")
        raise click.ClickException(f"Migration failed: {exc}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_report("product", report)
