import click

from commerce.infrastructure.bootstrap import settings
from commerce.infrastructure.cli.db_commands import db_init
from commerce.infrastructure.cli.migrate_commands import migrate_orders, migrate_products
from commerce.infrastructure.cli.order_commands import order_show, order_status
from commerce.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Commerce: order consistency and bulk ingestion."""
    configure_logging(settings().log_level)


@cli.group()
def db() -> None:
    """Manage the database schema."""


@cli.group()
def migrate() -> None:
    """Import orders and products from CSV exports."""


@cli.group()
def order() -> None:
    """Inspect and administer orders."""


# Register subcommands
db.add_command(db_init)
migrate.add_command(migrate_orders)
migrate.add_command(migrate_products)
order.add_command(order_show)
order.add_command(order_status)
