"""CLI commands for operators; they act with admin rights."""

from __future__ import annotations

import click

from commerce.application.dto import OrderDTO
from commerce.application.show_order import ShowOrderHandler
from commerce.application.update_order_status import UpdateOrderStatusHandler
from commerce.domain.exceptions import DomainException
from commerce.domain.model.value_objects import Principal, Role
from commerce.infrastructure.bootstrap import unit_of_work_factory

# Operators are not users of the shop; id 0 never matches an order owner.
OPERATOR = Principal(id=0, role=Role.ADMIN)


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Updated:  {dto.updated_at}")
    click.echo()
    click.echo(f"  {'Item':<8} {'Product':>10} {'Qty':>5}")
    click.echo(f"  {'-'*25}")
    for item in dto.items:
        click.echo(f"  {item.id:<8} {item.product_id:>10} {item.quantity:>5}")
    click.echo(f"  {'-'*25}")
    click.echo(f"  {'Total amount':<14} {dto.total_amount:>10}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show an order and its items."""
    handler = ShowOrderHandler(unit_of_work_factory())

    try:
        dto = handler.handle(order_id, OPERATOR)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--to", "status", required=True, help="pending, completed or cancelled.")
def order_status(order_id: int, status: str) -> None:
    """Move an order to another status."""
    handler = UpdateOrderStatusHandler(unit_of_work_factory())

    try:
        dto = handler.handle(order_id, status, OPERATOR)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
