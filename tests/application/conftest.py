import pytest

from commerce.application.create_order import CreateOrderHandler
from commerce.application.dto import OrderItemSpec
from tests.fakes import FakeUnitOfWorkFactory, default_store


@pytest.fixture
def uow():
    return FakeUnitOfWorkFactory(default_store())


@pytest.fixture
def place_order(uow):
    """Create a pending order through the real use case and return its DTO."""

    def _place(user_id=1, items=((10, 2), (11, 1)), total="40"):
        specs = [OrderItemSpec(product_id=p, quantity=q) for p, q in items]
        return CreateOrderHandler(uow).handle(user_id, total, specs)

    return _place
