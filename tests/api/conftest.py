import pytest
from fastapi.testclient import TestClient

from commerce.infrastructure.api.app import create_app
from commerce.infrastructure.bootstrap import unit_of_work_factory
from tests.api.principals import as_user
from tests.db import memory_database


@pytest.fixture
def client():
    engine, factory = memory_database()
    app = create_app(unit_of_work_factory(factory, timeout_seconds=30))
    with TestClient(app) as client:
        yield client
    engine.dispose()


@pytest.fixture
def create_order(client):
    def _create(user_id=1, items=((10, 2),), total=40):
        body = {
            "items": [{"productId": p, "quantity": q} for p, q in items],
            "totalAmount": total,
        }
        response = client.post("/v1/order", json=body, headers=as_user(user_id))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
