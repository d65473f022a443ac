import pytest

from commerce.infrastructure.bootstrap import unit_of_work_factory
from tests.db import memory_database


@pytest.fixture
def session_factory():
    engine, factory = memory_database()
    yield factory
    engine.dispose()


@pytest.fixture
def uow_factory(session_factory):
    return unit_of_work_factory(session_factory, timeout_seconds=30)
