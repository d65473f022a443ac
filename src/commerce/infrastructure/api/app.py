"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.infrastructure.api import order_item_routes, order_routes
from commerce.infrastructure.api.auth import Authenticator, header_authenticator
from commerce.infrastructure.api.errors import register_error_handlers
from commerce.infrastructure.bootstrap import settings, unit_of_work_factory
from commerce.infrastructure.logging_config import configure_logging

API_PREFIX = "/v1"


def create_app(
    uow_factory: UnitOfWorkFactory,
    authenticate: Authenticator = header_authenticator,
) -> FastAPI:
    app = FastAPI(title="Commerce Orders API")
    app.state.uow_factory = uow_factory
    app.state.authenticate = authenticate

    register_error_handlers(app)
    app.include_router(order_routes.router, prefix=API_PREFIX)
    app.include_router(order_item_routes.router, prefix=API_PREFIX)
    return app


def build_app() -> FastAPI:
    """Wire the app from the environment.

    Served with ``uvicorn --factory commerce.infrastructure.api.app:build_app``
    (installed by the ``serve`` extra).
    """
    configure_logging(settings().log_level)
    return create_app(unit_of_work_factory())
