from __future__ import annotations

from fastapi import Request

from commerce.domain.repository.unit_of_work import UnitOfWorkFactory


def uow_factory(request: Request) -> UnitOfWorkFactory:
    return request.app.state.uow_factory
