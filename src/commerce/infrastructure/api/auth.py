"""Resolving the authenticated principal for a request.

Token verification happens upstream (the auth gateway); by the time a
request reaches this service the gateway has stamped the caller's id and
role on it. The resolver is injectable so deployments with a different
gateway contract can swap it.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Request

from commerce.domain.exceptions import UnauthorizedError
from commerce.domain.model.value_objects import Principal, Role

Authenticator = Callable[[Request], Principal | None]

USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"


def header_authenticator(request: Request) -> Principal | None:
    raw_id = request.headers.get(USER_ID_HEADER)
    if not raw_id:
        return None
    try:
        return Principal(
            id=int(raw_id),
            role=Role(request.headers.get(USER_ROLE_HEADER, "user").strip().lower()),
        )
    except ValueError:
        return None


def current_principal(request: Request) -> Principal:
    principal = request.app.state.authenticate(request)
    if principal is None:
        raise UnauthorizedError("Authorization header is missing")
    return principal
