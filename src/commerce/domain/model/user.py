"""User entity. Only ever a lookup target for this subsystem."""

from __future__ import annotations

from dataclasses import dataclass

from commerce.domain.model.value_objects import Role


@dataclass
class User:
    id: int | None
    email: str
    password: str  # opaque hash
    role: Role = Role.USER
    is_deleted: bool = False
