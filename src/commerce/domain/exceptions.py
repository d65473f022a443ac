"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and translate them into
exit codes or status codes.
"""

from __future__ import annotations

from collections.abc import Iterable


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request was malformed or a business rule was violated."""


class InvalidTransitionError(ValidationError):
    """The order's current status does not allow the requested change."""


class InvalidReferenceError(ValidationError):
    """One or more foreign keys point at entities that do not exist."""

    def __init__(self, entity: str, invalid_ids: Iterable[int]) -> None:
        self.entity = entity
        self.invalid_ids = sorted(invalid_ids)
        joined = ", ".join(str(i) for i in self.invalid_ids)
        super().__init__(f"Invalid {entity} IDs: {joined}")


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class ForbiddenError(DomainException):
    """The requester is authenticated but not entitled to the operation."""


class UnauthorizedError(DomainException):
    """The request carries no usable credential."""


class TransactionError(DomainException):
    """The unit of work failed to commit; nothing was persisted."""


class TransactionTimeoutError(TransactionError, TimeoutError):
    """The unit of work exceeded its time budget and was rolled back."""
