"""Domain service: Referential Validator.

Partitions candidate foreign keys into the ones that exist and the ones
that do not. The existence check is handed the whole id set at once so the
cost is one query per call no matter how large the batch is.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Set
from dataclasses import dataclass

ExistenceCheck = Callable[[Set[int]], Set[int]]


@dataclass(frozen=True)
class ReferenceCheck:
    valid: frozenset[int]
    invalid: frozenset[int]

    @property
    def ok(self) -> bool:
        return not self.invalid


def validate_references(ids: Iterable[int], existence_check: ExistenceCheck) -> ReferenceCheck:
    """Split *ids* into valid and invalid using a single batch lookup."""
    candidates = frozenset(ids)
    if not candidates:
        return ReferenceCheck(valid=frozenset(), invalid=frozenset())

    existing = frozenset(existence_check(candidates)) & candidates
    return ReferenceCheck(valid=existing, invalid=candidates - existing)
