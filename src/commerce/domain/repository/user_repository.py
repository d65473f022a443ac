"""Abstract repository for User lookups."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Set


class UserRepository(ABC):

    @abstractmethod
    def existing_ids(self, ids: Set[int]) -> set[int]:
        """Return the subset of *ids* naming live users (one batch lookup)."""

    def exists(self, user_id: int) -> bool:
        return user_id in self.existing_ids({user_id})
