"""Abstract repository for Product.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Set

from commerce.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def existing_ids(self, ids: Set[int]) -> set[int]:
        """Return the subset of *ids* naming live (not soft-deleted) products.

        Implementations must answer with a single batch lookup.
        """

    @abstractmethod
    def add_all(self, products: list[Product]) -> None:
        """Stage a batch insert; assigns ids."""
