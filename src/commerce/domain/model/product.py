"""Product entity.

Products are shared, read-mostly referents from the order subsystem's
point of view: orders point at them, but never change them.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce.domain.exceptions import ValidationError
from commerce.domain.model.value_objects import MAX_COUNT, Money


@dataclass
class Product:
    """A product in the catalog, owned by a seller."""

    id: int | None
    name: str
    price: Money
    stock: int
    seller_id: int
    description: str | None = None
    is_deleted: bool = False

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock: int,
        seller_id: int,
        description: str | None = None,
    ) -> Product:
        """Create a new catalog entry, enforcing the column constraints."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if isinstance(stock, bool) or not isinstance(stock, int):
            raise ValidationError(f"Product stock must be an integer, got {stock!r}")
        if not 0 <= stock <= MAX_COUNT:
            raise ValidationError(
                f"Product stock must be an integer between 0 and {MAX_COUNT}, got {stock!r}"
            )
        return Product(
            id=None,
            name=name.strip(),
            price=price,
            stock=stock,
            seller_id=seller_id,
            description=description,
        )
