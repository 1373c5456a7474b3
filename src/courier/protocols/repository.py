"""Repository protocol definitions."""

from typing import Optional, Protocol, runtime_checkable

from courier.models.product import Product


@runtime_checkable
class ProductRepository(Protocol):
    """Narrow persistence interface for products."""

    def save(self, product: Product) -> Product:
        """
        Insert a product without an id, or update the row matching its id.

        Returns:
            The stored product, with ``id`` assigned
        """
        ...

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product with this id, or None."""
        ...

    def find_all(self) -> list[Product]:
        """Return every stored product."""
        ...

    def delete_by_id(self, product_id: int) -> None:
        """Delete the product with this id. Missing ids are ignored."""
        ...

    def delete_all(self) -> None:
        """Delete every stored product."""
        ...
