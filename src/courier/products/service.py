"""Product service: validation on top of a ProductRepository."""

import logging
from decimal import Decimal
from typing import Optional

import pydantic

from courier.errors import NotFoundError, ValidationError
from courier.models.product import Price, Product
from courier.protocols.repository import ProductRepository

logger = logging.getLogger(__name__)

_price_adapter = pydantic.TypeAdapter(Price)


def _check_price(price: Decimal) -> Decimal:
    """Reject NaN, infinite, over-precise and negative prices."""
    try:
        price = _price_adapter.validate_python(price)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid product price: {price!r}") from e
    if price < 0:
        raise ValidationError("Product price cannot be negative")
    return price


class ProductService:
    """CRUD operations for products. Prices must be non-negative."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def create_product(self, product: Product) -> Product:
        """
        Validate and store a new product.

        Raises:
            ValidationError: If the price is negative; nothing is stored
        """
        _check_price(product.price)
        saved = self.repository.save(product)
        logger.info("Created product %s (%s)", saved.id, saved.name)
        return saved

    def get_all_products(self) -> list[Product]:
        return self.repository.find_all()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.repository.find_by_id(product_id)

    def update_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        price: Optional[Decimal] = None,
    ) -> Product:
        """
        Change the given fields of an existing product; omitted fields keep their value.

        Raises:
            ValidationError: If the new price is negative or not a valid NUMERIC(12, 2) value
            NotFoundError: If no product has this id
        """
        if price is not None:
            price = _check_price(price)

        saved = self.repository.find_by_id(product_id)
        if saved is None:
            raise NotFoundError(product_id)

        changes = {}
        if name is not None:
            changes["name"] = name
        if price is not None:
            changes["price"] = price

        updated = self.repository.save(Product.model_validate({**saved.model_dump(), **changes}))
        logger.info("Updated product %s: %s", product_id, sorted(changes))
        return updated

    def delete_product(self, product_id: int) -> None:
        """Delete a product. Deleting an unknown id does nothing."""
        self.repository.delete_by_id(product_id)
