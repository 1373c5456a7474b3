"""Product entity model."""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field

# Matches the NUMERIC(12, 2) price column
Price = Annotated[Decimal, Field(max_digits=12, decimal_places=2)]


class Product(BaseModel):
    """A row of the ``products`` table. ``id`` is None until the product is saved."""

    id: Optional[int] = None
    name: str
    price: Price
