"""SQLAlchemy-backed product repository."""

import logging
from typing import Optional

from sqlalchemy import Column, Identity, Integer, MetaData, Numeric, String, Table, delete, insert, select, update
from sqlalchemy.engine import Engine

from courier.models.product import Product

logger = logging.getLogger(__name__)

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", Integer, Identity(), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
)


def _to_product(row) -> Product:
    return Product(id=row.id, name=row.name, price=row.price)


class SqlAlchemyProductRepository:
    """
    ProductRepository over an explicit ``products`` table.

    Every call runs in its own transaction.
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    def create_schema(self) -> None:
        metadata.create_all(self._engine)

    def drop_schema(self) -> None:
        metadata.drop_all(self._engine)

    def save(self, product: Product) -> Product:
        values = {"name": product.name, "price": product.price}
        with self._engine.begin() as conn:
            if product.id is None:
                result = conn.execute(insert(products).values(**values))
                product_id = result.inserted_primary_key[0]
            else:
                product_id = product.id
                result = conn.execute(update(products).where(products.c.id == product_id).values(**values))
                if result.rowcount == 0:
                    conn.execute(insert(products).values(id=product_id, **values))
        logger.debug("Saved product %s", product_id)
        return product.model_copy(update={"id": product_id})

    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._engine.connect() as conn:
            row = conn.execute(select(products).where(products.c.id == product_id)).first()
        return _to_product(row) if row is not None else None

    def find_all(self) -> list[Product]:
        with self._engine.connect() as conn:
            rows = conn.execute(select(products).order_by(products.c.id)).all()
        return [_to_product(row) for row in rows]

    def delete_by_id(self, product_id: int) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(products).where(products.c.id == product_id))

    def delete_all(self) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(products))
