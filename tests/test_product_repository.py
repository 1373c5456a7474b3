"""Tests for SqlAlchemyProductRepository and ProductService on in-memory SQLite."""

from decimal import Decimal

import pydantic
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from courier.errors import NotFoundError, ValidationError
from courier.models.product import Product
from courier.products.repository import SqlAlchemyProductRepository
from courier.products.service import ProductService


@pytest.fixture
def repository():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    repository = SqlAlchemyProductRepository(engine)
    repository.create_schema()
    yield repository
    engine.dispose()


@pytest.fixture
def service(repository):
    return ProductService(repository)


@pytest.mark.filterwarnings("ignore::sqlalchemy.exc.SAWarning")
class TestProductStore:
    """CRUD behaviour against a real SQL engine."""

    def test_save_and_find_product(self, service):
        saved = service.create_product(Product(name="Laptop", price=Decimal("1200.00")))

        assert saved.id is not None
        assert saved.name == "Laptop"

        found = service.get_product_by_id(saved.id)
        assert found is not None
        assert found.name == "Laptop"
        assert found.price == Decimal("1200.00")

    def test_ids_are_assigned_incrementally(self, service):
        first = service.create_product(Product(name="A", price=Decimal("1")))
        second = service.create_product(Product(name="B", price=Decimal("2")))

        assert second.id > first.id

    def test_find_all_products(self, service):
        service.create_product(Product(name="Keyboard", price=Decimal("75.00")))
        service.create_product(Product(name="Mouse", price=Decimal("25.00")))

        products = service.get_all_products()

        assert len(products) == 2
        assert sorted(p.name for p in products) == ["Keyboard", "Mouse"]

    def test_update_product(self, service):
        product = service.create_product(Product(name="Monitor", price=Decimal("300.00")))

        updated = service.update_product(product.id, price=Decimal("350.00"))

        assert updated.price == Decimal("350.00")
        assert updated.name == "Monitor"
        found = service.get_product_by_id(product.id)
        assert found.price == Decimal("350.00")
        assert found.name == "Monitor"

    def test_update_missing_product(self, service):
        with pytest.raises(NotFoundError):
            service.update_product(12345, price=Decimal("1"))

    def test_delete_product(self, service):
        product = service.create_product(Product(name="Webcam", price=Decimal("50.00")))

        service.delete_product(product.id)

        assert service.get_product_by_id(product.id) is None
        assert service.get_all_products() == []

    def test_delete_missing_product_is_noop(self, service):
        service.create_product(Product(name="Keep", price=Decimal("1.00")))

        service.delete_product(9999)

        assert [p.name for p in service.get_all_products()] == ["Keep"]

    def test_negative_price_is_not_stored(self, service):
        with pytest.raises(ValidationError):
            service.create_product(Product(name="Invalid Product", price=Decimal("-10.00")))

        assert service.get_all_products() == []

    def test_save_with_id_updates_row(self, repository):
        saved = repository.save(Product(name="Desk", price=Decimal("99.99")))

        repository.save(saved.model_copy(update={"name": "Standing Desk"}))

        assert repository.find_by_id(saved.id).name == "Standing Desk"
        assert len(repository.find_all()) == 1

    def test_delete_all(self, repository):
        repository.save(Product(name="A", price=Decimal("1")))
        repository.save(Product(name="B", price=Decimal("2")))

        repository.delete_all()

        assert repository.find_all() == []

    def test_price_beyond_column_precision_is_rejected(self, service):
        with pytest.raises(pydantic.ValidationError):
            service.create_product(Product(name="Too precise", price=Decimal("19.999")))

        assert service.get_all_products() == []

    def test_created_price_matches_stored_price(self, service):
        created = service.create_product(Product(name="Cable", price=Decimal("19.99")))

        found = service.get_product_by_id(created.id)

        assert created.price == found.price == Decimal("19.99")
