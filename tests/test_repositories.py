"""Repository tests against a real SQLite database."""
from decimal import Decimal

import pytest

from shop.core.exceptions import ConcurrencyConflictError, PersistenceError
from shop.repositories.category_repository import CategoryRepository
from shop.repositories.product_repository import ProductRepository


@pytest.fixture
def categories(conn):
    return CategoryRepository(conn)


@pytest.fixture
def products(conn):
    return ProductRepository(conn)


class TestCategoryRepository:
    """CRUD and version handling on the categories table."""

    def test_insert_assigns_id_and_version(self, categories):
        category = categories.insert({"title": "Books"})

        assert category.id is not None
        assert category.version == 1
        assert categories.get_by_id(category.id) == category

    def test_get_missing_returns_none(self, categories):
        assert categories.get_by_id(404) is None

    def test_list_all_orders_by_id(self, categories):
        first = categories.insert({"title": "Books"})
        second = categories.insert({"title": "Games"})

        assert [c.id for c in categories.list_all()] == [first.id, second.id]

    def test_replace_bumps_version(self, categories):
        category = categories.insert({"title": "Books"})

        updated = categories.replace(category.id, {"title": "Novels"}, expected_version=1)

        assert updated.title == "Novels"
        assert updated.version == 2

    def test_replace_with_stale_version_conflicts(self, categories):
        category = categories.insert({"title": "Books"})
        categories.replace(category.id, {"title": "Novels"}, expected_version=1)

        with pytest.raises(ConcurrencyConflictError):
            categories.replace(category.id, {"title": "Comics"}, expected_version=1)

        assert categories.get_by_id(category.id).title == "Novels"

    def test_replace_deleted_record_conflicts(self, categories):
        category = categories.insert({"title": "Books"})
        categories.delete(category.id)

        with pytest.raises(ConcurrencyConflictError):
            categories.replace(category.id, {"title": "Novels"}, expected_version=1)

    def test_conflict_is_a_persistence_error(self):
        assert issubclass(ConcurrencyConflictError, PersistenceError)

    def test_delete(self, categories):
        category = categories.insert({"title": "Books"})

        assert categories.delete(category.id) is True
        assert categories.get_by_id(category.id) is None
        assert categories.delete(category.id) is False

    def test_list_by_field_rejects_unknown_column(self, categories):
        with pytest.raises(ValueError):
            categories.list_by_field("title; DROP TABLE categories", "x")

    def test_insert_rejects_unknown_column(self, categories):
        with pytest.raises(ValueError):
            categories.insert({"title": "Books", "id": 7})

    def test_ids_beyond_integer_range_name_no_record(self, categories):
        huge = 2**70

        assert categories.get_by_id(huge) is None
        assert categories.list_by_field("id", huge) == []
        assert categories.delete(huge) is False
        with pytest.raises(ConcurrencyConflictError):
            categories.replace(huge, {"title": "Books"}, expected_version=1)

    def test_unstorable_column_value_is_a_persistence_error(self, categories):
        """Binding overflow surfaces as a store failure, never a raw OverflowError."""
        with pytest.raises(PersistenceError):
            categories.insert({"title": 2**70})

    def test_store_failure_raises_persistence_error(self, categories, conn):
        conn.execute("DROP TABLE products")
        conn.execute("DROP TABLE categories")

        with pytest.raises(PersistenceError):
            categories.insert({"title": "Books"})
        with pytest.raises(PersistenceError):
            categories.list_all()


class TestProductRepository:
    """Products join their category on every read."""

    def _product(self, category_id, **overrides):
        values = {
            "title": "Go",
            "description": None,
            "price": "10",
            "category_id": category_id,
        }
        values.update(overrides)
        return values

    def test_insert_joins_category(self, categories, products):
        books = categories.insert({"title": "Books"})

        product = products.insert(self._product(books.id))

        assert product.id is not None
        assert product.price == Decimal("10")
        assert product.category is not None
        assert product.category.title == "Books"

    def test_list_by_category(self, categories, products):
        books = categories.insert({"title": "Books"})
        games = categories.insert({"title": "Games"})
        go = products.insert(self._product(books.id))
        products.insert(self._product(games.id, title="Chess"))

        listed = products.list_by_category(books.id)

        assert [p.id for p in listed] == [go.id]
        assert products.list_by_category(999) == []

    def test_insert_with_unknown_category_fails(self, products):
        with pytest.raises(PersistenceError):
            products.insert(self._product(999))

    def test_decimal_price_round_trips_exactly(self, categories, products):
        books = categories.insert({"title": "Books"})

        product = products.insert(self._product(books.id, price="19.99"))

        assert products.get_by_id(product.id).price == Decimal("19.99")

    def test_deleting_category_cascades(self, categories, products):
        books = categories.insert({"title": "Books"})
        product = products.insert(self._product(books.id))

        categories.delete(books.id)

        assert products.get_by_id(product.id) is None
        assert products.list_all() == []

    def test_replace_moves_product_and_bumps_version(self, categories, products):
        books = categories.insert({"title": "Books"})
        games = categories.insert({"title": "Games"})
        product = products.insert(self._product(books.id))

        updated = products.replace(
            product.id, self._product(games.id, title="Chess"), expected_version=1
        )

        assert updated.category_id == games.id
        assert updated.category.title == "Games"
        assert updated.version == 2
