"""
Repository layer for Product persistence.
All SQL for the `products` table lives here. Reads join the owning
category so every hydrated Product carries it.
"""
import sqlite3

from shop.models.product import Product
from shop.repositories.base import Repository


class ProductRepository(Repository[Product]):
    table = "products"
    columns = ("title", "description", "price", "category_id")

    def _hydrate(self, row: sqlite3.Row) -> Product:
        return Product.from_row(row)

    def _select(self) -> str:
        return (
            "SELECT p.*, c.title AS category_title, c.version AS category_version "
            "FROM products AS p "
            "JOIN categories AS c ON c.id = p.category_id"
        )

    def _column_ref(self, column: str) -> str:
        return f"p.{column}"

    def list_by_category(self, category_id: int) -> list[Product]:
        """Return every product in a category, possibly none."""
        return self.list_by_field("category_id", category_id)
