"""
Domain model representing a Product row from the DB, optionally carrying
its joined Category.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from shop.models.category import Category


@dataclass
class Product:
    id: int
    title: str
    description: Optional[str]
    price: Decimal
    category_id: int
    version: int
    category: Optional[Category] = None

    @classmethod
    def from_row(cls, row) -> "Product":
        """Build a Product from a sqlite3.Row object.

        Rows produced by the category join expose ``category_title`` and
        ``category_version``; when present the Category is attached.
        """
        category = None
        if "category_title" in row.keys() and row["category_title"] is not None:
            category = Category(
                id=row["category_id"],
                title=row["category_title"],
                version=row["category_version"],
            )
        return cls(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            price=Decimal(row["price"]),
            category_id=row["category_id"],
            version=row["version"],
            category=category,
        )
