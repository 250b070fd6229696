"""
Repository layer for Category persistence.
All SQL for the `categories` table lives here.
"""
import sqlite3

from shop.models.category import Category
from shop.repositories.base import Repository


class CategoryRepository(Repository[Category]):
    table = "categories"
    columns = ("title",)

    def _hydrate(self, row: sqlite3.Row) -> Category:
        return Category.from_row(row)
