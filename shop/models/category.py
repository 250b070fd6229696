"""
Domain model representing a Category row from the DB.
"""
from dataclasses import dataclass


@dataclass
class Category:
    id: int
    title: str
    version: int

    @classmethod
    def from_row(cls, row) -> "Category":
        """Build a Category from a sqlite3.Row object."""
        return cls(
            id=row["id"],
            title=row["title"],
            version=row["version"],
        )
