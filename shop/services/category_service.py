"""
Category management service.
Validates payloads, guards replaces with the optimistic concurrency version
and turns store failures into user-facing errors.
"""
import sqlite3
from typing import Any
import logging

from shop.core.exceptions import (
    ConcurrencyConflict,
    ConcurrencyConflictError,
    NotFound,
    PersistenceError,
    PersistenceFailed,
)
from shop.models.category import Category
from shop.repositories.category_repository import CategoryRepository
from shop.schemas.category import CategoryPayload
from shop.schemas.validation import validate_payload
from shop.services.payload import read_int

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Category not found"


class CategoryService:
    """Business logic for category operations."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing CategoryService")
        self._repo = CategoryRepository(conn)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        logger.info("Listing categories")
        try:
            return self._repo.list_all()
        except PersistenceError:
            logger.error("Listing categories failed", exc_info=True)
            raise PersistenceFailed("Could not load categories")

    def get_category(self, category_id: int) -> Category:
        """Fetch a category by id or raise NotFound."""
        logger.info("Fetching category id=%s", category_id)
        try:
            category = self._repo.get_by_id(category_id)
        except PersistenceError:
            logger.error("Fetching category id=%s failed", category_id, exc_info=True)
            raise PersistenceFailed("Could not load category")
        if category is None:
            logger.warning("Category id=%s not found", category_id)
            raise NotFound(NOT_FOUND_MESSAGE)
        return category

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_category(self, data: Any) -> Category:
        payload = validate_payload(CategoryPayload, data)
        logger.info("Creating category %s", payload.title)
        try:
            category = self._repo.insert({"title": payload.title})
        except PersistenceError:
            logger.error("Creating category failed", exc_info=True)
            raise PersistenceFailed("Could not create category")
        logger.info("Category created id=%s", category.id)
        return category

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_category(self, category_id: int, data: Any) -> Category:
        """Replace a category.

        The body id must equal *category_id*; a mismatch is reported as
        NotFound. The replace is checked against the version carried in the
        body, or the version read now when the body has none.
        """
        logger.info("Updating category id=%s", category_id)
        if read_int(data, "id") != category_id:
            logger.warning("Category id mismatch for update id=%s", category_id)
            raise NotFound(NOT_FOUND_MESSAGE)

        payload = validate_payload(CategoryPayload, data)
        try:
            expected_version = payload.version or self._current_version(category_id)
            category = self._repo.replace(
                category_id, {"title": payload.title}, expected_version
            )
        except ConcurrencyConflictError:
            logger.warning("Concurrent update detected for category id=%s", category_id)
            raise ConcurrencyConflict()
        except PersistenceError:
            logger.error("Updating category id=%s failed", category_id, exc_info=True)
            raise PersistenceFailed("Could not update category")
        logger.info("Category updated id=%s version=%s", category_id, category.version)
        return category

    def _current_version(self, category_id: int) -> int:
        category = self._repo.get_by_id(category_id)
        if category is None:
            raise ConcurrencyConflictError(f"categories id={category_id} is gone")
        return category.version

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_category(self, category_id: int) -> None:
        """Delete a category and, through the cascade, its products."""
        logger.info("Deleting category id=%s", category_id)
        self.get_category(category_id)
        try:
            deleted = self._repo.delete(category_id)
        except PersistenceError:
            logger.error("Deleting category id=%s failed", category_id, exc_info=True)
            raise PersistenceFailed("Could not remove category")
        if not deleted:
            logger.warning("Category id=%s vanished before deletion", category_id)
            raise NotFound(NOT_FOUND_MESSAGE)
        logger.info("Category deleted id=%s", category_id)
