"""
Product management service.
Same pipeline as categories, plus the referential check that the product's
category exists, which runs before field validation.
"""
import sqlite3
from typing import Any
import logging

from shop.core.exceptions import (
    ConcurrencyConflict,
    ConcurrencyConflictError,
    InvalidReference,
    NotFound,
    PersistenceError,
    PersistenceFailed,
)
from shop.models.product import Product
from shop.repositories.category_repository import CategoryRepository
from shop.repositories.product_repository import ProductRepository
from shop.schemas.product import ProductPayload
from shop.schemas.validation import validate_payload
from shop.services.payload import read_int

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Product not found"
CATEGORY_KEYS = ("categoryId", "category_id")


def _columns(payload: ProductPayload) -> dict[str, Any]:
    return {
        "title": payload.title,
        "description": payload.description,
        "price": str(payload.price),
        "category_id": payload.category_id,
    }


class ProductService:
    """Business logic for product operations."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing ProductService")
        self._repo = ProductRepository(conn)
        self._category_repo = CategoryRepository(conn)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_products(self) -> list[Product]:
        logger.info("Listing products")
        try:
            return self._repo.list_all()
        except PersistenceError:
            logger.error("Listing products failed", exc_info=True)
            raise PersistenceFailed("Could not load products")

    def list_products_by_category(self, category_id: int) -> list[Product]:
        """Return the products of a category; an empty list when there are none."""
        logger.info("Listing products category_id=%s", category_id)
        try:
            return self._repo.list_by_category(category_id)
        except PersistenceError:
            logger.error(
                "Listing products for category id=%s failed", category_id, exc_info=True
            )
            raise PersistenceFailed("Could not load products")

    def get_product(self, product_id: int) -> Product:
        logger.info("Fetching product id=%s", product_id)
        try:
            product = self._repo.get_by_id(product_id)
        except PersistenceError:
            logger.error("Fetching product id=%s failed", product_id, exc_info=True)
            raise PersistenceFailed("Could not load product")
        if product is None:
            logger.warning("Product id=%s not found", product_id)
            raise NotFound(NOT_FOUND_MESSAGE)
        return product

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_product(self, data: Any) -> Product:
        """Create a product once its category is known to exist."""
        logger.info("Creating product")
        self._require_category(
            data, "Could not create product. The selected category was not found"
        )
        payload = validate_payload(ProductPayload, data)
        try:
            product = self._repo.insert(_columns(payload))
        except PersistenceError:
            logger.error("Creating product failed", exc_info=True)
            raise PersistenceFailed("Could not create product")
        logger.info("Product created id=%s", product.id)
        return product

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_product(self, product_id: int, data: Any) -> Product:
        """Replace a product.

        Order of checks: body id against *product_id* (NotFound), category
        reference (InvalidReference), field validation (ValidationFailed),
        then the version-checked replace.
        """
        logger.info("Updating product id=%s", product_id)
        if read_int(data, "id") != product_id:
            logger.warning("Product id mismatch for update id=%s", product_id)
            raise NotFound(NOT_FOUND_MESSAGE)

        self._require_category(
            data, "Could not update product. The selected category was not found"
        )
        payload = validate_payload(ProductPayload, data)
        try:
            expected_version = payload.version or self._current_version(product_id)
            product = self._repo.replace(product_id, _columns(payload), expected_version)
        except ConcurrencyConflictError:
            logger.warning("Concurrent update detected for product id=%s", product_id)
            raise ConcurrencyConflict()
        except PersistenceError:
            logger.error("Updating product id=%s failed", product_id, exc_info=True)
            raise PersistenceFailed("Could not update product")
        logger.info("Product updated id=%s version=%s", product_id, product.version)
        return product

    def _current_version(self, product_id: int) -> int:
        product = self._repo.get_by_id(product_id)
        if product is None:
            raise ConcurrencyConflictError(f"products id={product_id} is gone")
        return product.version

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_product(self, product_id: int) -> None:
        logger.info("Deleting product id=%s", product_id)
        self.get_product(product_id)
        try:
            deleted = self._repo.delete(product_id)
        except PersistenceError:
            logger.error("Deleting product id=%s failed", product_id, exc_info=True)
            raise PersistenceFailed("Could not remove product")
        if not deleted:
            logger.warning("Product id=%s vanished before deletion", product_id)
            raise NotFound(NOT_FOUND_MESSAGE)
        logger.info("Product deleted id=%s", product_id)

    # ------------------------------------------------------------------
    # Referential check
    # ------------------------------------------------------------------

    def _require_category(self, data: Any, message: str) -> None:
        category_id = read_int(data, *CATEGORY_KEYS)
        if category_id is None:
            logger.warning("Product payload has no usable category id")
            raise InvalidReference(message)
        try:
            category = self._category_repo.get_by_id(category_id)
        except PersistenceError:
            logger.error("Category lookup id=%s failed", category_id, exc_info=True)
            raise PersistenceFailed("Could not load category")
        if category is None:
            logger.warning("Category id=%s not found for product", category_id)
            raise InvalidReference(message)
