"""
Category endpoints:
  GET    /categories           – List all categories (anonymous, cacheable)
  GET    /categories/{id}      – Get a specific category (anonymous)
  POST   /categories           – Create a category (employee)
  PUT    /categories/{id}      – Replace a category (employee)
  DELETE /categories/{id}      – Delete a category (employee)
"""
from typing import Any
import logging

from fastapi import APIRouter, Body, Depends, Response

from shop.core.config import settings
from shop.core.dependencies import db_dependency, require_employee
from shop.schemas.category import CategoryResponse
from shop.schemas.error import ErrorResponse, MessageResponse
from shop.services.category_service import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List all categories",
)
def list_categories(response: Response, conn=Depends(db_dependency)):
    """Return every category. Responses may be cached for a short while."""
    response.headers["Cache-Control"] = f"public, max-age={settings.CATEGORY_CACHE_SECONDS}"
    response.headers["Vary"] = "User-Agent"
    return CategoryService(conn).list_categories()


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses=NOT_FOUND,
    summary="Get a specific category",
)
def get_category(category_id: int, conn=Depends(db_dependency)):
    return CategoryService(conn).get_category(category_id)


@router.post(
    "",
    response_model=CategoryResponse,
    responses=BAD_REQUEST,
    summary="Create a new category",
    dependencies=[Depends(require_employee)],
)
def create_category(data: Any = Body(...), conn=Depends(db_dependency)):
    """Create a category; the store assigns its id."""
    logger.info("Create category request")
    return CategoryService(conn).create_category(data)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Replace a category",
    dependencies=[Depends(require_employee)],
)
def update_category(
    category_id: int,
    data: Any = Body(...),
    conn=Depends(db_dependency),
):
    """
    Replace a category. The body must repeat the category id and may carry
    the ``version`` last read to detect concurrent updates.
    """
    logger.info("Update category request id=%s", category_id)
    return CategoryService(conn).update_category(category_id, data)


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Delete a category",
    dependencies=[Depends(require_employee)],
)
def delete_category(category_id: int, conn=Depends(db_dependency)):
    """Delete a category together with its products."""
    logger.info("Delete category request id=%s", category_id)
    CategoryService(conn).delete_category(category_id)
    return MessageResponse(message="Category removed successfully")
