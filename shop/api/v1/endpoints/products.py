"""
Product endpoints:
  GET    /products                   – List all products with their category (anonymous)
  GET    /products/{id}              – Get a specific product (anonymous)
  GET    /products/categories/{id}   – List the products of a category (anonymous)
  POST   /products                   – Create a product (employee)
  PUT    /products/{id}              – Replace a product (manager)
  DELETE /products/{id}              – Delete a product (manager)
"""
from typing import Any
import logging

from fastapi import APIRouter, Body, Depends

from shop.core.dependencies import db_dependency, require_employee, require_manager
from shop.schemas.error import ErrorResponse, MessageResponse
from shop.schemas.product import ProductResponse
from shop.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List all products",
)
def list_products(conn=Depends(db_dependency)):
    return ProductService(conn).list_products()


@router.get(
    "/categories/{category_id}",
    response_model=list[ProductResponse],
    summary="List the products of a category",
)
def list_products_by_category(category_id: int, conn=Depends(db_dependency)):
    """Return the products of a category. An unknown category yields an empty list."""
    return ProductService(conn).list_products_by_category(category_id)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses=NOT_FOUND,
    summary="Get a specific product",
)
def get_product(product_id: int, conn=Depends(db_dependency)):
    return ProductService(conn).get_product(product_id)


@router.post(
    "",
    response_model=ProductResponse,
    responses=BAD_REQUEST,
    summary="Create a new product",
    dependencies=[Depends(require_employee)],
)
def create_product(data: Any = Body(...), conn=Depends(db_dependency)):
    """
    Create a product. The referenced category must exist; that check runs
    before field validation.
    """
    logger.info("Create product request")
    return ProductService(conn).create_product(data)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Replace a product",
    dependencies=[Depends(require_manager)],
)
def update_product(
    product_id: int,
    data: Any = Body(...),
    conn=Depends(db_dependency),
):
    logger.info("Update product request id=%s", product_id)
    return ProductService(conn).update_product(product_id, data)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Delete a product",
    dependencies=[Depends(require_manager)],
)
def delete_product(product_id: int, conn=Depends(db_dependency)):
    logger.info("Delete product request id=%s", product_id)
    ProductService(conn).delete_product(product_id)
    return MessageResponse(message="Product removed successfully")
