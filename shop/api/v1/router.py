"""
Central v1 API router – registers all endpoint sub-routers.
"""
from fastapi import APIRouter
import logging

from shop.api.v1.endpoints import categories, products
from shop.core.config import settings

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix=settings.API_V1_PREFIX)

logger.info("Registering v1 API routers")
api_router.include_router(categories.router)
api_router.include_router(products.router)
