"""
Application entry point.
Run with:  uvicorn shop.main:app --reload
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from shop.core.config import settings
from shop.core.exceptions import ShopError
from shop.core.logging_config import configure_logging
from shop.api.v1.router import api_router
from shop.db.database import close_memory_database, init_db
from shop.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


# ── Exception handlers ──────────────────────────────────────────────────────

def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    """Render a service error as the uniform ErrorResponse body."""
    logger.info(
        "%s %s -> %s (%s)",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
    )
    body = ErrorResponse(message=exc.message, errors=exc.errors)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 with a field map.

    A path id that is not an integer cannot name any resource, so it is
    reported as 404 like any other missing record.
    """
    errors: dict[str, str] = {}
    if any(error["loc"][0] == "path" for error in exc.errors()):
        logger.warning("%s %s: no such resource", request.method, request.url.path)
        body = ErrorResponse(message="Resource not found")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump()
        )
    for error in exc.errors():
        loc = error["loc"]
        field = str(loc[-1]) if loc[0] in ("query", "header") else "body"
        errors.setdefault(field, error["msg"])
    logger.warning("%s %s rejected: %s", request.method, request.url.path, errors)
    body = ErrorResponse(message="The request is malformed", errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    logger.info("Starting FastAPI application setup")
    database_url = database_url or settings.DATABASE_URL

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Initializing database at %s", database_url)
        init_db(database_url)
        yield
        close_memory_database()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Catalog API for categories and products.",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.database_url = database_url

    # ── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error handling ──────────────────────────────────────────────────────
    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(api_router)

    @app.get("/health", tags=["Health"], summary="Liveness probe")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


configure_logging()
app = create_app()
