"""FastAPI app: routers, static mounts, CORS and error handling.

Serves the REST API used by the public site and the admin panel, plus the
uploaded media under /images, /pdfs and /videos.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .db import create_tables
from .logging_config import setup_logging
from .parsers import ParseError
from .pipelines.pdf_products import ProductIngestError
from .routers import admin, categories, company, messages, news, products, references, team
from .schemas import ErrorResponse, HealthResponse
from .storage import MediaKind, StorageError, public_root

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    # Startup
    setup_logging()
    logger.info(f"{settings.app_name} v{settings.version} starting up")

    if settings.db.auto_create:
        await create_tables()
        logger.info("Database tables ensured")

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Catalog, news, references and team API for the marble company website",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=str(exc)).model_dump(),
    )


# Exception handlers
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request, exc: SQLAlchemyError):
    """Handle database errors."""
    logger.error(f"Database error on {request.url.path}: {exc}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "database_error", exc)


@app.exception_handler(StorageError)
async def storage_error_handler(request, exc: StorageError):
    """Handle upload storage errors."""
    logger.error(f"Storage error: {exc}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "storage_error", exc)


@app.exception_handler(ParseError)
async def parse_error_handler(request, exc: ParseError):
    """Handle document parsing errors."""
    logger.error(f"Parse error: {exc}")
    return _error(status.HTTP_400_BAD_REQUEST, "parse_error", exc)


@app.exception_handler(ProductIngestError)
async def ingest_error_handler(request, exc: ProductIngestError):
    """Handle catalog PDF import errors."""
    logger.error(f"Ingest error: {exc}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "ingest_error", exc)


for module in (products, news, references, categories, team, messages, company, admin):
    app.include_router(module.router)


for kind in MediaKind:
    media_dir = public_root() / kind.value
    media_dir.mkdir(parents=True, exist_ok=True)
    app.mount(f"/{kind.value}", StaticFiles(directory=media_dir), name=kind.value)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=settings.version,
    )


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.version,
        "endpoints": {
            "health": "/health",
            "products": "/api/products",
            "products_from_pdf": "/api/products/from-pdf",
            "news": "/api/news",
            "references": "/api/references",
            "categories": "/api/categories",
            "team": "/api/team",
            "messages": "/api/messages",
            "company_info": "/api/company-info",
            "docs": "/docs",
        },
    }
