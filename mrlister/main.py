"""
MrLister FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mrlister import __version__
from mrlister.api.v1 import exports, inventory, marketplaces
from mrlister.config import Settings, get_settings
from mrlister.core.health import get_health_status
from mrlister.core.logging_config import setup_logging
from mrlister.exporters.registry import SchemaRegistry
from mrlister.middleware.exception_handler import register_exception_handlers
from mrlister.middleware.logging_middleware import LoggingMiddleware
from mrlister.storage.memory import InMemoryInventoryStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle management."""
    settings: Settings = app.state.settings
    logger.info(
        f"Starting {settings.app_name} v{__version__} "
        f"({settings.app_env.value}, storage={settings.storage_backend.value})"
    )
    if settings.uses_sql_storage:
        from mrlister.db.database import create_tables, get_engine

        await create_tables()
        yield
        await get_engine().dispose()
    else:
        yield
    logger.info(f"Shutting down {settings.app_name}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory: creates and configures the FastAPI instance."""
    settings = settings or get_settings()

    # Configure structured logging (before anything else)
    setup_logging(
        app_env=settings.app_env,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    openapi_tags = [
        {
            "name": "Inventory",
            "description": "Create items from photo analyses and look them up by SKU or barcode.",
        },
        {
            "name": "Marketplaces",
            "description": "Register the marketplaces items are exported to.",
        },
        {
            "name": "Exports",
            "description": "Marketplace bulk-upload CSV files (Shopify, eBay, Etsy, Amazon, "
                           "TikTok Shop, HipStamp).",
        },
        {
            "name": "System",
            "description": "Health checks and operational endpoints.",
        },
    ]

    app = FastAPI(
        title=settings.app_name,
        description=(
            "MrLister assigns each catalogued item a SKU, barcode and QR code, "
            "and turns inventory into marketplace-specific bulk-upload CSV files.\n\n"
            "**Authentication:** mocked. Send the caller's numeric id in the "
            "`X-User-Id` header on every endpoint except `/health`."
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        redirect_slashes=False,
    )

    app.state.settings = settings
    app.state.memory_store = InMemoryInventoryStore()
    app.state.schema_registry = SchemaRegistry.default(
        strict=settings.export_strict_marketplaces,
        vendor_name=settings.export_vendor_name,
    )

    # Middleware order: Logging → CORS (LIFO: CORS outermost)
    app.add_middleware(LoggingMiddleware)
    if settings.is_development:
        cors_origins = ["http://localhost:5173"]
    else:
        cors_origins = [o.strip() for o in settings.cors_allowed_origins.split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    @app.get("/health", tags=["System"])
    async def health_check():
        engine = None
        if settings.uses_sql_storage:
            from mrlister.db.database import get_engine

            engine = get_engine()
        return await get_health_status(
            app_name=settings.app_name,
            app_version=__version__,
            app_env=settings.app_env.value,
            storage_backend=settings.storage_backend.value,
            engine=engine,
        )

    app.include_router(inventory.router, prefix="/api/v1")
    app.include_router(marketplaces.router, prefix="/api/v1")
    app.include_router(exports.router, prefix="/api/v1")

    # Register global exception handlers (after routers)
    register_exception_handlers(app)

    return app


app = create_app()
