"""HTTP API application factory.

The app factory creates a FastAPI instance with:
- Lifespan handler connecting the database and creating the schema
- CORS middleware (configurable origins)
- JSON content negotiation ahead of every route
- Standard error envelope for domain and unexpected errors
- Health endpoint at GET /api/health
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moneybook.api.middleware import ContentNegotiationMiddleware, register_error_handlers
from moneybook.api.routers.accounts import router as accounts_router
from moneybook.api.routers.categories import router as categories_router
from moneybook.api.routers.movements import router as movements_router
from moneybook.api.routers.subcategories import router as subcategories_router
from moneybook.api.routers.tiers import router as tiers_router
from moneybook.api.routers.transfers import router as transfers_router
from moneybook.api.routers.users import router as users_router
from moneybook.api.schemas import HealthOut
from moneybook.config import Settings, get_settings
from moneybook.database.base import Database
from moneybook.database.factories import create_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database and create missing tables; disconnect on shutdown."""
    db: Database = app.state.db
    db.connect()
    db.initialize_schema()
    logger.info("%s %s started", app.title, app.version)
    try:
        yield
    finally:
        db.disconnect()
        logger.info("%s stopped", app.title)


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        db: Database instance (built from settings if omitted)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db if db is not None else create_database(settings)

    app.add_middleware(ContentNegotiationMiddleware)
    register_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (
        users_router,
        accounts_router,
        categories_router,
        subcategories_router,
        tiers_router,
        movements_router,
        transfers_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health", response_model=HealthOut, tags=["system"])
    def health() -> HealthOut:
        return HealthOut(status="ok", version=settings.VERSION)

    return app
