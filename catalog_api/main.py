# catalog_api/main.py
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request
from sqlalchemy import Engine

from catalog_api.core.config import Settings, get_settings
from catalog_api.core.credentials import AdminCredentialStore
from catalog_api.core.errors import register_exception_handlers
from catalog_api.core.storage_utils import MediaStorage, SupabaseMediaStorage
from catalog_api.core.tokens import TokenService
from catalog_api.database import build_engine, create_db_and_tables, is_database_connected
from catalog_api.seed import seed_if_empty

# Import models so SQLModel metadata is populated before create_all()
from catalog_api.models import product as _product_models  # noqa: F401
from catalog_api.models import combo as _combo_models  # noqa: F401

# Routers
from catalog_api.routers.admin import router as admin_router
from catalog_api.routers.products import router as products_router
from catalog_api.routers.products import admin_router as admin_products_router
from catalog_api.routers.combos import router as combos_router
from catalog_api.routers.combos import admin_router as admin_combos_router
from catalog_api.schemas.admin import HealthResponse

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create tables when the database is reachable.
      - Seed the catalog if it is empty (skipped when unreachable).

    The API still starts without a database; /api/health reports it and
    data endpoints answer 503.
    """
    settings: Settings = app.state.settings
    engine: Engine = app.state.engine

    logger.info("🔄 Startup: Connecting to database...")
    if is_database_connected(engine):
        create_db_and_tables(engine)
        logger.info("✅ Startup: DB connection OK, tables verified.")
        if settings.SEED_ON_STARTUP:
            seed_if_empty(engine)
    else:
        logger.error("❌ Startup: DB connection FAILED, seeding skipped.")
    yield


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    media: MediaStorage | None = None,
    credentials: AdminCredentialStore | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Every collaborator can be injected (tests pass an in-memory engine and
    a fake media storage); otherwise they are built from settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine or build_engine(settings.DATABASE_URL)
    app.state.media = media or SupabaseMediaStorage(settings)
    app.state.credentials = credentials or AdminCredentialStore(
        settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD
    )
    app.state.tokens = TokenService(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
        ttl=timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    )

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # API prefix, e.g. /api
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(combos_router, prefix=settings.API_PREFIX)
    app.include_router(admin_router, prefix=settings.API_PREFIX)
    app.include_router(admin_products_router, prefix=settings.API_PREFIX)
    app.include_router(admin_combos_router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health", response_model=HealthResponse, tags=["Health"])
    def health(request: Request):
        """Health check endpoint."""
        connected = is_database_connected(request.app.state.engine)
        return {
            "status": "OK",
            "database": "connected" if connected else "disconnected",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn on settings.PORT."""
    import uvicorn

    uvicorn.run("catalog_api.main:app", host="0.0.0.0", port=get_settings().PORT)


app = create_app()
