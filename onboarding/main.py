"""Vendor onboarding API: FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from onboarding.core.config import Settings, settings as default_settings
from onboarding.core.exceptions import register_exception_handlers
from onboarding.db.base import build_engine, build_session_factory
from onboarding.middleware.request_log import RequestLogMiddleware
from onboarding.schemas.common import HealthResponse
from onboarding.services.storage import LocalObjectStorage

from onboarding.routers.root import router as root_router

# v1 routers
from onboarding.routers.v1.admin import router as admin_v1_router
from onboarding.routers.v1.auth import router as auth_v1_router
from onboarding.routers.v1.categories import router as categories_v1_router
from onboarding.routers.v1.earnings import router as earnings_v1_router
from onboarding.routers.v1.roles import router as roles_v1_router
from onboarding.routers.v1.vendors import router as vendors_v1_router


def _configure_logging(settings: Settings) -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    await app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    _configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=_lifespan,
    )

    # --- Service clients, built once and handed to every request ---
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.storage = LocalObjectStorage(settings.storage_root, settings.storage_max_object_bytes)

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- Role-based landing redirect (/) ---
    app.include_router(root_router)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(auth_v1_router, prefix="/api/v1")
    app.include_router(categories_v1_router, prefix="/api/v1")
    app.include_router(vendors_v1_router, prefix="/api/v1")
    app.include_router(earnings_v1_router, prefix="/api/v1")
    app.include_router(admin_v1_router, prefix="/api/v1")
    app.include_router(roles_v1_router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app
