from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostelcare.api.deps import respond
from hostelcare.api.v1.router import router as api_v1_router
from hostelcare.config.settings import settings
from hostelcare.core.error_handling import register_exception_handlers
from hostelcare.core.logging import setup_logging
from hostelcare.core.middleware import register_middlewares
from hostelcare.db.init_db import init_db


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under API_V1_STR.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Credentialed CORS cannot use a wildcard origin
    origins = settings.CORS_ORIGINS or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    def health():
        return respond({"status": "ok", "environment": settings.ENVIRONMENT}, "Service is healthy")

    @app.on_event("startup")
    async def on_startup() -> None:
        if settings.ENVIRONMENT != "production":
            # Production schemas are managed by migrations
            init_db()

    return app


app = create_app()
