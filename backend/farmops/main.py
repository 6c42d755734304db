# backend/farmops/main.py

# FORCE logger module import so handlers attach
from farmops.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmops import __version__
from farmops.core.config import settings
from farmops.core.database import create_tables, engine
from farmops.core.exceptions import register_exception_handlers
from farmops.core.middleware import ExceptionLoggingMiddleware, RequestLoggingMiddleware
from farmops.services.dispatch import BackgroundDispatcher

from farmops.api import internal, irrigation, tasks

# seconds to wait for in-flight webhook deliveries on shutdown
SHUTDOWN_DRAIN_TIMEOUT = 15


def create_app() -> FastAPI:
    app = FastAPI(title="Farmops API", version=__version__)
    app.state.dispatcher = BackgroundDispatcher()

    # ---------------------------------------------------
    # Middlewares
    # ---------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ExceptionLoggingMiddleware)

    register_exception_handlers(app)

    # ---------------------------------------------------
    # Routers
    # ---------------------------------------------------
    app.include_router(irrigation.router, prefix="/api/v1/irrigation-logs")
    app.include_router(irrigation.router, prefix="/api/v1/irrigation", include_in_schema=False)
    app.include_router(tasks.router, prefix="/api/v1/tasks")
    app.include_router(internal.router)

    @app.on_event("startup")
    async def startup_event():
        if settings.AUTO_CREATE_TABLES:
            await create_tables()

        logger.info("Backend started with structured JSON logging", extra={"version": __version__})

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.dispatcher.drain(timeout=SHUTDOWN_DRAIN_TIMEOUT)
        await engine.dispose()
        logger.info("Backend stopped")

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
