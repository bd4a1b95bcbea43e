from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from lockersys.infrastructure.bootstrap import initialize_database
from lockersys.infrastructure.config import Settings
from lockersys.infrastructure.database import Database
from lockersys.presentation.errors import register_exception_handlers
from lockersys.presentation.routers import (
    auth,
    clients,
    dashboard,
    health,
    locations,
    lockers,
    payments,
    rentals,
)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API around one Database handle. The handle is created and
    disposed by the lifespan and reaches request handlers through app.state.
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Locker System API...")
        database = Database.from_settings(settings)
        # a store that cannot be reached or initialized aborts startup
        initialize_database(database, settings)
        app.state.database = database
        app.state.settings = settings

        yield

        logger.info("Shutting down Locker System API...")
        database.dispose()

    app = FastAPI(title="Locker System API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api")
    app.include_router(auth.router, prefix="/api/auth")
    app.include_router(dashboard.router, prefix="/api/dashboard")
    app.include_router(clients.router, prefix="/api/clients")
    app.include_router(clients.router, prefix="/api/students", include_in_schema=False)
    app.include_router(locations.router, prefix="/api/locations")
    app.include_router(lockers.router, prefix="/api/lockers")
    app.include_router(rentals.router, prefix="/api/rentals")
    app.include_router(payments.router, prefix="/api/payments")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("lockersys.main:app", host="0.0.0.0", port=8000)
