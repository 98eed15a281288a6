"""
FastAPI application factory.

* Registers routes for services, bookings and admin.
* Maps domain errors to HTTP: not found -> 404, ownership mismatch -> 409,
  invalid input -> 422.
* Applies rate-limiting.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from marketplace.api.middleware import limiter
from marketplace.api.routes import admin, bookings, services
from marketplace.config import settings
from marketplace.domain.entities import (
    InputValidationError,
    NotFoundError,
    OwnershipMismatchError,
)
from marketplace.infrastructure import database

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Optionally create tables on startup; dispose the engine on shutdown."""
    if settings.store_backend == "sql" and settings.create_tables_on_startup:
        await database.create_tables()
        logger.info("Database tables ensured")
    logger.info("Marketplace API started (store=%s)", settings.store_backend)
    yield
    await database.engine.dispose()
    logger.info("Marketplace API stopped")


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app() -> FastAPI:
    app = FastAPI(
        title="Car Service Marketplace API",
        description=(
            "Car-service providers list vehicles and priced routes; "
            "customers search services by route, vehicle type and "
            "passenger count, and book rides."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(NotFoundError, _error_handler(404))
    app.add_exception_handler(OwnershipMismatchError, _error_handler(409))
    app.add_exception_handler(InputValidationError, _error_handler(422))

    # Routers
    app.include_router(services.router, prefix="/api/v1")
    app.include_router(bookings.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
