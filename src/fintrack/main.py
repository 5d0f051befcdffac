from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from fintrack import __version__
from fintrack.api.middleware.error_handler import (
    handle_app_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from fintrack.api.middleware.logging import RequestLoggingMiddleware
from fintrack.api.v1 import router as v1_router
from fintrack.api.v1.health import router as health_router
from fintrack.config import settings
from fintrack.core.exceptions import FinanceAppError
from fintrack.core.logging_config import configure_logging
from fintrack.db.session import async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await async_engine.dispose()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Fintrack API",
        description="Personal finance tracking with rule-based categorization",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(FinanceAppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
