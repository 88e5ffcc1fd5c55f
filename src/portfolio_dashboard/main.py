"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from portfolio_dashboard import __version__
from portfolio_dashboard.app_context import get_context, set_context
from portfolio_dashboard.config.settings import get_settings
from portfolio_dashboard.config.logging_config import setup_logging
from portfolio_dashboard.api.routers import stocks_router, portfolio_router
from portfolio_dashboard.core.exceptions import (
    AppError,
    MissingParameterError,
    UpstreamUnavailableError,
    ValidationError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    context = get_context()
    context.start()
    yield
    # Shutdown
    context.close()
    set_context(None)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Live market data and gain/loss roll-ups for a static holdings list",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(stocks_router)
app.include_router(portfolio_router)


def _status_code_for(exc: AppError) -> int:
    if isinstance(exc, (MissingParameterError, ValidationError)):
        return 400
    if isinstance(exc, UpstreamUnavailableError):
        return 502
    return 500


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_status_code_for(exc),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
