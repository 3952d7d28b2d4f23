"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from .config import settings
from .services.catalog_loader import get_catalog
from .utils import APIError, ErrorCode
from .models import ErrorResponse
from .api.routes.health import SERVICE_NAME, SERVICE_VERSION


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Application starting up...")
    logger.info(f"Settings: host={settings.backend_host}, port={settings.backend_port}")
    logger.info(f"Render scale: {settings.render_scale}x")

    catalog = get_catalog()
    logger.info(
        f"Catalog ready: {len(catalog.currencies)} currencies, "
        f"{len(catalog.brands)} brands, {len(catalog.incoterms)} incoterms"
    )

    yield

    # Shutdown
    logger.info("Application stopped")


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Quotation form rendering and PDF/Word export",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handler for APIError
@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle API errors with proper response format."""
    error_response = ErrorResponse(
        success=False,
        message=exc.message,
        error_code=exc.error_code.value,
    )
    logger.error(f"APIError: {exc.error_code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
    )


# General exception handler
@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions."""
    error_response = ErrorResponse(
        success=False,
        message="Internal server error",
        error_code=ErrorCode.INTERNAL_ERROR.value,
    )
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Send browsers to the quote form."""
    return RedirectResponse(url=settings.frontend_url)


# Health check endpoint
@app.get("/health", tags=["System"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


# Register API routers
from .api.routes import health, catalog, quotes

app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(quotes.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.backend_debug,
    )
