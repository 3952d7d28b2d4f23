"""Health check endpoint."""

from fastapi import APIRouter

from ...api.dependencies import CatalogDep


SERVICE_NAME = "Quotation Generator"
SERVICE_VERSION = "0.1.0"

router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get("/health")
async def health_check(catalog: CatalogDep) -> dict:
    """
    Health check endpoint.

    Returns:
        Health status and catalog summary
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "catalog": {
            "currencies": len(catalog.currencies),
            "brands": len(catalog.brands),
            "incoterms": len(catalog.incoterms),
        },
    }
