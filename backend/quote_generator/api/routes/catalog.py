"""Catalog API routes."""

import logging

from fastapi import APIRouter

from ...api.dependencies import CatalogDep
from ...models import APIResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Catalog"])


@router.get(
    "/catalog",
    response_model=APIResponse,
    summary="Get reference data",
)
async def get_catalog(catalog: CatalogDep) -> dict:
    """
    Currencies, brand product lists and incoterms for the quote form.
    """
    return {
        "success": True,
        "message": "Catalog loaded",
        "data": catalog.model_dump(),
    }
