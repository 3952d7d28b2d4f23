"""API dependencies and injection."""

from typing import Annotated
from fastapi import Depends
import logging

from ..models import Catalog
from ..services.catalog_loader import get_catalog
from ..services.export_service import QuoteExportService, get_export_service


logger = logging.getLogger(__name__)


def get_catalog_dependency() -> Catalog:
    """
    Dependency to get the reference catalog.

    Returns:
        Catalog loaded at startup (built-in defaults if the file is unusable)
    """
    return get_catalog()


def get_export_service_dependency() -> QuoteExportService:
    """
    Dependency to get the export service.

    Returns:
        QuoteExportService instance
    """
    return get_export_service()


# Type aliases for common dependencies
CatalogDep = Annotated[Catalog, Depends(get_catalog_dependency)]
ExportServiceDep = Annotated[QuoteExportService, Depends(get_export_service_dependency)]
