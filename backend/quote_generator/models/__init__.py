"""Models package."""

from .catalog import Currency, Catalog
from .product import Product, compute_subtotal
from .quote import CustomerInfo, QuoteFormState, QuoteData
from .document import (
    ITEM_COLUMNS,
    DocumentHeader,
    BillTo,
    MetadataEntry,
    ItemRow,
    ItemTable,
    TextSection,
    DocumentTree,
)
from .export import ExportArtifact, ExportFormat, PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE
from .responses import APIResponse, ErrorResponse

__all__ = [
    "Currency",
    "Catalog",
    "Product",
    "compute_subtotal",
    "CustomerInfo",
    "QuoteFormState",
    "QuoteData",
    "ITEM_COLUMNS",
    "DocumentHeader",
    "BillTo",
    "MetadataEntry",
    "ItemRow",
    "ItemTable",
    "TextSection",
    "DocumentTree",
    "ExportArtifact",
    "ExportFormat",
    "PDF_MEDIA_TYPE",
    "DOCX_MEDIA_TYPE",
    "APIResponse",
    "ErrorResponse",
]
