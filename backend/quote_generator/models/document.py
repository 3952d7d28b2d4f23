"""Rendered quotation document tree.

Every value is already formatted for display; renderers (HTML, raster,
Word) only lay it out.
"""

from pydantic import BaseModel, Field
from typing import Tuple


ITEM_COLUMNS: Tuple[str, ...] = ("#", "Brand", "Product", "Qty", "Unit Price", "Line Total")


class DocumentHeader(BaseModel):
    """Title bar with the quote number."""

    title: str = "QUOTATION"
    quote_number: str

    model_config = {"frozen": True}


class BillTo(BaseModel):
    """Customer block."""

    name: str = ""
    company: str = ""
    address: str = ""
    contact: str = ""

    model_config = {"frozen": True}

    @property
    def lines(self) -> Tuple[str, ...]:
        """Non-empty lines in display order."""
        return tuple(v for v in (self.name, self.company, self.address, self.contact) if v)


class MetadataEntry(BaseModel):
    """Label/value pair in the quote details block."""

    label: str
    value: str = ""

    model_config = {"frozen": True}


class ItemRow(BaseModel):
    """One table row, 1-based index."""

    index: int = Field(..., ge=1)
    brand: str = ""
    product: str = ""
    quantity: str = "0"
    unit_price: str = ""
    line_total: str = ""

    model_config = {"frozen": True}

    @property
    def cells(self) -> Tuple[str, ...]:
        return (str(self.index), self.brand, self.product, self.quantity, self.unit_price, self.line_total)


class ItemTable(BaseModel):
    """Itemized table with the subtotal footer row."""

    columns: Tuple[str, ...] = ITEM_COLUMNS
    rows: Tuple[ItemRow, ...] = ()
    subtotal_label: str = "Subtotal"
    subtotal: str

    model_config = {"frozen": True}


class TextSection(BaseModel):
    """Optional free-text section (lead time, payment terms, conditions)."""

    title: str
    body: str

    model_config = {"frozen": True}


class DocumentTree(BaseModel):
    """Structured representation of a rendered quotation."""

    header: DocumentHeader
    bill_to: BillTo = Field(default_factory=BillTo)
    metadata: Tuple[MetadataEntry, ...] = ()
    table: ItemTable
    sections: Tuple[TextSection, ...] = ()

    model_config = {"frozen": True}

    def metadata_value(self, label: str) -> str:
        """Value of a metadata entry, empty string when missing."""
        return next((m.value for m in self.metadata if m.label == label), "")
