"""Quotation document rendering.

Turns a frozen QuoteData into a DocumentTree (display-ready values) and the
tree into HTML markup. Raster (PDF) and Word exports start from the same tree.
"""

import html
import logging
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import settings
from ..models import (
    BillTo,
    Currency,
    DocumentHeader,
    DocumentTree,
    ItemRow,
    ItemTable,
    MetadataEntry,
    QuoteData,
    TextSection,
)
from ..utils import ErrorCode, raise_error, to_number
from .service_factory import service_factory

logger = logging.getLogger(__name__)


HTML_TEMPLATE = "quotation.html.j2"

# Optional sections, rendered only when the field is non-empty
OPTIONAL_SECTIONS = (
    ("Lead Time", "lead_time"),
    ("Payment Terms", "payment_terms"),
    ("Additional Conditions", "additional_conditions"),
)


def format_money(currency: Currency, amount: Any = None) -> str:
    """
    Format an amount with the currency symbol and two decimals.

    Args:
        currency: Currency providing the symbol
        amount: Amount; absent or non-numeric values count as 0

    Returns:
        e.g. "$12.50"
    """
    return f"{currency.symbol}{to_number(amount):.2f}"


def format_quantity(quantity: Any) -> str:
    """Quantity without a trailing .0 for whole numbers."""
    value = to_number(quantity)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_incoterm(incoterm: str, port_of_choice: str) -> str:
    """Incoterm with the port of choice in parentheses when set."""
    if port_of_choice:
        return f"{incoterm} ({port_of_choice})"
    return incoterm


def wrap_html_document(markup: str, title: str = "Quotation") -> str:
    """Wrap body markup in a minimal standalone HTML document."""
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8">'
        f"<title>{html.escape(title)}</title>"
        "</head><body>"
        f"{markup}"
        "</body></html>"
    )


class DocumentRendererService:
    """Service for rendering quotation documents."""

    def __init__(self, templates_dir=None):
        """
        Initialize the renderer.

        Args:
            templates_dir: Jinja2 template directory, defaults to the packaged templates
        """
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or settings.templates_dir_path)),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_preview(self, quote: QuoteData) -> DocumentTree:
        """
        Build the document tree for a quote snapshot.

        Args:
            quote: Frozen quote snapshot

        Returns:
            DocumentTree with formatted values
        """
        currency = quote.currency

        rows = tuple(
            ItemRow(
                index=idx,
                brand=product.brand,
                product=product.name,
                quantity=format_quantity(product.quantity),
                unit_price=format_money(currency, product.unit_price),
                line_total=format_money(currency, product.line_total),
            )
            for idx, product in enumerate(quote.products, 1)
        )

        sections = tuple(
            TextSection(title=title, body=getattr(quote, field))
            for title, field in OPTIONAL_SECTIONS
            if getattr(quote, field).strip()
        )

        tree = DocumentTree(
            header=DocumentHeader(quote_number=quote.quote_number),
            bill_to=BillTo(
                name=quote.customer.name,
                company=quote.customer.company,
                address=quote.customer.address,
                contact=quote.customer.contact,
            ),
            metadata=(
                MetadataEntry(label="Date", value=quote.quote_date),
                MetadataEntry(label="Valid Until", value=quote.valid_until),
                MetadataEntry(label="Destination", value=quote.destination),
                MetadataEntry(label="Currency", value=currency.code),
                MetadataEntry(
                    label="Incoterm",
                    value=format_incoterm(quote.incoterm, quote.port_of_choice),
                ),
            ),
            table=ItemTable(rows=rows, subtotal=format_money(currency, quote.subtotal)),
            sections=sections,
        )
        logger.debug(f"Rendered quote {quote.quote_number}: {len(rows)} rows, {len(sections)} sections")
        return tree

    def render_html(self, tree: Optional[DocumentTree]) -> str:
        """
        Render the document tree as HTML body markup.

        Args:
            tree: Rendered document, None when nothing is rendered yet

        Returns:
            Markup, empty string for a missing tree

        Raises:
            APIError: If the template fails to render
        """
        if tree is None:
            return ""
        try:
            template = self.env.get_template(HTML_TEMPLATE)
            return template.render(doc=tree)
        except Exception as e:
            logger.error(f"HTML rendering failed: {e}")
            raise_error(
                ErrorCode.RENDER_FAILED,
                f"HTML rendering failed: {str(e)}",
                status_code=500,
            )


@service_factory
def get_document_renderer() -> DocumentRendererService:
    """Get the DocumentRendererService singleton."""
    return DocumentRendererService()
