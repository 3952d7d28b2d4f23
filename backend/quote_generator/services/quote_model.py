"""Quote editing model.

Holds the mutable form state (customer, quote metadata, line items) and
produces the frozen ``QuoteData`` snapshot consumed by the document renderer.

Port-of-choice rule: whenever the incoterm or destination changes, the port is
reset to "" for EXW and to the destination for every other incoterm. A manual
port edit survives only until the next incoterm or destination change.
"""

import logging
import time
from typing import Any, List, Optional

from ..models import (
    Catalog,
    CustomerInfo,
    Product,
    QuoteData,
    QuoteFormState,
    compute_subtotal,
)
from .catalog_defaults import EXW

logger = logging.getLogger(__name__)


PRODUCT_FIELDS = ("brand", "name", "quantity", "unit_price")

# Fields whose change re-derives the port of choice
PORT_DRIVERS = ("incoterm", "destination")

FORM_FIELDS = (
    "customer_name",
    "customer_company",
    "customer_address",
    "customer_contact",
    "quote_number",
    "quote_date",
    "valid_until",
    "destination",
    "currency",
    "incoterm",
    "port_of_choice",
    "lead_time",
    "payment_terms",
    "additional_conditions",
)


def derive_port_of_choice(incoterm: str, destination: str) -> str:
    """Port of choice implied by the incoterm: empty for EXW, else the destination."""
    return "" if incoterm == EXW else destination


def generate_quote_number(now_ms: Optional[int] = None) -> str:
    """
    Build a quote number from a millisecond timestamp.

    Args:
        now_ms: Milliseconds since the epoch, defaults to the current time

    Returns:
        "Q-" followed by the last 6 digits of the timestamp
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"Q-{str(now_ms)[-6:].zfill(6)}"


def snapshot(
    form_state: QuoteFormState,
    catalog: Catalog,
    now_ms: Optional[int] = None,
) -> QuoteData:
    """
    Freeze the form state into a QuoteData.

    Nothing is validated here. Products without a name are dropped; the
    remaining ones are copied by value.

    Args:
        form_state: Current editing state
        catalog: Reference data used to resolve the currency code
        now_ms: Timestamp used when a quote number has to be generated

    Returns:
        Immutable QuoteData
    """
    quote_number = form_state.quote_number.strip() or generate_quote_number(now_ms)

    currency = catalog.get_currency(form_state.currency)
    if currency is None:
        logger.warning(
            f"Unknown currency {form_state.currency!r}, using {catalog.default_currency.code}"
        )
        currency = catalog.default_currency

    products = tuple(p.model_copy() for p in form_state.products if p.has_name)

    quote = QuoteData(
        customer=CustomerInfo(
            name=form_state.customer_name,
            company=form_state.customer_company,
            address=form_state.customer_address,
            contact=form_state.customer_contact,
        ),
        quote_number=quote_number,
        quote_date=form_state.quote_date,
        valid_until=form_state.valid_until,
        destination=form_state.destination,
        currency=currency,
        incoterm=form_state.incoterm,
        port_of_choice=form_state.port_of_choice,
        lead_time=form_state.lead_time,
        payment_terms=form_state.payment_terms,
        additional_conditions=form_state.additional_conditions,
        products=products,
    )
    logger.info(
        f"Quote {quote.quote_number} snapshot: {len(products)} of "
        f"{len(form_state.products)} products included"
    )
    return quote


class QuoteModel:
    """Editable quote form state with derived totals."""

    def __init__(self, catalog: Catalog):
        """
        Initialize QuoteModel.

        Args:
            catalog: Reference data (currencies, brands, incoterms)
        """
        self.catalog = catalog
        self.state = self._initial_state()

    def _initial_state(self) -> QuoteFormState:
        return QuoteFormState(
            currency=self.catalog.default_currency.code,
            incoterm=self.catalog.default_incoterm,
            port_of_choice=derive_port_of_choice(self.catalog.default_incoterm, ""),
        )

    # ===== Line items =====

    @property
    def products(self) -> List[Product]:
        return self.state.products

    def add_product(self) -> Product:
        """
        Append an empty line item.

        Returns:
            The new product
        """
        product = Product()
        self.state.products.append(product)
        logger.debug(f"Product added: {product.id}")
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.state.products if p.id == product_id), None)

    def update_product(self, product_id: str, field: str, value: Any) -> None:
        """
        Replace one field on the matching line item.

        The item is replaced by a validated copy; other items are untouched.
        Unknown ids and unknown fields are ignored.

        Args:
            product_id: Product id
            field: One of brand, name, quantity, unit_price
            value: New value (numbers coerce to 0 when absent or invalid)
        """
        if field not in PRODUCT_FIELDS:
            logger.warning(f"Ignoring update of unknown product field: {field}")
            return

        for index, product in enumerate(self.state.products):
            if product.id == product_id:
                data = product.model_dump(exclude={"line_total"})
                data[field] = value
                self.state.products[index] = Product.model_validate(data)
                logger.debug(f"Product updated: {product_id} {field}")
                return

    def remove_product(self, product_id: str) -> None:
        """Delete the matching line item; unknown ids are ignored."""
        remaining = [p for p in self.state.products if p.id != product_id]
        if len(remaining) != len(self.state.products):
            self.state.products[:] = remaining
            logger.debug(f"Product removed: {product_id}")

    def brand_products(self, brand: Optional[str]) -> List[str]:
        """Product names selectable for a brand (none until a brand is chosen)."""
        return self.catalog.products_for(brand)

    # ===== Form fields =====

    def set_field(self, field: str, value: Any) -> None:
        """
        Set a scalar form field.

        Changing the incoterm or destination re-derives the port of choice.

        Args:
            field: Form field name
            value: New value

        Raises:
            KeyError: If the field is not a form field
        """
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown quote form field: {field}")

        setattr(self.state, field, "" if value is None else str(value))

        if field in PORT_DRIVERS:
            self.state.port_of_choice = derive_port_of_choice(
                self.state.incoterm, self.state.destination
            )

    def update(self, **fields: Any) -> None:
        """Set several form fields in order."""
        for field, value in fields.items():
            self.set_field(field, value)

    # ===== Derived values =====

    @property
    def live_subtotal(self) -> float:
        """Subtotal over every line item, named or not."""
        return compute_subtotal(self.state.products)

    def snapshot(self, now_ms: Optional[int] = None) -> QuoteData:
        """Freeze the current state into a QuoteData."""
        return snapshot(self.state, self.catalog, now_ms=now_ms)

    def reset(self) -> None:
        """Clear every field back to its default."""
        self.state = self._initial_state()
        logger.info("Quote form reset")
