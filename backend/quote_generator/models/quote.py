"""Quote form state and frozen quote snapshot models."""

from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Any, List, Tuple

from .catalog import Currency
from .product import Product, compute_subtotal


def _text(v: Any) -> str:
    return "" if v is None else str(v)


class CustomerInfo(BaseModel):
    """Bill-to customer block."""

    name: str = Field("", description="Customer name (required by the form)")
    company: str = Field("", description="Company")
    address: str = Field("", description="Postal or delivery address")
    contact: str = Field("", description="Phone or email")

    model_config = {"frozen": True}

    @field_validator("name", "company", "address", "contact", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _text(v)


class QuoteFormState(BaseModel):
    """Editable form state held while the user fills in the quote."""

    customer_name: str = ""
    customer_company: str = ""
    customer_address: str = ""
    customer_contact: str = ""

    quote_number: str = ""
    quote_date: str = ""
    valid_until: str = ""
    destination: str = ""
    currency: str = Field("", description="Currency code from the catalog")
    incoterm: str = "EXW"
    port_of_choice: str = ""
    lead_time: str = ""
    payment_terms: str = ""
    additional_conditions: str = ""

    products: List[Product] = Field(default_factory=list)

    @field_validator(
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
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _text(v)


class QuoteData(BaseModel):
    """
    Immutable quote snapshot consumed by the document renderer.

    Products are copied in by value; only named products are included.
    """

    customer: CustomerInfo = Field(default_factory=CustomerInfo)

    quote_number: str = Field(..., description="Quote number, e.g. Q-123456")
    quote_date: str = Field("", description="Quote date")
    valid_until: str = Field("", description="Validity date")
    destination: str = Field("", description="Destination")
    currency: Currency = Field(..., description="Quote currency")
    incoterm: str = Field("EXW", description="Incoterm code")
    port_of_choice: str = Field("", description="Port of choice, empty for EXW")
    lead_time: str = Field("", description="Lead time")
    payment_terms: str = Field("", description="Payment terms")
    additional_conditions: str = Field("", description="Free-text conditions")

    products: Tuple[Product, ...] = Field(default_factory=tuple)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "customer": {"name": "Jane Doe", "company": "Cellar Imports", "address": "", "contact": ""},
                "quote_number": "Q-482913",
                "quote_date": "2025-03-01",
                "valid_until": "2025-03-31",
                "destination": "Rotterdam",
                "currency": {"code": "USD", "symbol": "$", "label": "US Dollar"},
                "incoterm": "FOB",
                "port_of_choice": "Rotterdam",
                "products": [
                    {"brand": "D'Aria", "name": "Merlot", "quantity": 3, "unit_price": 100.0}
                ],
            }
        },
    }

    @field_validator(
        "quote_number",
        "quote_date",
        "valid_until",
        "destination",
        "incoterm",
        "port_of_choice",
        "lead_time",
        "payment_terms",
        "additional_conditions",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _text(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def subtotal(self) -> float:
        """Sum of line totals over the included products."""
        return compute_subtotal(self.products)
