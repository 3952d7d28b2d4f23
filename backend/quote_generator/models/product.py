"""Product line item model.

Line totals are always derived from quantity and unit price, never stored.
"""

from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Any, Iterable
import uuid

from ..utils.numbers import MAX_AMOUNT, to_non_negative


class Product(BaseModel):
    """Quote line item."""

    # Stable key for edits and removal
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique identifier (UUID)")

    brand: str = Field("", description="Brand from the catalog")
    name: str = Field("", description="Product name; items without one are left out of the quote")
    quantity: float = Field(0.0, ge=0, le=MAX_AMOUNT, description="Quantity")
    unit_price: float = Field(0.0, ge=0, le=MAX_AMOUNT, description="Unit price in quote currency")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "brand": "D'Aria",
                "name": "Merlot",
                "quantity": 3,
                "unit_price": 100.0,
            }
        },
    }

    @field_validator("brand", "name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Absent text becomes an empty string."""
        return "" if v is None else str(v)

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> float:
        """Absent or non-numeric input becomes 0; values clamp to [0, MAX_AMOUNT]."""
        return to_non_negative(v, maximum=MAX_AMOUNT)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def line_total(self) -> float:
        """quantity x unit price."""
        return self.quantity * self.unit_price

    @property
    def has_name(self) -> bool:
        return bool(self.name.strip())


def compute_subtotal(products: Iterable[Product]) -> float:
    """
    Sum of quantity x unit price over every given product.

    No filtering happens here: unnamed items still count.

    Args:
        products: Line items

    Returns:
        Subtotal
    """
    return sum((p.quantity * p.unit_price for p in products), 0.0)
