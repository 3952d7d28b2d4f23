"""Reference data models: currencies, brand catalog, incoterms."""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional, Tuple


class Currency(BaseModel):
    """Currency reference entry."""

    code: str = Field(..., min_length=1, description="ISO code, e.g. USD")
    symbol: str = Field(..., description="Display symbol, e.g. $")
    label: str = Field("", description="Human readable name")

    model_config = {"frozen": True}


class Catalog(BaseModel):
    """Fixed reference data consumed by the quote form and renderer."""

    currencies: Tuple[Currency, ...] = Field(..., min_length=1, description="Currency list; first is default")
    brands: Dict[str, Tuple[str, ...]] = Field(default_factory=dict, description="Brand -> product names")
    incoterms: Tuple[str, ...] = Field(..., min_length=1, description="Incoterm codes")
    default_incoterm: str = Field("EXW", description="Incoterm selected on reset")

    model_config = {"frozen": True}

    @field_validator("currencies")
    @classmethod
    def validate_unique_codes(cls, v: Tuple[Currency, ...]) -> Tuple[Currency, ...]:
        """Currency codes must be unique."""
        codes = [c.code for c in v]
        if len(codes) != len(set(codes)):
            raise ValueError("Duplicate currency code in catalog")
        return v

    @property
    def default_currency(self) -> Currency:
        """First currency in the catalog."""
        return self.currencies[0]

    @property
    def currency_codes(self) -> List[str]:
        return [c.code for c in self.currencies]

    @property
    def brand_names(self) -> List[str]:
        return list(self.brands.keys())

    def get_currency(self, code: Optional[str]) -> Optional[Currency]:
        """Look up a currency by code, None when unknown."""
        return next((c for c in self.currencies if c.code == code), None)

    def products_for(self, brand: Optional[str]) -> List[str]:
        """Product names for a brand; empty when no brand is chosen."""
        if not brand:
            return []
        return list(self.brands.get(brand, ()))
