"""Pytest configuration and fixtures."""

import pytest
import tempfile
import shutil
from pathlib import Path
from fastapi.testclient import TestClient

from quote_generator.main import app
from quote_generator.models import Catalog, Product, QuoteData
from quote_generator.services.catalog_loader import default_catalog
from quote_generator.services.service_factory import clear_all_service_caches
from quote_generator.services.quote_model import QuoteModel

# API version prefix
API_PREFIX = "/api/v1"


@pytest.fixture(autouse=True)
def reset_service_singletons():
    """Drop cached service singletons after each test."""
    yield
    clear_all_service_caches()


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def client():
    """Create FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def catalog() -> Catalog:
    """Built-in reference catalog."""
    return default_catalog()


@pytest.fixture
def quote_model(catalog: Catalog) -> QuoteModel:
    """Empty quote model."""
    return QuoteModel(catalog)


@pytest.fixture
def sample_quote(catalog: Catalog) -> QuoteData:
    """Quote snapshot with a single Merlot line in USD."""
    return QuoteData(
        customer={
            "name": "Jane Doe",
            "company": "Cellar Imports Ltd",
            "address": "12 Harbour Road\nRotterdam",
            "contact": "jane@cellar.example",
        },
        quote_number="Q-482913",
        quote_date="2025-03-01",
        valid_until="2025-03-31",
        destination="Rotterdam",
        currency=catalog.get_currency("USD"),
        incoterm="FOB",
        port_of_choice="Rotterdam",
        lead_time="4 weeks",
        payment_terms="30% deposit, balance before shipment",
        additional_conditions="",
        products=(Product(brand="D'Aria", name="Merlot", quantity=3, unit_price=100),),
    )


@pytest.fixture
def sample_quote_data(sample_quote: QuoteData) -> dict:
    """Sample quote snapshot as a request body."""
    return sample_quote.model_dump(mode="json")


@pytest.fixture
def long_quote(catalog: Catalog) -> QuoteData:
    """Quote with enough line items to span several A4 pages."""
    brands = list(catalog.brands.items())
    products = []
    for i in range(80):
        brand, names = brands[i % len(brands)]
        products.append(
            Product(brand=brand, name=names[i % len(names)], quantity=i + 1, unit_price=12.5)
        )
    return QuoteData(
        customer={"name": "Bulk Buyer"},
        quote_number="Q-000080",
        currency=catalog.default_currency,
        products=tuple(products),
        additional_conditions="Prices exclude duties.\n" * 10,
    )
