"""Unit tests for CatalogLoaderService."""

from pathlib import Path

import pytest
import yaml

from quote_generator.services.catalog_loader import (
    CatalogLoaderService,
    CatalogNotFoundError,
    CatalogParseError,
    default_catalog,
    get_catalog,
)


pytestmark = pytest.mark.unit


class TestCatalogLoaderService:
    """CatalogLoaderService tests."""

    @pytest.fixture
    def sample_catalog_yaml(self) -> dict:
        """Minimal valid catalog."""
        return {
            "currencies": [
                {"code": "USD", "symbol": "$", "label": "US Dollar"},
                {"code": "EUR", "symbol": "€"},
            ],
            "brands": {"Test Estate": ["Red Blend"]},
            "incoterms": ["EXW", "FOB"],
            "default_incoterm": "EXW",
        }

    @pytest.fixture
    def catalog_file(self, temp_dir: Path, sample_catalog_yaml: dict) -> Path:
        path = temp_dir / "catalog.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(sample_catalog_yaml, f, allow_unicode=True)
        return path

    # ============================================================
    # Loading
    # ============================================================

    def test_load_success(self, catalog_file: Path):
        catalog = CatalogLoaderService(catalog_path=catalog_file, cache_enabled=False).load()

        assert catalog.currency_codes == ["USD", "EUR"]
        assert catalog.default_currency.code == "USD"
        assert catalog.products_for("Test Estate") == ["Red Blend"]
        assert catalog.default_incoterm == "EXW"

    def test_packaged_catalog_matches_defaults(self):
        """The shipped YAML and the built-in defaults describe the same data."""
        catalog = CatalogLoaderService(cache_enabled=False).load()
        assert catalog == default_catalog()

    def test_load_missing_file(self, temp_dir: Path):
        loader = CatalogLoaderService(catalog_path=temp_dir / "missing.yaml", cache_enabled=False)
        with pytest.raises(CatalogNotFoundError):
            loader.load()

    def test_load_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "broken.yaml"
        path.write_text("currencies: [unclosed", encoding="utf-8")

        with pytest.raises(CatalogParseError):
            CatalogLoaderService(catalog_path=path, cache_enabled=False).load()

    def test_load_non_mapping(self, temp_dir: Path):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(CatalogParseError):
            CatalogLoaderService(catalog_path=path, cache_enabled=False).load()

    def test_load_schema_error(self, temp_dir: Path, sample_catalog_yaml: dict):
        sample_catalog_yaml["currencies"] = []
        path = temp_dir / "empty.yaml"
        path.write_text(yaml.dump(sample_catalog_yaml), encoding="utf-8")

        with pytest.raises(CatalogParseError):
            CatalogLoaderService(catalog_path=path, cache_enabled=False).load()

    def test_load_duplicate_currency(self, temp_dir: Path, sample_catalog_yaml: dict):
        sample_catalog_yaml["currencies"].append({"code": "USD", "symbol": "US$"})
        path = temp_dir / "dup.yaml"
        path.write_text(yaml.dump(sample_catalog_yaml), encoding="utf-8")

        with pytest.raises(CatalogParseError):
            CatalogLoaderService(catalog_path=path, cache_enabled=False).load()

    def test_load_default_incoterm_not_listed(self, temp_dir: Path, sample_catalog_yaml: dict):
        sample_catalog_yaml["default_incoterm"] = "DDP"
        path = temp_dir / "incoterm.yaml"
        path.write_text(yaml.dump(sample_catalog_yaml), encoding="utf-8")

        with pytest.raises(CatalogParseError):
            CatalogLoaderService(catalog_path=path, cache_enabled=False).load()

    # ============================================================
    # Fallback and cache
    # ============================================================

    def test_load_or_default_falls_back(self, temp_dir: Path):
        loader = CatalogLoaderService(catalog_path=temp_dir / "missing.yaml")
        assert loader.load_or_default() == default_catalog()

    def test_cache(self, catalog_file: Path):
        loader = CatalogLoaderService(catalog_path=catalog_file)
        first = loader.load()

        catalog_file.unlink()

        assert loader.load() is first

        loader.clear_cache()
        with pytest.raises(CatalogNotFoundError):
            loader.load()

    def test_get_catalog_singleton(self):
        assert get_catalog() is get_catalog()
