"""Catalog Loader Service - loads currency, brand and incoterm reference data.

Reference data is read once from YAML and cached; the built-in defaults in
``catalog_defaults`` are used when the file is missing or invalid.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..config import settings
from ..models import Catalog
from .catalog_defaults import (
    DEFAULT_BRANDS,
    DEFAULT_CURRENCIES,
    DEFAULT_INCOTERM,
    INCOTERMS,
)
from .service_factory import service_factory

logger = logging.getLogger(__name__)


# ============================================================
# Exceptions
# ============================================================


class CatalogNotFoundError(Exception):
    """Catalog file does not exist."""

    pass


class CatalogParseError(Exception):
    """Catalog file could not be parsed or validated."""

    pass


def default_catalog() -> Catalog:
    """Build the catalog from the built-in defaults."""
    return Catalog(
        currencies=DEFAULT_CURRENCIES,
        brands=DEFAULT_BRANDS,
        incoterms=INCOTERMS,
        default_incoterm=DEFAULT_INCOTERM,
    )


# ============================================================
# Catalog Loader service
# ============================================================


class CatalogLoaderService:
    """Catalog loader.

    Usage:
        loader = get_catalog_loader()
        catalog = loader.load_or_default()
        currency = catalog.get_currency("USD")
    """

    def __init__(self, catalog_path: Optional[Path] = None, cache_enabled: bool = True):
        """Initialize the loader.

        Args:
            catalog_path: YAML file path, defaults to settings.catalog_file_path
            cache_enabled: Keep the parsed catalog after the first load
        """
        self.catalog_path = catalog_path or settings.catalog_file_path
        self.cache_enabled = cache_enabled
        self._cached: Optional[Catalog] = None

    def load(self) -> Catalog:
        """Load the catalog from YAML.

        Returns:
            Catalog

        Raises:
            CatalogNotFoundError: File does not exist
            CatalogParseError: YAML or schema validation failed
        """
        if self.cache_enabled and self._cached is not None:
            logger.debug(f"Catalog served from cache: {self.catalog_path}")
            return self._cached

        path = Path(self.catalog_path)
        if not path.exists():
            raise CatalogNotFoundError(f"Catalog file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogParseError(f"Invalid YAML: {e}")

        if not isinstance(data, dict):
            raise CatalogParseError(f"Catalog must be a mapping, got {type(data).__name__}")

        try:
            catalog = Catalog(**data)
        except (ValidationError, TypeError) as e:
            raise CatalogParseError(f"Catalog validation failed: {e}")

        if catalog.default_incoterm not in catalog.incoterms:
            raise CatalogParseError(
                f"Default incoterm {catalog.default_incoterm!r} is not in the incoterm list"
            )

        if self.cache_enabled:
            self._cached = catalog
        logger.info(
            f"Catalog loaded from {path}: {len(catalog.currencies)} currencies, "
            f"{len(catalog.brands)} brands, {len(catalog.incoterms)} incoterms"
        )
        return catalog

    def load_or_default(self) -> Catalog:
        """Load the catalog, falling back to the built-in defaults.

        Returns:
            Catalog
        """
        try:
            return self.load()
        except (CatalogNotFoundError, CatalogParseError) as e:
            logger.warning(f"Catalog load failed, using built-in defaults: {e}")
            catalog = default_catalog()
            if self.cache_enabled:
                self._cached = catalog
            return catalog

    def clear_cache(self) -> None:
        """Drop the cached catalog."""
        self._cached = None
        logger.info("Catalog cache cleared")


# ============================================================
# Singleton factories
# ============================================================


@service_factory
def get_catalog_loader() -> CatalogLoaderService:
    """Get the CatalogLoaderService singleton."""
    return CatalogLoaderService()


def get_catalog() -> Catalog:
    """Process-wide catalog, loaded once."""
    return get_catalog_loader().load_or_default()
