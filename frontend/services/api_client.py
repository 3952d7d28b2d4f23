"""API client for communicating with FastAPI backend."""

import httpx
import logging
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


class APIClient:
    """Synchronous client for interacting with the backend API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        """
        Initialize API client.

        Args:
            base_url: Backend API base URL
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(timeout=120)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def health_check(self) -> Dict[str, Any]:
        """
        Check backend health.

        Returns:
            Health check response

        Raises:
            httpx.HTTPError: If request fails
        """
        try:
            response = self.client.get(f"{self.base_url}/api/v1/health")
            response.raise_for_status()
            return response.json()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            raise

    def get_catalog(self) -> Dict[str, Any]:
        """
        Get currencies, brands and incoterms.

        Returns:
            Catalog data (the response "data" field)

        Raises:
            httpx.HTTPError: If request fails
        """
        try:
            response = self.client.get(f"{self.base_url}/api/v1/catalog")
            response.raise_for_status()
            return response.json()["data"]
        except Exception as e:
            logger.error(f"Get catalog failed: {e}")
            raise

    def preview_quote(self, quote: Dict[str, Any]) -> Dict[str, Any]:
        """
        Render a quote snapshot.

        Args:
            quote: QuoteData as a JSON-compatible dict

        Returns:
            {"document": {...}, "html": "..."}

        Raises:
            httpx.HTTPError: If request fails
        """
        try:
            response = self.client.post(
                f"{self.base_url}/api/v1/quotes/preview",
                json=quote,
            )
            response.raise_for_status()
            return response.json()["data"]
        except Exception as e:
            logger.error(f"Quote preview failed: {e}")
            raise

    def _export(self, quote: Optional[Dict[str, Any]], fmt: str) -> Optional[bytes]:
        try:
            response = self.client.post(
                f"{self.base_url}/api/v1/quotes/export/{fmt}",
                json=quote,
            )
            response.raise_for_status()
            if response.status_code == 204:
                return None
            return response.content
        except Exception as e:
            logger.error(f"{fmt.upper()} export failed: {e}")
            raise

    def export_pdf(self, quote: Optional[Dict[str, Any]]) -> Optional[bytes]:
        """
        Export a quote as PDF.

        Args:
            quote: QuoteData as a JSON-compatible dict

        Returns:
            PDF bytes, None when the backend had nothing to export

        Raises:
            httpx.HTTPError: If request fails
        """
        return self._export(quote, "pdf")

    def export_docx(self, quote: Optional[Dict[str, Any]]) -> Optional[bytes]:
        """
        Export a quote as a Word document.

        Args:
            quote: QuoteData as a JSON-compatible dict

        Returns:
            DOCX bytes, None when the backend had nothing to export

        Raises:
            httpx.HTTPError: If request fails
        """
        return self._export(quote, "docx")
