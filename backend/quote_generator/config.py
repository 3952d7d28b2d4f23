"""Application configuration module."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

# Paths relative to this file
_THIS_DIR = Path(__file__).parent  # backend/quote_generator/
_BACKEND_ROOT = _THIS_DIR.parent  # backend/
_PROJECT_ROOT = _BACKEND_ROOT.parent  # repository root
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Backend Configuration
    backend_host: str = "localhost"
    backend_port: int = 8000
    backend_debug: bool = False

    # Frontend Configuration
    frontend_port: int = 8501
    frontend_url: str = "http://localhost:8501"

    # Reference data (currencies, brand catalog, incoterms)
    catalog_path: str = str(_THIS_DIR / "data" / "catalog.yaml")

    # Document rendering
    render_scale: float = 2.0
    pdf_font_path: Optional[str] = None
    pdf_bold_font_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    @property
    def catalog_file_path(self) -> Path:
        """Get catalog path as Path object (always absolute)."""
        path = Path(self.catalog_path)
        # relative paths resolve against the repository root
        if not path.is_absolute():
            path = _PROJECT_ROOT / path
        return path

    @property
    def templates_dir_path(self) -> Path:
        """Get the packaged Jinja2 templates directory."""
        return _THIS_DIR / "templates"

    model_config = {
        "env_file": str(_ENV_FILE),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
