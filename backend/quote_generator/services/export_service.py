"""Quote export orchestration: preview, file naming, PDF/Word artifacts."""

import logging
from typing import Optional, Union

from ..models import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    DocumentTree,
    ExportArtifact,
    QuoteData,
)
from ..utils import ErrorCode, raise_error
from .document_renderer import DocumentRendererService, get_document_renderer
from .docx_exporter import DocxExporterService
from .pdf_exporter import PdfExporterService, get_pdf_exporter
from .service_factory import service_factory

logger = logging.getLogger(__name__)


PLACEHOLDER_QUOTE_NUMBER = "Q"

MEDIA_TYPES = {
    "pdf": PDF_MEDIA_TYPE,
    "docx": DOCX_MEDIA_TYPE,
}


def export_filename(quote_number: Optional[str], ext: str) -> str:
    """
    Download file name for an export.

    Args:
        quote_number: Quote number; falsy values use the "Q" placeholder
        ext: File extension without the dot

    Returns:
        "Quotation-<quote number>.<ext>"
    """
    return f"Quotation-{quote_number or PLACEHOLDER_QUOTE_NUMBER}.{ext}"


class QuoteExportService:
    """Renders quote snapshots and produces export artifacts."""

    def __init__(
        self,
        renderer: Optional[DocumentRendererService] = None,
        pdf_exporter: Optional[PdfExporterService] = None,
        docx_exporter: Optional[DocxExporterService] = None,
    ):
        self.renderer = renderer or get_document_renderer()
        self.pdf_exporter = pdf_exporter or get_pdf_exporter()
        self.docx_exporter = docx_exporter or DocxExporterService(renderer=self.renderer)

    def preview(self, quote: QuoteData) -> DocumentTree:
        """Render the on-screen document for a quote."""
        return self.renderer.render_preview(quote)

    def preview_html(self, quote: QuoteData) -> str:
        """Rendered document as HTML markup."""
        return self.renderer.render_html(self.preview(quote))

    def export(
        self,
        source: Union[QuoteData, DocumentTree, None],
        fmt: str,
    ) -> Optional[ExportArtifact]:
        """
        Export a quote or an already rendered document.

        Args:
            source: QuoteData (rendered first), DocumentTree, or None
            fmt: "pdf" or "docx"

        Returns:
            ExportArtifact, or None when there is no rendered document

        Raises:
            APIError: If the format is unsupported or the export fails
        """
        if fmt not in MEDIA_TYPES:
            raise_error(
                ErrorCode.UNSUPPORTED_EXPORT_FORMAT,
                f"Unsupported export format: {fmt}",
            )

        tree = self.preview(source) if isinstance(source, QuoteData) else source
        if tree is None:
            logger.info(f"{fmt.upper()} export skipped: no rendered document")
            return None

        if fmt == "pdf":
            content = self.pdf_exporter.export_pdf(tree)
        else:
            content = self.docx_exporter.export_docx(tree)

        if content is None:
            return None

        return ExportArtifact(
            filename=export_filename(tree.header.quote_number, fmt),
            media_type=MEDIA_TYPES[fmt],
            content=content,
        )


@service_factory
def get_export_service() -> QuoteExportService:
    """Get the QuoteExportService singleton."""
    return QuoteExportService()
