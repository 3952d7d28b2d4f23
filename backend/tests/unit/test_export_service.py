"""Unit tests for QuoteExportService."""

import pytest

from quote_generator.models import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE, QuoteData
from quote_generator.services.document_renderer import DocumentRendererService
from quote_generator.services.export_service import QuoteExportService, export_filename
from quote_generator.services.pdf_exporter import PdfExporterService
from quote_generator.utils import APIError, ErrorCode


pytestmark = pytest.mark.unit


@pytest.fixture
def service() -> QuoteExportService:
    return QuoteExportService(
        renderer=DocumentRendererService(),
        pdf_exporter=PdfExporterService(scale=1.0),
    )


class TestExportFilename:
    """Quotation-<number>.<ext> naming."""

    def test_with_quote_number(self):
        assert export_filename("Q-123456", "pdf") == "Quotation-Q-123456.pdf"
        assert export_filename("QT-7", "docx") == "Quotation-QT-7.docx"

    @pytest.mark.parametrize("quote_number", ["", None])
    def test_placeholder(self, quote_number):
        assert export_filename(quote_number, "pdf") == "Quotation-Q.pdf"


class TestQuoteExportService:
    """Preview and export orchestration."""

    def test_docx_exporter_shares_renderer(self, service: QuoteExportService):
        assert service.docx_exporter.renderer is service.renderer

    def test_preview_html(self, service: QuoteExportService, sample_quote: QuoteData):
        html = service.preview_html(sample_quote)
        assert "Q-482913" in html

    def test_export_pdf(self, service: QuoteExportService, sample_quote: QuoteData):
        artifact = service.export(sample_quote, "pdf")

        assert artifact.filename == "Quotation-Q-482913.pdf"
        assert artifact.media_type == PDF_MEDIA_TYPE
        assert artifact.content.startswith(b"%PDF")

    def test_export_docx_from_tree(self, service: QuoteExportService, sample_quote: QuoteData):
        tree = service.preview(sample_quote)
        artifact = service.export(tree, "docx")

        assert artifact.filename == "Quotation-Q-482913.docx"
        assert artifact.media_type == DOCX_MEDIA_TYPE
        assert artifact.content.startswith(b"PK")

    def test_export_tree_without_number_uses_placeholder(self, service: QuoteExportService, sample_quote: QuoteData):
        tree = service.preview(sample_quote)
        tree = tree.model_copy(update={"header": tree.header.model_copy(update={"quote_number": ""})})

        assert service.export(tree, "docx").filename == "Quotation-Q.docx"

    @pytest.mark.parametrize("fmt", ["pdf", "docx"])
    def test_export_nothing_rendered_is_noop(self, service: QuoteExportService, fmt):
        assert service.export(None, fmt) is None

    def test_export_unsupported_format(self, service: QuoteExportService, sample_quote: QuoteData):
        with pytest.raises(APIError) as exc_info:
            service.export(sample_quote, "xlsx")

        assert exc_info.value.error_code == ErrorCode.UNSUPPORTED_EXPORT_FORMAT
        assert exc_info.value.status_code == 400
