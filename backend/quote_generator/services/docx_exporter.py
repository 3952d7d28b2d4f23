"""Word (.docx) export service.

The rendered HTML markup is wrapped in a minimal HTML document and embedded
in a Word package as an alternative format chunk (``w:altChunk``). Word
converts the chunk into native content when the file is opened.
"""

import io
import logging
from typing import Optional

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.packuri import PackURI
from docx.opc.part import Part
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from ..models import DocumentTree
from ..utils import APIError, ErrorCode, raise_error
from .document_renderer import DocumentRendererService, get_document_renderer, wrap_html_document

logger = logging.getLogger(__name__)


HTML_CHUNK_PARTNAME = "/word/quotation.html"
HTML_CHUNK_CONTENT_TYPE = "text/html"


class DocxExporterService:
    """Service for exporting a rendered quotation to Word."""

    def __init__(self, renderer: Optional[DocumentRendererService] = None):
        """
        Initialize Word exporter.

        Args:
            renderer: Renderer used for the HTML markup, None for the shared instance
        """
        self.renderer = renderer or get_document_renderer()

    def build_html(self, tree: DocumentTree) -> str:
        """Standalone HTML document for the quotation."""
        markup = self.renderer.render_html(tree)
        return wrap_html_document(markup, title=f"Quotation {tree.header.quote_number}")

    def export_docx(self, tree: Optional[DocumentTree]) -> Optional[bytes]:
        """
        Export the document as a .docx package.

        Args:
            tree: Rendered document; None means nothing is rendered yet

        Returns:
            DOCX bytes, or None when there is no document to export

        Raises:
            APIError: If the package cannot be built
        """
        if tree is None:
            logger.info("Word export skipped: no rendered document")
            return None

        try:
            html = self.build_html(tree)

            document = Document()
            document.core_properties.title = f"Quotation {tree.header.quote_number}"

            chunk = Part(
                PackURI(HTML_CHUNK_PARTNAME),
                HTML_CHUNK_CONTENT_TYPE,
                html.encode("utf-8"),
                document.part.package,
            )
            r_id = document.part.relate_to(chunk, RT.A_F_CHUNK)

            alt_chunk = OxmlElement("w:altChunk")
            alt_chunk.set(qn("r:id"), r_id)

            # Body content must precede the section properties
            body = document.element.body
            sect_pr = body.find(qn("w:sectPr"))
            if sect_pr is not None:
                sect_pr.addprevious(alt_chunk)
            else:
                body.append(alt_chunk)

            buffer = io.BytesIO()
            document.save(buffer)
            content = buffer.getvalue()
            logger.info(f"Word export for {tree.header.quote_number}: {len(content)} bytes")
            return content

        except APIError:
            raise
        except Exception as e:
            logger.error(f"Word export failed: {e}")
            raise_error(
                ErrorCode.EXPORT_FAILED,
                f"Word export failed: {str(e)}",
                status_code=500,
            )

