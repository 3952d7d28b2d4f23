"""Quote preview and export API routes."""

import asyncio
import logging
from typing import Optional
from urllib.parse import quote as url_quote

from fastapi import APIRouter, Body, Response

from ...api.dependencies import ExportServiceDep
from ...models import APIResponse, ExportArtifact, QuoteData
from ...utils import log_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/quotes", tags=["Quotes"])


def content_disposition(filename: str) -> str:
    """Attachment header value.

    Names that are not plain printable ASCII, or that contain quote or
    backslash characters, are sent percent-encoded as RFC 5987 filename*.
    """
    if filename.isascii() and filename.isprintable() and not any(c in filename for c in '"\\'):
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=UTF-8''{url_quote(filename, safe='')}"


def _file_response(artifact: Optional[ExportArtifact]) -> Response:
    """Attachment response for an artifact, 204 when nothing was exported."""
    if artifact is None:
        return Response(status_code=204)
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": content_disposition(artifact.filename)},
    )


@router.post(
    "/preview",
    response_model=APIResponse,
    summary="Render quote preview",
)
async def preview_quote(quote: QuoteData, service: ExportServiceDep) -> dict:
    """
    Render a quote snapshot.

    - **document**: structured document (header, bill-to, metadata, items, sections)
    - **html**: the same document as HTML markup
    """
    try:
        tree = service.preview(quote)
        html = service.renderer.render_html(tree)
        return {
            "success": True,
            "message": "Quote rendered",
            "data": {
                "document": tree.model_dump(),
                "html": html,
            },
        }
    except Exception as e:
        log_error(e, context=f"Preview quote: {quote.quote_number}")
        raise


@router.post(
    "/export/pdf",
    summary="Export quote as PDF",
    responses={204: {"description": "No rendered document, nothing exported"}},
)
async def export_pdf(
    service: ExportServiceDep,
    quote: Optional[QuoteData] = Body(None),
) -> Response:
    """
    Export a quote as a paginated A4 PDF.

    The document is rasterized at the configured scale in a worker thread.
    """
    try:
        artifact = await asyncio.to_thread(service.export, quote, "pdf")
        return _file_response(artifact)
    except Exception as e:
        log_error(e, context="Export PDF")
        raise


@router.post(
    "/export/docx",
    summary="Export quote as Word document",
    responses={204: {"description": "No rendered document, nothing exported"}},
)
async def export_docx(
    service: ExportServiceDep,
    quote: Optional[QuoteData] = Body(None),
) -> Response:
    """
    Export a quote as a .docx file built from the rendered HTML.
    """
    try:
        artifact = service.export(quote, "docx")
        return _file_response(artifact)
    except Exception as e:
        log_error(e, context="Export Word")
        raise
