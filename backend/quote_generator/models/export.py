"""Export artifact model."""

from pydantic import BaseModel, Field
from typing import Literal


PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ExportFormat = Literal["pdf", "docx"]


class ExportArtifact(BaseModel):
    """A downloadable export file."""

    filename: str = Field(..., description="Quotation-<number>.<ext>")
    media_type: str = Field(..., description="MIME type")
    content: bytes = Field(..., description="File content")

    model_config = {"frozen": True}

    @property
    def size(self) -> int:
        return len(self.content)
