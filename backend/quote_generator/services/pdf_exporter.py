"""PDF export service.

The document tree is rasterized with Pillow into one continuous image at a
fixed scale, then the image is cut into A4 portrait pages with PyMuPDF. Each
page shows the next vertical band of the image, so a page break can fall in
the middle of a table row and the text is not selectable.
"""

import io
import logging
import math
from typing import List, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image, ImageDraw, ImageFont

from ..config import settings
from ..models import DocumentTree
from ..utils import ErrorCode, raise_error
from .service_factory import service_factory

logger = logging.getLogger(__name__)


# A4 width in CSS pixels at 96 DPI; the layout is designed at scale 1
A4_CSS_WIDTH = 794
A4_WIDTH_PT, A4_HEIGHT_PT = fitz.paper_size("a4")

# Layout constants in CSS pixels
MARGIN = 40
TITLE_SIZE = 26
TEXT_SIZE = 13
HEADING_SIZE = 14
CELL_PADDING = 6
LINE_GAP = 4

# Item table column widths as fractions of the content width
COLUMN_FRACTIONS = (0.06, 0.18, 0.28, 0.10, 0.19, 0.19)

ACCENT = (124, 74, 30)
TEXT = (34, 34, 34)
BORDER = (204, 204, 204)
WHITE = (255, 255, 255)


def page_count(image_height: float, page_height: float) -> int:
    """
    Number of pages needed to cover an image.

    Args:
        image_height: Image height in pixels
        page_height: Page height in the same unit

    Returns:
        ceil(image_height / page_height), at least 1
    """
    if page_height <= 0:
        raise ValueError("page_height must be positive")
    return max(1, math.ceil(image_height / page_height))


class DocumentRasterizer:
    """Draws a DocumentTree onto a single Pillow image."""

    def __init__(
        self,
        scale: float = 2.0,
        font_path: Optional[str] = None,
        bold_font_path: Optional[str] = None,
    ):
        self.scale = scale
        self.font_path = font_path
        self.bold_font_path = bold_font_path or font_path
        self.width = round(A4_CSS_WIDTH * scale)
        self._fonts: dict = {}
        self._measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
        self._ops: List[tuple] = []

    # ===== Fonts and measuring =====

    def _px(self, value: float) -> int:
        return round(value * self.scale)

    def _font(self, size: int, bold: bool = False):
        key = (size, bold)
        if key not in self._fonts:
            path = self.bold_font_path if bold else self.font_path
            px = self._px(size)
            if path:
                self._fonts[key] = ImageFont.truetype(path, px)
            else:
                self._fonts[key] = ImageFont.load_default(size=px)
        return self._fonts[key]

    def _text_width(self, text: str, font) -> float:
        return self._measure.textlength(text, font=font)

    def _line_height(self, font) -> int:
        left, top, right, bottom = self._measure.textbbox((0, 0), "Ag", font=font)
        return bottom - top + self._px(LINE_GAP)

    def _wrap(self, text: str, font, max_width: float) -> List[str]:
        """Greedy word wrap; explicit newlines are kept.

        Words wider than ``max_width`` are broken by character.
        """
        lines: List[str] = []
        for paragraph in text.splitlines() or [""]:
            words = [piece for word in paragraph.split() for piece in self._break_word(word, font, max_width)]
            if not words:
                lines.append("")
                continue
            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if self._text_width(candidate, font) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)
        return lines

    def _break_word(self, word: str, font, max_width: float) -> List[str]:
        if self._text_width(word, font) <= max_width:
            return [word]
        pieces: List[str] = []
        current = ""
        for char in word:
            if current and self._text_width(current + char, font) > max_width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces

    # ===== Drawing commands =====

    def _text(self, x: float, y: float, text: str, font, fill=TEXT) -> None:
        self._ops.append(("text", (x, y), text, font, fill))

    def _text_block(self, x: float, y: float, text: str, font, max_width: float, fill=TEXT) -> float:
        """Draw wrapped text and return the y below it."""
        line_height = self._line_height(font)
        for line in self._wrap(text, font, max_width):
            self._text(x, y, line, font, fill)
            y += line_height
        return y

    def _rect(self, box: Tuple[float, float, float, float], fill=None, outline=None) -> None:
        self._ops.append(("rect", box, fill, outline))

    def _line(self, x1: float, y1: float, x2: float, y2: float, fill=ACCENT, width: int = 1) -> None:
        self._ops.append(("line", (x1, y1, x2, y2), fill, width))

    # ===== Layout =====

    def _layout_header(self, tree: DocumentTree, y: float) -> float:
        left = self._px(MARGIN)
        right = self.width - self._px(MARGIN)
        title_font = self._font(TITLE_SIZE, bold=True)
        number_font = self._font(HEADING_SIZE)

        self._text(left, y, tree.header.title, title_font, ACCENT)
        number = f"No: {tree.header.quote_number}"
        self._text(right - self._text_width(number, number_font), y + self._px(8), number, number_font)

        y += self._line_height(title_font) + self._px(8)
        self._line(left, y, right, y, ACCENT, self._px(3))
        return y + self._px(16)

    def _layout_details(self, tree: DocumentTree, y: float) -> float:
        left = self._px(MARGIN)
        content = self.width - 2 * self._px(MARGIN)
        split = left + content * 0.55
        font = self._font(TEXT_SIZE)
        bold = self._font(TEXT_SIZE, bold=True)

        # Bill-to column
        left_y = y
        self._text(left, left_y, "Bill To", bold, ACCENT)
        left_y += self._line_height(bold)
        for line in tree.bill_to.lines:
            left_y = self._text_block(left, left_y, line, font, split - left - self._px(12))

        # Metadata column
        right_y = y
        label_width = self._px(110)
        value_width = left + content - split - label_width
        for entry in tree.metadata:
            self._text(split, right_y, f"{entry.label}:", bold)
            right_y = max(
                right_y + self._line_height(bold),
                self._text_block(split + label_width, right_y, entry.value, font, value_width),
            )

        return max(left_y, right_y) + self._px(16)

    def _layout_table(self, tree: DocumentTree, y: float) -> float:
        left = self._px(MARGIN)
        content = self.width - 2 * self._px(MARGIN)
        widths = [content * f for f in COLUMN_FRACTIONS]
        pad = self._px(CELL_PADDING)
        font = self._font(TEXT_SIZE)
        bold = self._font(TEXT_SIZE, bold=True)

        def row(cells, cell_font, fill=None, text_fill=TEXT, outline=BORDER) -> float:
            nonlocal y
            wrapped = [self._wrap(c, cell_font, w - 2 * pad) for c, w in zip(cells, widths)]
            height = max(len(lines) for lines in wrapped) * self._line_height(cell_font) + 2 * pad
            x = left
            for lines, w in zip(wrapped, widths):
                self._rect((x, y, x + w, y + height), fill=fill, outline=outline)
                self._text_block(x + pad, y + pad, "\n".join(lines), cell_font, w - 2 * pad, text_fill)
                x += w
            y += height
            return y

        row(tree.table.columns, bold, fill=ACCENT, text_fill=WHITE, outline=ACCENT)
        for item in tree.table.rows:
            row(item.cells, font)

        # Subtotal footer: label cell spans all but the last column
        label_width = sum(widths[:-1])
        height = self._line_height(bold) + 2 * pad
        self._rect((left, y, left + label_width, y + height), outline=BORDER)
        label = tree.table.subtotal_label
        self._text(left + label_width - pad - self._text_width(label, bold), y + pad, label, bold)
        self._rect((left + label_width, y, left + content, y + height), outline=BORDER)
        self._text(left + label_width + pad, y + pad, tree.table.subtotal, bold)
        return y + height + self._px(16)

    def _layout_sections(self, tree: DocumentTree, y: float) -> float:
        left = self._px(MARGIN)
        content = self.width - 2 * self._px(MARGIN)
        font = self._font(TEXT_SIZE)
        bold = self._font(TEXT_SIZE, bold=True)
        for section in tree.sections:
            self._text(left, y, section.title, bold, ACCENT)
            y += self._line_height(bold)
            y = self._text_block(left, y, section.body, font, content) + self._px(12)
        return y

    def rasterize(self, tree: DocumentTree) -> Image.Image:
        """
        Draw the document on one continuous image.

        Args:
            tree: Rendered document

        Returns:
            RGB image, width = A4 CSS width x scale
        """
        self._ops = []
        y = self._px(MARGIN)
        y = self._layout_header(tree, y)
        y = self._layout_details(tree, y)
        y = self._layout_table(tree, y)
        y = self._layout_sections(tree, y)
        height = math.ceil(y + self._px(MARGIN))

        image = Image.new("RGB", (self.width, height), WHITE)
        draw = ImageDraw.Draw(image)
        for op in self._ops:
            kind = op[0]
            if kind == "text":
                _, xy, text, font, fill = op
                draw.text(xy, text, font=font, fill=fill)
            elif kind == "rect":
                _, box, fill, outline = op
                draw.rectangle(box, fill=fill, outline=outline, width=max(1, self._px(1)))
            elif kind == "line":
                _, xy, fill, width = op
                draw.line(xy, fill=fill, width=width)
        return image


class PdfExporterService:
    """Service for exporting a rendered quotation to PDF."""

    def __init__(
        self,
        scale: Optional[float] = None,
        font_path: Optional[str] = None,
        bold_font_path: Optional[str] = None,
    ):
        """
        Initialize PDF exporter.

        Args:
            scale: Rasterization scale factor, defaults to settings.render_scale (2x)
            font_path: TrueType font for body text, Pillow's built-in font when None
            bold_font_path: TrueType font for bold text
        """
        self.scale = scale or settings.render_scale
        self.font_path = font_path or settings.pdf_font_path
        self.bold_font_path = bold_font_path or settings.pdf_bold_font_path

    def rasterize(self, tree: DocumentTree) -> Image.Image:
        """Rasterize the document at the configured scale."""
        rasterizer = DocumentRasterizer(
            scale=self.scale,
            font_path=self.font_path,
            bold_font_path=self.bold_font_path,
        )
        return rasterizer.rasterize(tree)

    def paginate(self, image: Image.Image) -> bytes:
        """
        Cut an image into A4 portrait pages.

        The image is scaled to the page width; every page shows the next
        page-height band of it.

        Args:
            image: Continuous document image

        Returns:
            PDF bytes
        """
        page_height_px = image.width * A4_HEIGHT_PT / A4_WIDTH_PT
        pages = page_count(image.height, page_height_px)

        doc = fitz.open()
        try:
            for index in range(pages):
                top = int(index * page_height_px)
                bottom = min(image.height, int((index + 1) * page_height_px))
                band = image.crop((0, top, image.width, bottom))

                buffer = io.BytesIO()
                band.save(buffer, format="PNG")

                page = doc.new_page(width=A4_WIDTH_PT, height=A4_HEIGHT_PT)
                band_height_pt = (bottom - top) * A4_WIDTH_PT / image.width
                page.insert_image(
                    fitz.Rect(0, 0, A4_WIDTH_PT, band_height_pt),
                    stream=buffer.getvalue(),
                )
            return doc.tobytes(deflate=True)
        finally:
            doc.close()

    def export_pdf(self, tree: Optional[DocumentTree]) -> Optional[bytes]:
        """
        Export the document as a paginated raster PDF.

        Args:
            tree: Rendered document; None means nothing is rendered yet

        Returns:
            PDF bytes, or None when there is no document to export

        Raises:
            APIError: If rasterization or PDF assembly fails
        """
        if tree is None:
            logger.info("PDF export skipped: no rendered document")
            return None

        try:
            image = self.rasterize(tree)
            content = self.paginate(image)
            logger.info(
                f"PDF exported for {tree.header.quote_number}: "
                f"{image.width}x{image.height}px, {len(content)} bytes"
            )
            return content
        except Exception as e:
            logger.error(f"PDF export failed: {e}")
            raise_error(
                ErrorCode.EXPORT_FAILED,
                f"PDF export failed: {str(e)}",
                status_code=500,
            )


@service_factory
def get_pdf_exporter() -> PdfExporterService:
    """Get the PdfExporterService singleton."""
    return PdfExporterService()
