"""PDF export for paginated minutes.

Draws the Page / LineSpan layout from pagination onto a reportlab canvas.
All positioning decisions are already made; this module only converts
top-down coordinates to PDF space and applies fonts, colours and links.
"""

import io
import logging
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from minutes_typesetter.config import DEFAULT_CONFIG, MinutesConfig, PageGeometry
from minutes_typesetter.pagination import RULE, LineSpan, Page, paginate
from minutes_typesetter.segmenter import render_minutes
from minutes_typesetter.utils.dates import format_header_date, format_long_date

logger = logging.getLogger(__name__)

TEXT_COLOR = colors.black
LINK_COLOR = colors.HexColor("#2563EB")
MARKER_TEXT = colors.HexColor("#B45309")
MARKER_FILL = colors.HexColor("#FEF3E2")
RULE_WIDTH = 0.5


def _draw_text_piece(c, span: LineSpan, x: float, piece: str, font: str, size: float,
                     baseline: float, top: float, bottom: float):
    c.setFillColor(LINK_COLOR if span.link else TEXT_COLOR)
    c.drawString(x, baseline, piece)
    if span.link:
        right = x + pdfmetrics.stringWidth(piece, font, size)
        c.linkURL(span.link, (x, bottom, right, top), relative=0, thickness=0)


def _draw_left_aligned(c, span: LineSpan, geometry: PageGeometry, baseline: float,
                       top: float, bottom: float):
    font = geometry.font_for(span.bold)
    size = geometry.font_size
    text = span.text

    for box in span.markers:
        c.setFillColor(MARKER_FILL)
        c.rect(box.x0, bottom, box.x1 - box.x0, top - bottom, stroke=0, fill=1)

    # Marker rectangles carry their own links; the line link covers the rest
    pos = 0
    for box in span.markers:
        if box.start > pos:
            _draw_text_piece(c, span, span.x + pdfmetrics.stringWidth(text[:pos], font, size),
                             text[pos:box.start], font, size, baseline, top, bottom)
        c.setFillColor(MARKER_TEXT)
        c.drawString(box.x0, baseline, text[box.start:box.end])
        if box.href:
            c.linkURL(box.href, (box.x0, bottom, box.x1, top), relative=0, thickness=0)
        pos = box.end

    if pos < len(text):
        _draw_text_piece(c, span, span.x + pdfmetrics.stringWidth(text[:pos], font, size),
                         text[pos:], font, size, baseline, top, bottom)


def _draw_span(c, span: LineSpan, geometry: PageGeometry):
    top = geometry.page_height - span.y

    if span.kind == RULE:
        c.setStrokeColor(TEXT_COLOR)
        c.setLineWidth(RULE_WIDTH)
        c.line(span.x, top, span.x + span.width, top)
        return

    if not span.text:
        return

    font = geometry.font_for(span.bold)
    c.setFont(font, geometry.font_size)
    baseline = top - pdfmetrics.getAscent(font, geometry.font_size)

    if span.align == "center":
        c.setFillColor(TEXT_COLOR)
        c.drawCentredString(span.x + span.width / 2, baseline, span.text)
    elif span.align == "right":
        c.setFillColor(TEXT_COLOR)
        c.drawRightString(span.x + span.width, baseline, span.text)
    else:
        _draw_left_aligned(c, span, geometry, baseline, top, top - geometry.line_height)


def draw_pages(pages: list[Page], geometry: Optional[PageGeometry] = None, *,
               title: str = "", author: str = "") -> bytes:
    """Draw laid-out pages to a PDF byte stream."""
    geometry = geometry or DEFAULT_CONFIG.geometry
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(geometry.page_width, geometry.page_height))
    c.setTitle(title)
    c.setAuthor(author)
    c.setCreator("minutes-typesetter")

    for page in pages:
        for span in page.lines:
            _draw_span(c, span, geometry)
        c.showPage()

    c.save()
    return buf.getvalue()


def export_minutes_pdf(text: str, meeting_date, video_url: Optional[str] = None,
                       config: Optional[MinutesConfig] = None) -> bytes:
    """Typeset raw minutes text as a paginated PDF.

    Args:
        text: The meeting's full minutes text.
        meeting_date: Meeting date (any format dateutil understands); shown
            in the running header and the document title.
        video_url: Optional meeting video; timestamped review markers link
            into it.
        config: Geometry and metadata; defaults to the legacy layout.

    Returns:
        PDF bytes.
    """
    config = config or DEFAULT_CONFIG
    doc = render_minutes(text, video_url=video_url)
    pages = paginate(doc, config.geometry, header_text=format_header_date(meeting_date))
    title = config.title_template.format(date=format_long_date(meeting_date))
    pdf = draw_pages(pages, config.geometry, title=title, author=config.author)
    logger.info(f"Exported minutes PDF: {len(pages)} page(s), {len(pdf):,} bytes")
    return pdf


def write_minutes_pdf(output_path: str | Path, text: str, meeting_date,
                      video_url: Optional[str] = None,
                      config: Optional[MinutesConfig] = None) -> Path:
    """Typeset minutes and write the PDF to ``output_path``."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(export_minutes_pdf(text, meeting_date, video_url, config))
    logger.info(f"Wrote {output_path}")
    return output_path
