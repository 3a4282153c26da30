"""Pagination renderer: segmented minutes laid out on fixed-size pages.

Lays text out against the fixed geometry in config.PageGeometry using the
reportlab font metrics, and returns plain Page / LineSpan values. Drawing
those values to PDF is pdf_export's job. Coordinates are in points with
``y`` measured down from the top of the page to the top of the line box.

Page breaks only ever fall between logical lines: each block is measured
(wrapped to its column width) before it is placed, and moved whole to the
next page if it would cross the bottom limit.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from reportlab.pdfbase.pdfmetrics import stringWidth

from minutes_typesetter.annotations import ReviewMarker
from minutes_typesetter.config import DEFAULT_CONFIG, PageGeometry
from minutes_typesetter.segmenter import ClassifiedLine, Role, SegmentedDocument

logger = logging.getLogger(__name__)

# Span kinds
HEADER = "header"
FOOTER = "footer"
TITLE = "title"
BODY = "body"
GAP = "gap"
RULE = "rule"
SIGNATURE = "signature"

HEADER_BOX_WIDTH = 80
HEADER_OFFSET = 24
FOOTER_BOX_WIDTH = 20
FOOTER_OFFSET = 8
SIGNATURE_RESERVE = 60
SIGNATURE_RULE_GAP = 4
SIGNATURE_COLUMN_GUTTER = 20

_WORD_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class MarkerBox:
    """Where a review marker landed within one placed line."""
    start: int
    end: int
    x0: float
    x1: float
    marker: ReviewMarker
    href: Optional[str] = None


@dataclass(frozen=True)
class LineSpan:
    x: float
    y: float
    width: float
    text: str
    bold: bool = False
    align: str = "left"
    kind: str = BODY
    source: Optional[tuple[str, int]] = None
    role: Optional[Role] = None
    indent_level: int = 0
    link: Optional[str] = None
    markers: tuple[MarkerBox, ...] = ()


@dataclass(frozen=True)
class Page:
    page_number: int
    lines: tuple[LineSpan, ...]

    def body_spans(self) -> list[LineSpan]:
        return [s for s in self.lines if s.kind not in (HEADER, FOOTER)]


# ── Text measurement ─────────────────────────────────────────────────────

def _fit_chars(text: str, start: int, end: int, font: str, size: float, width: float) -> int:
    cut = start + 1
    while cut < end and stringWidth(text[start:cut + 1], font, size) <= width:
        cut += 1
    return cut


def wrap_text(text: str, font: str, size: float, width: float) -> list[tuple[int, int]]:
    """Greedy word wrap returning (start, end) character offsets per line.

    Words wider than the column are broken between characters. Empty text
    still occupies one (empty) line.
    """
    spans = []
    line_start = line_end = None

    for m in _WORD_RE.finditer(text):
        word_start, word_end = m.span()
        if line_start is not None:
            if stringWidth(text[line_start:word_end], font, size) <= width:
                line_end = word_end
                continue
            spans.append((line_start, line_end))
        line_start, line_end = word_start, word_end

        while (line_end - line_start > 1
               and stringWidth(text[line_start:line_end], font, size) > width):
            cut = _fit_chars(text, line_start, line_end, font, size, width)
            spans.append((line_start, cut))
            line_start = cut

    if line_start is not None:
        spans.append((line_start, line_end))
    return spans or [(0, 0)]


def _marker_ranges(line: ClassifiedLine) -> list[tuple[int, int, ReviewMarker]]:
    """Character ranges of each review marker within the line's display text."""
    ranges = []
    pos = 0
    for seg in line.segments:
        length = len(seg.display_text)
        if isinstance(seg, ReviewMarker):
            ranges.append((pos, pos + length, seg))
        pos += length
    return ranges


# ── Page builder ─────────────────────────────────────────────────────────

class _PageBuilder:
    """Running cursor over the page sequence; emits headers and footers."""

    def __init__(self, geometry: PageGeometry, header_text: str):
        self.g = geometry
        self.header_text = header_text
        self.pages: list[Page] = []
        self.spans: list[LineSpan] = []
        self.page_number = 1
        self.y = geometry.margin_top
        self._write_header()

    def _write_header(self):
        if not self.header_text:
            return
        self.spans.append(LineSpan(
            x=self.g.page_width - self.g.margin_right - HEADER_BOX_WIDTH,
            y=self.g.margin_top - HEADER_OFFSET,
            width=HEADER_BOX_WIDTH,
            text=self.header_text,
            align="right",
            kind=HEADER,
        ))

    def _write_footer(self):
        self.spans.append(LineSpan(
            x=self.g.page_width / 2 - FOOTER_BOX_WIDTH / 2,
            y=self.g.page_height - self.g.margin_bottom + FOOTER_OFFSET,
            width=FOOTER_BOX_WIDTH,
            text=str(self.page_number),
            align="center",
            kind=FOOTER,
        ))

    def _close_page(self):
        self._write_footer()
        self.pages.append(Page(page_number=self.page_number, lines=tuple(self.spans)))

    def new_page(self):
        self._close_page()
        self.page_number += 1
        self.spans = []
        self.y = self.g.margin_top
        self._write_header()

    def ensure_space(self, needed: float):
        g = self.g
        # A block taller than a whole page starts on a fresh page and is continued by place()
        if self.y + needed <= g.bottom_limit or self.y <= g.margin_top:
            return
        self.new_page()

    def blank(self, source: Optional[tuple[str, int]] = None):
        if source is not None:
            self.spans.append(LineSpan(
                x=self.g.margin_left, y=self.y, width=0, text="",
                kind=GAP, source=source, role=Role.BLANK,
            ))
        self.y += self.g.line_height

    def add(self, span: LineSpan):
        self.spans.append(span)

    def wrap(self, text: str, width: float, bold: bool) -> list[tuple[int, int]]:
        return wrap_text(text, self.g.font_for(bold), self.g.font_size, width)

    def place(self, text: str, wrapped: list[tuple[int, int]], x: float, width: float, *,
              bold: bool, markers=(), video_url: Optional[str] = None, **span_kwargs):
        """Place already-measured lines at the cursor, one line height each."""
        g = self.g
        font = g.font_for(bold)
        if self.y + len(wrapped) * g.line_height > g.bottom_limit:
            logger.warning(
                f"Line of {len(text)} characters is taller than a page; "
                f"continuing it across pages"
            )

        for start, end in wrapped:
            if self.y + g.line_height > g.bottom_limit:
                self.ensure_space(g.line_height)

            boxes = []
            for m_start, m_end, marker in markers:
                a, b = max(start, m_start), min(end, m_end)
                if a >= b:
                    continue
                boxes.append(MarkerBox(
                    start=a - start,
                    end=b - start,
                    x0=x + stringWidth(text[start:a], font, g.font_size),
                    x1=x + stringWidth(text[start:b], font, g.font_size),
                    marker=marker,
                    href=marker.href(video_url),
                ))

            self.spans.append(LineSpan(
                x=x, y=self.y, width=width, text=text[start:end], bold=bold,
                markers=tuple(boxes), **span_kwargs,
            ))
            self.y += g.line_height

    def finish(self) -> list[Page]:
        self._close_page()
        return self.pages


# ── Rendering ────────────────────────────────────────────────────────────

def _place_title(builder: _PageBuilder, doc: SegmentedDocument):
    g = builder.g
    builder.blank()
    builder.blank()
    for i, line in enumerate(doc.title_lines):
        wrapped = builder.wrap(line, g.content_width, bold=True)
        builder.ensure_space(len(wrapped) * g.line_height)
        builder.place(
            line, wrapped, g.margin_left, g.content_width, bold=True,
            align="center", kind=TITLE, source=("title", i), role=Role.TITLE,
        )
    builder.blank()
    builder.blank()


def _place_body_line(builder: _PageBuilder, line: ClassifiedLine, index: int,
                     video_url: Optional[str]):
    g = builder.g
    source = ("body", index)

    if line.role == Role.BLANK:
        builder.blank(source=source)
        return

    common = dict(kind=BODY, source=source, role=line.role, indent_level=line.indent_level)
    text = line.display_text
    markers = _marker_ranges(line)

    if line.role == Role.SECTION_HEADER:
        x = g.margin_left + g.section_indent
        width = g.content_width - g.section_indent
        wrapped = builder.wrap(text, width, line.bold)
        # Keep the header with at least one line of what follows
        builder.ensure_space(max(2, len(wrapped)) * g.line_height)
        builder.add(LineSpan(
            x=g.margin_left, y=builder.y, width=g.section_indent,
            text=line.section_number, bold=line.bold, **common,
        ))
        builder.place(text, wrapped, x, width, bold=line.bold,
                      markers=markers, video_url=video_url, **common)
        return

    indent = g.section_indent * line.indent_level
    x = g.margin_left + indent
    width = g.content_width - indent
    wrapped = builder.wrap(text, width, line.bold)
    builder.ensure_space(len(wrapped) * g.line_height)
    builder.place(text, wrapped, x, width, bold=line.bold, markers=markers,
                  video_url=video_url, link=line.link, **common)


def _place_signature(builder: _PageBuilder, doc: SegmentedDocument):
    g = builder.g
    builder.ensure_space(SIGNATURE_RESERVE)
    builder.blank()
    builder.blank()

    column_width = g.content_width / 2 - 2 * SIGNATURE_COLUMN_GUTTER
    columns = (g.margin_left, g.margin_left + g.content_width / 2 + SIGNATURE_COLUMN_GUTTER)

    for x in columns:
        builder.add(LineSpan(x=x, y=builder.y, width=column_width, text="", kind=RULE))
    builder.y += SIGNATURE_RULE_GAP

    for row in (doc.signature.names, doc.signature.titles):
        for x, value in zip(columns, row):
            if value:
                builder.add(LineSpan(
                    x=x, y=builder.y, width=column_width, text=value, kind=SIGNATURE,
                ))
        builder.y += g.line_height


def paginate(doc: SegmentedDocument, geometry: Optional[PageGeometry] = None,
             header_text: str = "") -> list[Page]:
    """Lay a segmented document out on fixed-size pages.

    Args:
        doc: Output of segmenter.render_minutes.
        geometry: Page and font metrics; the legacy Letter layout by default.
        header_text: Short identifying string (the meeting date) repeated at
            the top of every page.

    Returns:
        Pages in order, numbered from 1. Always at least one page.
    """
    geometry = geometry or DEFAULT_CONFIG.geometry
    builder = _PageBuilder(geometry, header_text)

    _place_title(builder, doc)
    for i, line in enumerate(doc.body_lines):
        _place_body_line(builder, line, i, doc.video_url)
    if doc.has_signature:
        _place_signature(builder, doc)

    pages = builder.finish()
    logger.info(f"Paginated minutes into {len(pages)} page(s)")
    return pages


def iter_page_roles(pages: list[Page]) -> list[tuple[Role, bool, int]]:
    """(role, bold, indent) for every title and body line, in placement order."""
    triples = []
    last = None
    for page in pages:
        for span in page.lines:
            if span.source is None or span.source == last:
                continue
            last = span.source
            triples.append((span.role, span.bold, span.indent_level))
    return triples
