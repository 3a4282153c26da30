"""Screen renderer: segmented minutes as a scrollable HTML preview.

Builds a BeautifulSoup tree mirroring the printed layout (no pages,
headers or footers). Every title and body element carries ``data-role``,
``data-bold`` and ``data-indent`` attributes taken straight from the
segmentation so the preview can be checked against the paginated output.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from minutes_typesetter.annotations import ReviewMarker
from minutes_typesetter.config import DEFAULT_CONFIG, PageGeometry
from minutes_typesetter.segmenter import ClassifiedLine, Role, SegmentedDocument

logger = logging.getLogger(__name__)

LINK_COLOR = "#2563EB"
MARKER_STYLE = (
    "background: rgba(245, 158, 11, 0.12); color: #B45309; "
    "border: 1px solid rgba(245, 158, 11, 0.25); border-radius: 4px; "
    "padding: 0 4px; font-size: 0.9em;"
)


def _pt(value: float) -> str:
    return f"{value:g}pt"


def _new_tag(soup: BeautifulSoup, name: str, style: str = "", **attrs) -> Tag:
    tag = soup.new_tag(name, attrs=attrs)
    if style:
        tag["style"] = style
    return tag


def _line_attrs(role: Role, bold: bool, indent_level: int) -> dict:
    return {
        "data-role": role.value,
        "data-bold": "true" if bold else "false",
        "data-indent": str(indent_level),
    }


def _render_marker(soup: BeautifulSoup, marker: ReviewMarker, video_url: Optional[str],
                   inside_link: bool = False) -> Tag:
    href = None if inside_link else marker.href(video_url)
    if href:
        tag = _new_tag(soup, "a", MARKER_STYLE + " cursor: pointer; text-decoration: none;",
                       href=href, target="_blank", rel="noopener noreferrer")
        tag["title"] = marker.hint(video_url)
    else:
        tag = _new_tag(soup, "span", MARKER_STYLE + " cursor: default;")
    tag["class"] = ["review-marker"]
    if marker.timestamp_seconds is not None:
        tag["data-seconds"] = str(marker.timestamp_seconds)
    tag.string = marker.display_text
    return tag


def _append_inline(soup: BeautifulSoup, parent: Tag, line: ClassifiedLine,
                   video_url: Optional[str]) -> None:
    """Append a line's displayed text, with links and review markers."""
    if line.link:
        # Anchors cannot nest, so markers inside a URL line stay inert spans
        a = _new_tag(soup, "a", f"color: {LINK_COLOR}; word-break: break-all;",
                     href=line.link, target="_blank", rel="noopener noreferrer")
        parent.append(a)
        parent = a

    for seg in line.segments:
        if isinstance(seg, ReviewMarker):
            parent.append(_render_marker(soup, seg, video_url, inside_link=bool(line.link)))
        else:
            parent.append(seg.text)


def _render_body_line(soup: BeautifulSoup, line: ClassifiedLine, index: int,
                      geometry: PageGeometry, video_url: Optional[str]) -> Tag:
    attrs = _line_attrs(line.role, line.bold, line.indent_level)
    attrs["data-line"] = str(index)
    weight = 700 if line.bold else 400

    if line.role == Role.BLANK:
        return _new_tag(soup, "div", f"height: {_pt(geometry.line_height)};", **attrs)

    if line.role == Role.SECTION_HEADER:
        row = _new_tag(soup, "div", "display: flex; margin: 0;", **attrs)
        number = _new_tag(soup, "span",
                          f"font-weight: {weight}; min-width: {_pt(geometry.section_indent)}; "
                          "flex-shrink: 0;")
        number["class"] = ["section-number"]
        number.string = line.section_number
        title = _new_tag(soup, "span", f"font-weight: {weight};")
        title["class"] = ["section-title"]
        _append_inline(soup, title, line, video_url)
        row.append(number)
        row.append(title)
        return row

    indent = geometry.section_indent * line.indent_level
    style = f"margin: 0; font-weight: {weight};"
    if indent:
        style += f" padding-left: {_pt(indent)};"
    p = _new_tag(soup, "p", style, **attrs)
    _append_inline(soup, p, line, video_url)
    return p


def _render_signature(soup: BeautifulSoup, doc: SegmentedDocument,
                      geometry: PageGeometry) -> Tag:
    block = _new_tag(soup, "div", f"margin-top: {_pt(geometry.line_height * 2)};")
    block["class"] = ["signature-block"]
    column = "width: 38%;"
    rows = (
        ("signature-rule", ("\u00a0", "\u00a0"), column + " border-bottom: 0.5pt solid #000;"),
        ("signature-names", doc.signature.names, column),
        ("signature-titles", doc.signature.titles, column),
    )
    for cls, (left, right), cell_style in rows:
        row = _new_tag(soup, "div", "display: flex; justify-content: space-between;")
        row["class"] = [cls]
        if cls == "signature-names":
            row["style"] += " margin-top: 4pt;"
        for value in (left, right):
            cell = _new_tag(soup, "span", cell_style)
            cell.string = value
            row.append(cell)
        block.append(row)
    return block


def render_screen(doc: SegmentedDocument, geometry: Optional[PageGeometry] = None) -> BeautifulSoup:
    """Render a segmented document as a single scrollable HTML block."""
    geometry = geometry or DEFAULT_CONFIG.geometry
    soup = BeautifulSoup("", "lxml")

    root = _new_tag(
        soup, "div",
        "font-family: 'Times New Roman', Times, Georgia, serif; "
        f"font-size: {_pt(geometry.font_size)}; line-height: {_pt(geometry.line_height)}; "
        f"color: #000; padding: {_pt(geometry.margin_top)} {_pt(geometry.margin_right)} "
        f"{_pt(geometry.margin_bottom)} {_pt(geometry.margin_left)}; "
        f"max-width: {_pt(geometry.page_width)}; margin: 0 auto;",
    )
    root["class"] = ["minutes-document"]
    soup.append(root)

    title = _new_tag(soup, "div",
                     "text-align: center; "
                     f"margin: {_pt(geometry.line_height * 2)} 0;")
    title["class"] = ["title-block"]
    for line in doc.title_lines:
        div = _new_tag(soup, "div", "font-weight: 700;", **_line_attrs(Role.TITLE, True, 0))
        div.string = line
        title.append(div)
    root.append(title)

    body = _new_tag(soup, "div")
    body["class"] = ["minutes-body"]
    for i, line in enumerate(doc.body_lines):
        body.append(_render_body_line(soup, line, i, geometry, doc.video_url))
    root.append(body)

    if doc.has_signature:
        root.append(_render_signature(soup, doc, geometry))

    logger.debug(f"Rendered screen preview with {len(doc.body_lines)} body lines")
    return soup


def render_html(doc: SegmentedDocument, geometry: Optional[PageGeometry] = None) -> str:
    return str(render_screen(doc, geometry))


def iter_screen_roles(tree) -> list[tuple[Role, bool, int]]:
    """(role, bold, indent) for every title and body element, in document order."""
    return [
        (Role(el["data-role"]), el["data-bold"] == "true", int(el["data-indent"]))
        for el in tree.find_all(attrs={"data-role": True})
    ]
