"""Typesetting engine for council meeting minutes.

One segmentation pass (segmenter.render_minutes) feeds two renderers: the
scrollable HTML preview (screen) and the fixed-page layout (pagination,
drawn to PDF by pdf_export).
"""

from minutes_typesetter.pagination import paginate
from minutes_typesetter.pdf_export import export_minutes_pdf
from minutes_typesetter.screen import render_html, render_screen
from minutes_typesetter.segmenter import Role, SegmentedDocument, render_minutes

__all__ = [
    "Role",
    "SegmentedDocument",
    "export_minutes_pdf",
    "paginate",
    "render_html",
    "render_minutes",
    "render_screen",
]
