"""PDF reading utilities for checking typeset minutes.

Uses pdfplumber to read generated documents back as text, so the page
layout can be verified after export.
"""

import io
import logging
from pathlib import Path

import pdfplumber

logger = logging.getLogger(__name__)


def _open(source):
    if isinstance(source, (bytes, bytearray)):
        return pdfplumber.open(io.BytesIO(source))
    return pdfplumber.open(str(source))


def extract_text_by_page(source: str | Path | bytes) -> list[str]:
    """Extract text from each page of a PDF.

    Args:
        source: Path to the PDF file, or the PDF bytes.

    Returns:
        List of strings, one per page.
    """
    pages = []
    with _open(source) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            pages.append(text or "")
    return pages


def extract_links(source: str | Path | bytes) -> list[list[str]]:
    """URI link targets on each page of a PDF."""
    links = []
    with _open(source) as pdf:
        for page in pdf.pages:
            links.append([h.get("uri") for h in page.hyperlinks if h.get("uri")])
    return links
