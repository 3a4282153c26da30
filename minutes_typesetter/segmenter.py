"""Line classification and document segmentation for council minutes.

Turns a block of plain-text minutes into a SegmentedDocument: the centred
title block, the classified body lines, and the signature block. This is
the only place the house-style layout rules live; the screen and page
renderers consume the result as-is.

House style:
  - Title block: everything above the "A Regular / A Worksession /
    A Combined ..." preamble.
  - Numbered agenda sections ("4. DISCUSSION ITEMS") with their content
    indented under them.
  - Preamble, attendance, motion and adjournment paragraphs at full width.
  - Signature block below the last underscore rule.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from minutes_typesetter.annotations import Segment, display_text, extract_segments
from minutes_typesetter.signature import SIGNATURE_RULE, SignatureBlock, parse_signature_block

logger = logging.getLogger(__name__)


class Role(str, Enum):
    TITLE = "title"
    SECTION_HEADER = "section_header"
    SECTION_BODY = "section_body"
    FULL_WIDTH = "full_width"
    BLANK = "blank"


TITLE_BOUNDARY_PREFIXES = ("A Worksession", "A Regular", "A Combined")

FULL_WIDTH_PREFIXES = TITLE_BOUNDARY_PREFIXES + (
    "Present were",
    "Also present",
    "The Township Clerk advised",
    "This meeting",
    "http",
    "On a motion",
    "Hearing no further",
)

# Motion and adjournment paragraphs close the indented section block
SECTION_CLOSING_PREFIXES = ("On a motion", "Hearing no further")

DISCUSSION_SPEAKER_PREFIXES = ("Councilmember", "Council President", "Council Vice President")

SECTION_NUMBER_RE = re.compile(r"^\d+\.\s+")
DISCUSSION_RE = re.compile(r"\bDISCUSSION\b", re.IGNORECASE)
DISCUSSION_ITEM_RE = re.compile(r"^a\.\s")
URL_RE = re.compile(r"^https?://\S+")

ALL_CAPS_THRESHOLD = 0.7


@dataclass(frozen=True)
class ClassifiedLine:
    """One body line with its computed layout attributes."""
    text: str
    role: Role
    bold: bool = False
    section_number: Optional[str] = None
    header_text: str = ""
    indent_level: int = 0
    link: Optional[str] = None
    segments: tuple[Segment, ...] = ()

    @property
    def display_text(self) -> str:
        """Text a renderer shows: header title for sections, the line otherwise."""
        return display_text(self.segments)


@dataclass
class SegmentState:
    """Fold state carried from line to line while classifying the body."""
    inside_section: bool = False
    in_discussion_section: bool = False


@dataclass(frozen=True)
class SegmentedDocument:
    title_lines: tuple[str, ...] = ()
    body_lines: tuple[ClassifiedLine, ...] = ()
    signature: SignatureBlock = field(default_factory=SignatureBlock)
    signature_lines: tuple[str, ...] = ()
    video_url: Optional[str] = None

    @property
    def has_signature(self) -> bool:
        return bool(self.signature_lines)


# ── Line-level rules ─────────────────────────────────────────────────────

def is_all_caps(text: str) -> bool:
    """True if more than 70% of the line's letters are uppercase."""
    letters = [c for c in text if c.isascii() and c.isalpha()]
    if not letters:
        return False
    upper = sum(1 for c in letters if c.isupper())
    return upper / len(letters) > ALL_CAPS_THRESHOLD


def is_full_width_line(text: str) -> bool:
    return text.startswith(FULL_WIDTH_PREFIXES)


def is_title_boundary(text: str) -> bool:
    return text.startswith(TITLE_BOUNDARY_PREFIXES)


def is_discussion_bold(text: str) -> bool:
    return text.startswith(DISCUSSION_SPEAKER_PREFIXES) or bool(DISCUSSION_ITEM_RE.match(text))


def classify_line(line: str, state: SegmentState) -> ClassifiedLine:
    """Classify one body line, updating ``state`` in place.

    Args:
        line: Raw line (tabs already expanded).
        state: Running section state; mutated by section headers and by
            motion/adjournment lines.

    Returns:
        The line's ClassifiedLine.
    """
    trimmed = line.strip()

    if not trimmed:
        return ClassifiedLine(text="", role=Role.BLANK)

    match = SECTION_NUMBER_RE.match(trimmed)
    if match:
        header_text = trimmed[match.end():]
        state.inside_section = True
        state.in_discussion_section = bool(DISCUSSION_RE.search(header_text))
        return ClassifiedLine(
            text=trimmed,
            role=Role.SECTION_HEADER,
            bold=True,
            section_number=match.group(0).strip(),
            header_text=header_text,
            segments=extract_segments(header_text),
        )

    if is_full_width_line(trimmed):
        if trimmed.startswith(SECTION_CLOSING_PREFIXES):
            state.inside_section = False
        url = URL_RE.match(trimmed)
        return ClassifiedLine(
            text=trimmed,
            role=Role.FULL_WIDTH,
            link=url.group(0) if url else None,
            segments=extract_segments(trimmed),
        )

    if state.inside_section:
        bold = is_all_caps(trimmed) or (
            state.in_discussion_section and is_discussion_bold(trimmed)
        )
        return ClassifiedLine(
            text=trimmed,
            role=Role.SECTION_BODY,
            bold=bold,
            indent_level=1,
            segments=extract_segments(trimmed),
        )

    return ClassifiedLine(
        text=trimmed,
        role=Role.FULL_WIDTH,
        bold=is_all_caps(trimmed),
        segments=extract_segments(trimmed),
    )


# ── Document-level segmentation ──────────────────────────────────────────

def split_lines(text: str) -> list[str]:
    """Split raw minutes into lines, expanding tabs to four spaces."""
    if not text:
        return []
    return text.replace("\t", "    ").replace("\r\n", "\n").replace("\r", "\n").split("\n")


def find_title_end(lines: list[str]) -> int:
    """Index of the line that opens the body, or 0 if there is no title block."""
    for i, line in enumerate(lines):
        if is_title_boundary(line.strip()):
            return i
    return 0


def find_signature_start(lines: list[str], floor: int = 0) -> int:
    """Index of the last underscore rule at or below ``floor``, or len(lines)."""
    for i in range(len(lines) - 1, floor - 1, -1):
        if SIGNATURE_RULE in lines[i]:
            return i
    return len(lines)


def segment_document(text: str, video_url: Optional[str] = None) -> SegmentedDocument:
    """Split raw minutes text into title block, classified body and signature.

    Never raises on content: a missing title boundary, signature rule or
    numbered section simply leaves that part empty.
    """
    lines = split_lines(text)

    title_end = find_title_end(lines)
    sig_start = find_signature_start(lines, floor=title_end)

    title_lines = tuple(line.strip() for line in lines[:title_end] if line.strip())
    signature_lines = tuple(lines[sig_start:])

    state = SegmentState()
    body = tuple(classify_line(line, state) for line in lines[title_end:sig_start])

    doc = SegmentedDocument(
        title_lines=title_lines,
        body_lines=body,
        signature=parse_signature_block(signature_lines),
        signature_lines=signature_lines,
        video_url=video_url or None,
    )
    logger.debug(
        f"Segmented minutes: {len(title_lines)} title lines, {len(body)} body lines, "
        f"{sum(1 for line in body if line.role == Role.SECTION_HEADER)} sections, "
        f"signature={'yes' if doc.has_signature else 'no'}"
    )
    return doc


def render_minutes(text: str, video_url: Optional[str] = None) -> SegmentedDocument:
    """Entry point: segment a meeting's minutes for either renderer."""
    return segment_document(text, video_url=video_url)
