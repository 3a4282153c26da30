"""Inline review-marker extraction.

Minutes drafts carry ``[REVIEW: <note> @M:SS]`` markers where the clerk
must check a passage against the meeting video. This module splits a line
into plain-text and marker segments, parses the optional timestamp, and
resolves the link each marker should open.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

REVIEW_MARKER_RE = re.compile(r"\[REVIEW:[^\]]*\]")
TIMESTAMP_RE = re.compile(r"@(\d{1,2}):(\d{2})(?::(\d{2}))?")
# Timestamp plus surrounding whitespace, replaced by a single space
_TIMESTAMP_STRIP_RE = re.compile(r"\s*@\d{1,2}:\d{2}(?::\d{2})?\s*")
_SPACE_BEFORE_CLOSE_RE = re.compile(r"\s+\]")


@dataclass(frozen=True)
class TextSegment:
    text: str

    @property
    def display_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class ReviewMarker:
    """A single ``[REVIEW: ...]`` marker found in a line."""
    raw_text: str
    display_text: str
    timestamp_seconds: Optional[int] = None
    timestamp_display: Optional[str] = None

    def href(self, video_url: Optional[str]) -> Optional[str]:
        """Link target for this marker, or None when it is inert."""
        if not video_url:
            return None
        if self.timestamp_seconds is None:
            return video_url
        sep = "&" if "?" in video_url else "?"
        return f"{video_url}{sep}seekto={self.timestamp_seconds}"

    def hint(self, video_url: Optional[str]) -> Optional[str]:
        """Hover text shown on linked markers."""
        if not video_url:
            return None
        if self.timestamp_display:
            return f"▶ {self.timestamp_display} — click to jump"
        return "▶ Click to open video"


Segment = Union[TextSegment, ReviewMarker]


def parse_timestamp(marker: str) -> tuple[Optional[int], Optional[str]]:
    """Parse the first ``@H:MM:SS`` or ``@MM:SS`` timestamp in a marker.

    Returns:
        (seconds, display) or (None, None) when no timestamp is present.
    """
    match = TIMESTAMP_RE.search(marker)
    if not match:
        return None, None

    first, second, third = match.groups()
    written = match.group(0)[1:]
    if third is not None:
        return int(first) * 3600 + int(second) * 60 + int(third), written
    return int(first) * 60 + int(second), written


def strip_timestamp(marker: str) -> str:
    """Remove the timestamp from a marker's display text.

    "[REVIEW: check wording @1:23]" → "[REVIEW: check wording]"
    """
    stripped = _TIMESTAMP_STRIP_RE.sub(" ", marker, count=1)
    return _SPACE_BEFORE_CLOSE_RE.sub("]", stripped, count=1)


def parse_marker(raw: str) -> ReviewMarker:
    seconds, display = parse_timestamp(raw)
    return ReviewMarker(
        raw_text=raw,
        display_text=strip_timestamp(raw),
        timestamp_seconds=seconds,
        timestamp_display=display,
    )


def extract_segments(text: str) -> tuple[Segment, ...]:
    """Split a line into ordered plain-text and review-marker segments.

    Empty plain-text runs between adjacent markers are dropped.
    """
    segments: list[Segment] = []
    pos = 0
    for match in REVIEW_MARKER_RE.finditer(text):
        if match.start() > pos:
            segments.append(TextSegment(text[pos:match.start()]))
        segments.append(parse_marker(match.group(0)))
        pos = match.end()
    if pos < len(text):
        segments.append(TextSegment(text[pos:]))
    return tuple(segments)


def display_text(segments) -> str:
    """The text a renderer shows for a sequence of segments."""
    return "".join(seg.display_text for seg in segments)


def count_review_markers(text: str) -> int:
    """Count review markers in a whole minutes text."""
    return len(REVIEW_MARKER_RE.findall(text or ""))
