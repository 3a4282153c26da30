"""Tests for review-marker extraction."""

from minutes_typesetter.annotations import (
    ReviewMarker,
    TextSegment,
    count_review_markers,
    display_text,
    extract_segments,
    parse_marker,
    parse_timestamp,
    strip_timestamp,
)


class TestTimestamps:

    def test_minutes_seconds(self):
        assert parse_timestamp("[REVIEW: check wording @1:23]") == (83, "1:23")

    def test_hours_minutes_seconds(self):
        assert parse_timestamp("[REVIEW: vote count @1:02:03]") == (3723, "1:02:03")

    def test_two_digit_minutes(self):
        assert parse_timestamp("[REVIEW: budget concern @12:05]") == (725, "12:05")

    def test_absent(self):
        assert parse_timestamp("[REVIEW: speaker name unclear]") == (None, None)

    def test_malformed(self):
        assert parse_timestamp("[REVIEW: check @1:2]") == (None, None)
        assert parse_timestamp("[REVIEW: check 1:23]") == (None, None)


class TestStripTimestamp:

    def test_round_trip_display(self):
        assert strip_timestamp("[REVIEW: check wording @1:23]") == "[REVIEW: check wording]"

    def test_timestamp_mid_text(self):
        assert strip_timestamp("[REVIEW: @0:45 check vote]") == "[REVIEW: check vote]"

    def test_without_timestamp_unchanged(self):
        assert strip_timestamp("[REVIEW: speaker unclear]") == "[REVIEW: speaker unclear]"

    def test_malformed_timestamp_kept(self):
        assert strip_timestamp("[REVIEW: check @1:2]") == "[REVIEW: check @1:2]"


class TestExtractSegments:

    def test_plain_line(self):
        assert extract_segments("No markers here.") == (TextSegment("No markers here."),)

    def test_empty_line(self):
        assert extract_segments("") == ()

    def test_marker_order(self):
        segments = extract_segments("a [REVIEW: x @1:23] b [REVIEW: y]")
        assert [type(s) for s in segments] == [TextSegment, ReviewMarker, TextSegment, ReviewMarker]
        assert segments[1].timestamp_seconds == 83
        assert segments[3].timestamp_seconds is None
        assert segments[3].display_text == "[REVIEW: y]"

    def test_adjacent_markers(self):
        segments = extract_segments("[REVIEW: a][REVIEW: b]")
        assert len(segments) == 2
        assert all(isinstance(s, ReviewMarker) for s in segments)

    def test_display_text_strips_timestamps(self):
        segments = extract_segments("Smith raised [REVIEW: budget concern @12:05] today")
        assert display_text(segments) == "Smith raised [REVIEW: budget concern] today"

    def test_unclosed_marker_is_text(self):
        segments = extract_segments("[REVIEW: never closed")
        assert segments == (TextSegment("[REVIEW: never closed"),)


class TestMarkerLinks:
    VIDEO = "https://video.example/meetings/1008"

    def test_timestamped_marker_seeks(self):
        marker = parse_marker("[REVIEW: budget concern @12:05]")
        assert marker.href(self.VIDEO) == f"{self.VIDEO}?seekto=725"
        assert marker.hint(self.VIDEO) == "▶ 12:05 — click to jump"

    def test_existing_query_string(self):
        marker = parse_marker("[REVIEW: x @0:10]")
        assert marker.href("https://youtube.com/watch?v=abc") == \
            "https://youtube.com/watch?v=abc&seekto=10"

    def test_untimed_marker_opens_video(self):
        marker = parse_marker("[REVIEW: speaker unclear]")
        assert marker.href(self.VIDEO) == self.VIDEO
        assert marker.hint(self.VIDEO) == "▶ Click to open video"

    def test_no_video_is_inert(self):
        marker = parse_marker("[REVIEW: budget concern @12:05]")
        assert marker.href(None) is None
        assert marker.hint(None) is None


class TestCountReviewMarkers:

    def test_count(self, sample_text):
        assert count_review_markers(sample_text) == 3

    def test_none(self):
        assert count_review_markers("") == 0
        assert count_review_markers(None) == 0
