"""Tests for line classification and document segmentation."""

import pytest

from minutes_typesetter.annotations import ReviewMarker, TextSegment
from minutes_typesetter.segmenter import (
    Role,
    SegmentState,
    classify_line,
    find_signature_start,
    find_title_end,
    is_all_caps,
    render_minutes,
    split_lines,
)


class TestScenario:
    """The reference Edison minutes excerpt."""

    @pytest.fixture
    def doc(self, scenario_text):
        return render_minutes(scenario_text)

    def test_title_lines(self, doc):
        assert doc.title_lines == ("TOWNSHIP OF EDISON", "MINUTES")

    def test_body_roles(self, doc):
        roles = [line.role for line in doc.body_lines]
        assert roles == [
            Role.FULL_WIDTH,
            Role.SECTION_HEADER,
            Role.SECTION_BODY,
            Role.SECTION_HEADER,
            Role.SECTION_BODY,
            Role.FULL_WIDTH,
        ]

    def test_preamble_is_full_width_and_plain(self, doc):
        preamble = doc.body_lines[0]
        assert preamble.text.startswith("A Regular Meeting")
        assert preamble.bold is False
        assert preamble.indent_level == 0

    def test_call_to_order_section(self, doc):
        header, body = doc.body_lines[1], doc.body_lines[2]
        assert header.section_number == "1."
        assert header.header_text == "CALL TO ORDER"
        assert header.bold is True
        assert header.indent_level == 0
        assert body.indent_level == 1
        assert body.bold is False

    def test_discussion_section_body_is_bold(self, doc):
        header, body = doc.body_lines[3], doc.body_lines[4]
        assert header.section_number == "4."
        assert body.bold is True
        assert body.indent_level == 1

    def test_discussion_line_marker(self, doc):
        markers = [s for s in doc.body_lines[4].segments if isinstance(s, ReviewMarker)]
        assert len(markers) == 1
        assert markers[0].timestamp_seconds == 725
        assert markers[0].display_text == "[REVIEW: budget concern]"

    def test_motion_line_full_width(self, doc):
        motion = doc.body_lines[5]
        assert motion.role == Role.FULL_WIDTH
        assert motion.indent_level == 0

    def test_signature(self, doc):
        assert doc.has_signature
        assert doc.signature.names == ("Jane Doe", "John Roe")
        assert doc.signature.titles == ("Council President", "Township Clerk")

    def test_idempotent(self, scenario_text):
        assert render_minutes(scenario_text) == render_minutes(scenario_text)


class TestClassifyLine:

    def test_blank(self):
        line = classify_line("   ", SegmentState())
        assert line.role == Role.BLANK
        assert line.bold is False

    def test_section_header_sets_state(self):
        state = SegmentState()
        line = classify_line("7. RESOLUTIONS", state)
        assert line.role == Role.SECTION_HEADER
        assert state.inside_section is True
        assert state.in_discussion_section is False

    def test_discussion_header_case_insensitive(self):
        state = SegmentState()
        classify_line("5. Discussion of the capital budget", state)
        assert state.in_discussion_section is True

    def test_other_header_clears_discussion(self):
        state = SegmentState(inside_section=True, in_discussion_section=True)
        classify_line("6. PUBLIC COMMENT", state)
        assert state.in_discussion_section is False
        assert state.inside_section is True

    def test_motion_clears_section(self):
        state = SegmentState(inside_section=True)
        line = classify_line("On a motion by Councilmember Coyle, the minutes were approved.", state)
        assert line.role == Role.FULL_WIDTH
        assert state.inside_section is False

    def test_hearing_no_further_clears_section(self):
        state = SegmentState(inside_section=True)
        classify_line("Hearing no further business, the meeting was adjourned.", state)
        assert state.inside_section is False

    def test_other_exceptions_keep_section_open(self):
        state = SegmentState(inside_section=True)
        line = classify_line("Present were Councilmembers Coyle and Shah.", state)
        assert line.role == Role.FULL_WIDTH
        assert line.indent_level == 0
        assert state.inside_section is True
        assert classify_line("Next item text", state).role == Role.SECTION_BODY

    def test_exception_lines_never_bold(self):
        line = classify_line("Also present: ALL DEPARTMENT HEADS AND STAFF", SegmentState())
        assert is_all_caps(line.text)
        assert line.role == Role.FULL_WIDTH
        assert line.bold is False

    def test_all_caps_full_width_is_bold(self):
        line = classify_line("EXECUTIVE SESSION", SegmentState())
        assert line.role == Role.FULL_WIDTH
        assert line.bold is True

    def test_all_caps_rule_in_section(self):
        state = SegmentState(inside_section=True)
        assert classify_line("RESOLUTIONS", state).bold is True
        assert classify_line("Resolutions and other business", state).bold is False

    def test_speaker_bold_only_in_discussion(self):
        plain = SegmentState(inside_section=True)
        discussion = SegmentState(inside_section=True, in_discussion_section=True)
        for text in ("Councilmember Patil", "Council President Joshi",
                     "Council Vice President Brescher", "a. Sidewalk repairs"):
            assert classify_line(text, discussion).bold is True, text
            assert classify_line(text, plain).bold is False, text

    def test_url_line_links(self):
        line = classify_line("https://www.edisonnj.org/council", SegmentState(inside_section=True))
        assert line.role == Role.FULL_WIDTH
        assert line.link == "https://www.edisonnj.org/council"

    def test_http_prefix_without_url_has_no_link(self):
        line = classify_line("httpd logs were reviewed", SegmentState())
        assert line.role == Role.FULL_WIDTH
        assert line.link is None

    def test_header_segments_cover_title_only(self):
        line = classify_line("3. PUBLIC HEARING [REVIEW: title @0:30]", SegmentState())
        assert isinstance(line.segments[0], TextSegment)
        assert line.display_text == "PUBLIC HEARING [REVIEW: title]"


class TestIsAllCaps:

    def test_threshold(self):
        assert is_all_caps("ORDINANCE O.2150-2025")
        assert not is_all_caps("Ordinance O.2150-2025")

    def test_no_letters(self):
        assert not is_all_caps("12345 --- 678")

    def test_exactly_seventy_percent_is_not_bold(self):
        # 7 upper of 10 letters
        assert not is_all_caps("ABCDEFGhij")
        assert is_all_caps("ABCDEFGHij")


class TestBoundaries:

    def test_tabs_expanded(self):
        assert split_lines("1.\tCALL") == ["1.    CALL"]

    def test_tab_header_parses(self):
        doc = render_minutes("A Regular Meeting\n1.\tCALL TO ORDER")
        header = doc.body_lines[1]
        assert header.section_number == "1."
        assert header.header_text == "CALL TO ORDER"

    def test_no_title_boundary(self):
        doc = render_minutes("TOWNSHIP OF EDISON\nSome text here")
        assert doc.title_lines == ()
        assert [l.text for l in doc.body_lines] == ["TOWNSHIP OF EDISON", "Some text here"]

    def test_title_skips_blank_lines(self):
        doc = render_minutes("TOWNSHIP\n\n  MINUTES  \nA Combined Meeting was held")
        assert doc.title_lines == ("TOWNSHIP", "MINUTES")
        assert doc.body_lines[0].text == "A Combined Meeting was held"

    def test_worksession_boundary(self):
        assert find_title_end(["X", "  A Worksession Meeting", "Y"]) == 1

    def test_no_signature(self):
        doc = render_minutes("A Regular Meeting\n1. CALL TO ORDER\nText")
        assert not doc.has_signature
        assert doc.signature.is_empty
        assert len(doc.body_lines) == 3

    def test_last_rule_wins(self):
        lines = ["A", "____", "B", "____   ____", "Name"]
        assert find_signature_start(lines) == 3

    def test_rule_in_title_does_not_swallow_body(self):
        doc = render_minutes("____\nA Regular Meeting\nBody text")
        assert [l.text for l in doc.body_lines] == ["A Regular Meeting", "Body text"]
        assert not doc.has_signature

    def test_no_sections_all_full_width(self):
        doc = render_minutes("Plain minutes\nwith no numbered sections")
        assert all(l.role == Role.FULL_WIDTH for l in doc.body_lines)
        assert all(l.indent_level == 0 for l in doc.body_lines)

    def test_blank_lines_preserved(self):
        doc = render_minutes("A Regular Meeting\n\n\n1. CALL TO ORDER")
        assert [l.role for l in doc.body_lines] == [
            Role.FULL_WIDTH, Role.BLANK, Role.BLANK, Role.SECTION_HEADER,
        ]

    def test_empty_text(self):
        doc = render_minutes("")
        assert doc.title_lines == ()
        assert doc.body_lines == ()
        assert not doc.has_signature

    def test_crlf_line_endings(self):
        doc = render_minutes("TITLE\r\nA Regular Meeting\r\n1. CALL TO ORDER")
        assert doc.title_lines == ("TITLE",)
        assert doc.body_lines[1].header_text == "CALL TO ORDER"

    def test_video_url_recorded(self, scenario_text):
        assert render_minutes(scenario_text, video_url="https://v.example/1").video_url == \
            "https://v.example/1"
        assert render_minutes(scenario_text, video_url="").video_url is None


class TestSampleMinutes:

    def test_sample_structure(self, sample_text):
        doc = render_minutes(sample_text)
        assert doc.title_lines[0] == "TOWNSHIP OF EDISON"
        headers = [l.section_number for l in doc.body_lines if l.role == Role.SECTION_HEADER]
        assert headers == ["1.", "2.", "3.", "4.", "5."]
        links = [l.link for l in doc.body_lines if l.link]
        assert links == ["https://www.edisonnj.org/council/meetings"]
        assert doc.signature.names == ("Sam Joshi", "Patricia Benedetto, RMC")
        assert doc.signature.titles == ("Council President", "Municipal Clerk")

    def test_sample_resolution_title_bold(self, sample_text):
        doc = render_minutes(sample_text)
        resolution = next(l for l in doc.body_lines if l.text.startswith("R.401"))
        assert resolution.role == Role.SECTION_BODY
        assert resolution.bold is True
