"""Shared fixtures for the minutes typesetter tests."""

from pathlib import Path

import pytest

SAMPLE_PATH = Path(__file__).resolve().parent.parent / "data" / "samples" / "regular_meeting.txt"

SCENARIO_TEXT = """TOWNSHIP OF EDISON
MINUTES
A Regular Meeting of the Council was held...
1. CALL TO ORDER
The meeting was called to order at 7:00 PM.
4. DISCUSSION ITEMS
Councilmember Smith raised [REVIEW: budget concern @12:05]
On a motion, the meeting was adjourned.
_________________        _________________
Jane Doe                 John Roe
Council President         Township Clerk"""


def build_long_minutes(sections: int = 40) -> str:
    """Minutes long enough to run over several pages."""
    lines = ["TOWNSHIP OF EDISON", "MINUTES", "",
             "A Regular Meeting of the Municipal Council was held in the Council Chambers."]
    for n in range(1, sections + 1):
        lines.append(f"{n}. AGENDA ITEM NUMBER {n}")
        lines.append(f"Staff presented item {n} and answered questions from the Council "
                     f"regarding the schedule, the cost estimate and the funding source.")
        lines.append("ORDINANCE O.2150-2025 AMENDING CHAPTER 7 OF THE TOWNSHIP CODE")
        lines.append("")
    lines.append("Hearing no further business, the meeting was adjourned.")
    lines.append("")
    lines.append("_______________        _______________")
    lines.append("Sam Joshi              Patricia Benedetto, RMC")
    lines.append("Council President      Municipal Clerk")
    return "\n".join(lines)


@pytest.fixture
def scenario_text():
    return SCENARIO_TEXT


@pytest.fixture
def sample_text():
    return SAMPLE_PATH.read_text(encoding="utf-8")


@pytest.fixture
def long_text():
    return build_long_minutes()
