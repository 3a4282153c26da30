"""Signature block parsing for the attestation lines closing the minutes."""

import re
from dataclasses import dataclass

SIGNATURE_RULE = "___"
COLUMN_SPLIT_RE = re.compile(r"\s{4,}")


@dataclass(frozen=True)
class SignatureBlock:
    left_name: str = ""
    right_name: str = ""
    left_title: str = ""
    right_title: str = ""

    @property
    def names(self) -> tuple[str, str]:
        return self.left_name, self.right_name

    @property
    def titles(self) -> tuple[str, str]:
        return self.left_title, self.right_title

    @property
    def is_empty(self) -> bool:
        return not any(self.names + self.titles)


def _split_columns(line: str) -> list[str]:
    parts = COLUMN_SPLIT_RE.split(line)
    if len(parts) >= 2:
        return [parts[0].strip(), parts[1].strip()]
    return [line]


def parse_signature_block(lines) -> SignatureBlock:
    """Parse the candidate signature lines into name and title columns.

    Blank lines and the underscore rules are skipped. Surviving lines fill
    the name row until it has two entries, then the title row. A line with
    two columns separated by four or more spaces fills both slots of a row
    at once; anything else fills one slot.
    """
    names: list[str] = []
    titles: list[str] = []
    for line in lines:
        t = line.strip()
        if not t or SIGNATURE_RULE in t:
            continue
        if len(titles) >= 2:
            break
        row = names if len(names) < 2 else titles
        row.extend(_split_columns(t))

    names = (names + ["", ""])[:2]
    titles = (titles + ["", ""])[:2]
    return SignatureBlock(
        left_name=names[0],
        right_name=names[1],
        left_title=titles[0],
        right_title=titles[1],
    )
