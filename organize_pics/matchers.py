"""Recognized media file naming conventions.

Each convention is a MatcherDefinition: a set of regular expressions that
recognize a file name, plus a function that reads the capture date back out
of a recognized name. The registry (MATCHERS) is ordered and the first
definition that recognizes a name decides its folder.

Supported names:
    IMG_YYYYMMDD_*.jpg, VID_YYYYMMDD_*.mp4, PXL_YYYYMMDD_*.{jpg,mp4}
    C360_YYYY-MM-DD-hh-mm-ss-mmm.jpg
    YYYYMMDD_*.{jpg,mp4}
    Screenshot_YYYYMMDD_*.jpg
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

from organize_pics.errors import NotRecognizedError


class MediaDate(NamedTuple):
    """Capture date as zero padded strings."""

    year: str
    month: str
    day: str

    @property
    def folder_name(self) -> str:
        return f"{self.year}-{self.month}-{self.day}"


@dataclass(frozen=True)
class MatcherDefinition:
    """A file naming convention and how to read its date."""

    name: str
    description: str
    patterns: tuple[re.Pattern[str], ...]
    extract_date: Callable[[str], MediaDate]

    def matches(self, filename: str) -> bool:
        """Check if any of the recognition patterns matches the file name."""
        return any(pattern.search(filename) for pattern in self.patterns)

    def folder_name(self, filename: str) -> str:
        """Return the YYYY-MM-DD folder for a file name.

        Only meaningful when matches(filename) is true; on other names the
        result is unspecified.
        """
        return self.extract_date(filename).folder_name


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    # ASCII keeps \d to 0-9
    return tuple(re.compile(p, re.ASCII) for p in patterns)


def _date_from(patterns: tuple[re.Pattern[str], ...]) -> Callable[[str], MediaDate]:
    """Build an extractor reading the year/month/day groups of the first matching pattern."""

    def extract(filename: str) -> MediaDate:
        for pattern in patterns:
            match = pattern.search(filename)
            if match:
                return MediaDate(match["year"], match["month"], match["day"])
        raise ValueError(f"no date in {filename!r}")

    return extract


# YYYYMMDD
_COMPACT = r"(?P<year>\d{4})(?P<month>\d\d)(?P<day>\d\d)"

_CAMERA = _compile(
    r"IMG_" + _COMPACT + r"_.+jpg\Z",
    r"VID_" + _COMPACT + r"_.+mp4\Z",
    r"PXL_" + _COMPACT + r"_.+jpg\Z",
    r"PXL_" + _COMPACT + r"_.+mp4\Z",
)
_C360 = _compile(
    r"^C360_(?P<year>\d{4})-(?P<month>\d\d)-(?P<day>\d\d)-\d\d-\d\d-\d\d-\d{3}\.jpg",
)
_DATE_PREFIXED = _compile(
    r"^" + _COMPACT + r"_.+jpg\Z",
    r"^" + _COMPACT + r"_.+mp4\Z",
)
_SCREENSHOT = _compile(r"^Screenshot_" + _COMPACT + r"_.+jpg\Z")

MATCHERS: tuple[MatcherDefinition, ...] = (
    MatcherDefinition(
        name="camera",
        description="IMG_YYYYMMDD_*.jpg, VID_YYYYMMDD_*.mp4, PXL_YYYYMMDD_*.{jpg,mp4}",
        patterns=_CAMERA,
        extract_date=_date_from(_CAMERA),
    ),
    MatcherDefinition(
        name="c360",
        description="C360_YYYY-MM-DD-hh-mm-ss-mmm.jpg",
        patterns=_C360,
        extract_date=_date_from(_C360),
    ),
    MatcherDefinition(
        name="date-prefixed",
        description="YYYYMMDD_*.jpg, YYYYMMDD_*.mp4",
        patterns=_DATE_PREFIXED,
        extract_date=_date_from(_DATE_PREFIXED),
    ),
    MatcherDefinition(
        name="screenshot",
        description="Screenshot_YYYYMMDD_*.jpg",
        patterns=_SCREENSHOT,
        extract_date=_date_from(_SCREENSHOT),
    ),
)


def find_matcher(
    filename: str, matchers: tuple[MatcherDefinition, ...] = MATCHERS
) -> MatcherDefinition | None:
    """Return the first matcher recognizing filename (first match wins)."""
    for matcher in matchers:
        if matcher.matches(filename):
            return matcher
    return None


def classify(filename: str, matchers: tuple[MatcherDefinition, ...] = MATCHERS) -> str:
    """Return the YYYY-MM-DD folder name a file belongs in.

    Raises:
        NotRecognizedError: No matcher recognizes the file name.
    """
    matcher = find_matcher(filename, matchers)
    if matcher is None:
        raise NotRecognizedError(filename)
    return matcher.folder_name(filename)
