"""Failure kinds reported by the extraction layer.

yt-dlp only reports why a video could not be read through the text of its
exceptions, so the text is matched here once and everything downstream works
with an ``ErrorKind``.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class ErrorKind(str, Enum):
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    AGE_RESTRICTED = "age_restricted"
    PRIVATE = "private"
    UNKNOWN = "unknown"


# Checked in order, first hit wins
_PATTERNS: Tuple[Tuple[ErrorKind, Tuple[str, ...]], ...] = (
    (ErrorKind.UNAVAILABLE, ("Video unavailable",)),
    (ErrorKind.TIMEOUT, ("timeout", "timed out")),
    (ErrorKind.AGE_RESTRICTED, ("age-restricted", "confirm your age")),
    (ErrorKind.PRIVATE, ("private", "Private video")),
)

# kind -> (status code, public message)
ERROR_RESPONSES: Dict[ErrorKind, Tuple[int, str]] = {
    ErrorKind.UNAVAILABLE: (404, "Video is unavailable or private"),
    ErrorKind.TIMEOUT: (408, "Request timeout - video may be too long or server is busy"),
    ErrorKind.AGE_RESTRICTED: (403, "Video is age-restricted and cannot be accessed"),
    ErrorKind.PRIVATE: (403, "Video is private and cannot be accessed"),
    ErrorKind.UNKNOWN: (500, "Failed to fetch video info"),
}


def classify_error(text: Optional[str]) -> ErrorKind:
    if not text:
        return ErrorKind.UNKNOWN
    for kind, needles in _PATTERNS:
        if any(n in text for n in needles):
            return kind
    return ErrorKind.UNKNOWN


class ExtractionError(Exception):
    """Raised by the extractor with the raw yt-dlp text and its kind."""

    def __init__(self, raw: str, kind: Optional[ErrorKind] = None):
        super().__init__(raw)
        self.raw = raw
        self.kind = kind if kind is not None else classify_error(raw)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExtractionError":
        if isinstance(exc, cls):
            return exc
        return cls(str(exc))

    @property
    def status_code(self) -> int:
        return ERROR_RESPONSES[self.kind][0]

    @property
    def public_message(self) -> str:
        return ERROR_RESPONSES[self.kind][1]
