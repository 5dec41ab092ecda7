"""Tests for error classification."""

import pytest

from ytinfo.errors import ERROR_RESPONSES, ErrorKind, ExtractionError, classify_error


@pytest.mark.parametrize(
    "text, kind",
    [
        ("ERROR: [youtube] abc: Video unavailable", ErrorKind.UNAVAILABLE),
        ("Request timeout", ErrorKind.TIMEOUT),
        ("<urlopen error The read operation timed out>", ErrorKind.TIMEOUT),
        ("This video is age-restricted", ErrorKind.AGE_RESTRICTED),
        ("Sign in to confirm your age", ErrorKind.AGE_RESTRICTED),
        ("This video is private", ErrorKind.PRIVATE),
        ("ERROR: [youtube] abc: Private video. Sign in", ErrorKind.PRIVATE),
        ("HTTP Error 500", ErrorKind.UNKNOWN),
        ("", ErrorKind.UNKNOWN),
        (None, ErrorKind.UNKNOWN),
    ],
)
def test_classify_error(text, kind):
    assert classify_error(text) == kind


def test_priority_order():
    # earlier kinds win when several phrases appear
    assert classify_error("Video unavailable: this video is private") == ErrorKind.UNAVAILABLE
    assert classify_error("timeout while loading private video") == ErrorKind.TIMEOUT
    assert classify_error("age-restricted private upload") == ErrorKind.AGE_RESTRICTED


def test_every_kind_has_a_response():
    assert set(ERROR_RESPONSES) == set(ErrorKind)


def test_extraction_error_from_exception():
    err = ExtractionError.from_exception(ValueError("This video is private"))

    assert err.raw == "This video is private"
    assert err.kind == ErrorKind.PRIVATE
    assert err.status_code == 403
    assert err.public_message == "Video is private and cannot be accessed"


def test_extraction_error_passthrough():
    original = ExtractionError("boom", ErrorKind.TIMEOUT)

    assert ExtractionError.from_exception(original) is original
    assert original.status_code == 408
