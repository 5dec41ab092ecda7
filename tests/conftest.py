"""Shared fixtures: a fake extractor standing in for yt-dlp, plus app clients."""

import asyncio
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app import create_app
from ytinfo.config import Settings
from ytinfo.extractor import choose_format
from ytinfo.logging import setup_logging

VIDEO_URL = "https://www.youtube.com/watch?v=abc123"


def pytest_configure(config: pytest.Config) -> None:
    setup_logging("DEBUG", json_logs=False)


class FakeExtractor:
    """Implements the extractor interface without touching the network."""

    def __init__(
        self,
        info: Optional[Dict[str, Any]] = None,
        error: Optional[BaseException] = None,
        valid: bool = True,
        delay: float = 0,
    ):
        self.info = info
        self.error = error
        self.valid = valid
        self.delay = delay
        self.calls: List[str] = []
        self.completed = False

    def validate_url(self, url: str) -> bool:
        return self.valid

    async def get_info(self, url: str) -> Dict[str, Any]:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.completed = True
        return self.info

    def choose_format(self, formats, quality="highest", filter_=None):
        return choose_format(formats, quality=quality, filter_=filter_)


def make_format(**overrides: Any) -> Dict[str, Any]:
    fmt = {
        "format_id": "22",
        "url": "https://rr1.googlevideo.com/videoplayback?itag=22",
        "ext": "mp4",
        "format_note": "720p",
        "height": 720,
        "vcodec": "avc1.64001F",
        "acodec": "mp4a.40.2",
        "tbr": 1200.0,
        "abr": 128.0,
    }
    fmt.update(overrides)
    return fmt


def make_info(**overrides: Any) -> Dict[str, Any]:
    info = {
        "id": "abc123",
        "title": "Test",
        "duration": "125",
        "thumbnails": [],
        "formats": [make_format()],
        "uploader": "Test Channel",
        "view_count": 4200,
        "upload_date": "20240131",
    }
    info.update(overrides)
    return info


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="production", request_timeout_ms=25000)


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(environment="development", request_timeout_ms=25000)


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor(info=make_info())


@pytest.fixture
def client(settings: Settings, fake_extractor: FakeExtractor) -> TestClient:
    return TestClient(create_app(settings=settings, extractor=fake_extractor))
