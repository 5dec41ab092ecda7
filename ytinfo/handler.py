"""The /api/ytdlp request pipeline.

``VideoInfoHandler.handle`` validates the url, fetches the info through the
extractor under a timeout, picks a format and shapes the JSON envelope. Every
exit path returns a ``HandlerResponse``; nothing is raised to the caller.
"""

import asyncio
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import Settings
from .cors import get_cors_headers
from .errors import ErrorKind, ExtractionError
from .extractor import (
    AUDIO_AND_VIDEO,
    HIGHEST,
    HIGHEST_AUDIO,
    format_quality,
    has_audio,
    has_video,
)
from .logging import get_logger
from .schemas import ErrorResponse, VideoFormat, VideoInfo

logger = get_logger(__name__)

YOUTUBE_URL_RE = re.compile(
    r"^(https?://)?(www\.)?(youtube\.com/(watch\?v=|embed/|v/)|youtu\.be/)[\w-]+"
)

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

TIMEOUT_MESSAGE = "Request timeout"


@dataclass
class HandlerResponse:
    status_code: int
    body: Optional[Dict[str, Any]]
    headers: Dict[str, str] = field(default_factory=get_cors_headers)


def _to_int(value: Any) -> int:
    # strings parse their leading integer: "12abc" -> 12, "125.7" -> 125
    if isinstance(value, str):
        m = LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _upload_date(value: Optional[str]) -> Optional[str]:
    # yt-dlp gives YYYYMMDD
    if not value:
        return None
    if len(value) == 8 and value.isdigit():
        return f"{value[:4]}-{value[4:6]}-{value[6:]}"
    return value


def build_video_info(info: Dict[str, Any], fmt: Dict[str, Any]) -> VideoInfo:
    thumbnails = info.get("thumbnails") or []
    # yt-dlp orders thumbnails worst to best
    thumbnail = thumbnails[-1].get("url") if thumbnails else None

    return VideoInfo(
        title=info.get("title"),
        duration=_to_int(info.get("duration")),
        thumbnail=thumbnail,
        video_url=fmt.get("url"),
        format=VideoFormat(
            quality=format_quality(fmt),
            container=fmt.get("ext"),
            has_video=has_video(fmt),
            has_audio=has_audio(fmt),
        ),
        author=info.get("uploader") or info.get("channel") or "Unknown",
        view_count=_to_int(info.get("view_count")),
        upload_date=_upload_date(info.get("upload_date")),
    )


class VideoInfoHandler:
    def __init__(self, extractor, settings: Settings):
        self.extractor = extractor
        self.settings = settings

    def _reject(self, status_code: int, error: str, message: str) -> HandlerResponse:
        logger.info("request_rejected", status_code=status_code, error=error)
        return HandlerResponse(
            status_code, ErrorResponse(error=error, message=message).body()
        )

    def _failure(self, exc: ExtractionError) -> HandlerResponse:
        logger.error("video_info_failed", kind=exc.kind.value, error=exc.raw)
        resp = ErrorResponse(
            error=exc.public_message,
            details=exc.raw if self.settings.is_development else None,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        return HandlerResponse(exc.status_code, resp.body())

    async def _fetch_info(self, url: str) -> Dict[str, Any]:
        try:
            return await asyncio.wait_for(
                self.extractor.get_info(url), timeout=self.settings.request_timeout
            )
        except asyncio.TimeoutError as e:
            raise ExtractionError(TIMEOUT_MESSAGE, ErrorKind.TIMEOUT) from e

    async def handle(self, method: str, url: Optional[str]) -> HandlerResponse:
        if method.upper() == "OPTIONS":
            return HandlerResponse(200, None)

        logger.debug("request_received", method=method, url=url)

        if not url:
            return self._reject(
                400,
                "Missing 'url' parameter",
                "Please provide a YouTube URL in the 'url' query parameter",
            )

        try:
            if not YOUTUBE_URL_RE.match(url):
                return self._reject(
                    400, "Invalid YouTube URL", "Please provide a valid YouTube URL"
                )

            if not self.extractor.validate_url(url):
                return self._reject(
                    400,
                    "Invalid YouTube video URL",
                    "The provided URL is not a valid YouTube video",
                )

            info = await self._fetch_info(url)
            formats = info.get("formats") or []

            fmt = self.extractor.choose_format(
                formats, quality=HIGHEST, filter_=AUDIO_AND_VIDEO
            ) or self.extractor.choose_format(formats, quality=HIGHEST_AUDIO)
            if not fmt:
                return self._reject(
                    404,
                    "No suitable format found",
                    "Could not find a downloadable format for this video",
                )

            video = build_video_info(info, fmt)
        except Exception as e:
            return self._failure(ExtractionError.from_exception(e))

        return HandlerResponse(200, video.model_dump(by_alias=True))
