import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import yt_dlp
from yt_dlp.extractor import get_info_extractor

from .errors import ExtractionError

HIGHEST = "highest"
HIGHEST_AUDIO = "highestaudio"

AUDIO_AND_VIDEO = "audioandvideo"

# yt-dlp's YouTube matcher rejects any url carrying these
PLAYLIST_PARAMS = ("list", "index")


def has_video(fmt: Dict[str, Any]) -> bool:
    return fmt.get("vcodec") not in (None, "none")


def has_audio(fmt: Dict[str, Any]) -> bool:
    return fmt.get("acodec") not in (None, "none")


def format_quality(fmt: Dict[str, Any]) -> Optional[str]:
    if fmt.get("format_note"):
        return fmt["format_note"]
    if fmt.get("height"):
        return f"{fmt['height']}p"
    return fmt.get("format_id")


def _matches(fmt: Dict[str, Any], filter_: Optional[str]) -> bool:
    if filter_ is None:
        return True
    if filter_ == AUDIO_AND_VIDEO:
        return has_video(fmt) and has_audio(fmt)
    raise ValueError(f"Unknown format filter: {filter_}")


def strip_playlist_params(url: str) -> str:
    parsed = urlparse(url)
    query = [
        (k, v)
        for k, v in parse_qsl(parsed.query, keep_blank_values=True)
        if k not in PLAYLIST_PARAMS
    ]
    return urlunparse(parsed._replace(query=urlencode(query)))


def _video_rank(fmt: Dict[str, Any]):
    return (fmt.get("height") or 0, fmt.get("tbr") or 0)


def _audio_rank(fmt: Dict[str, Any]):
    # audio-only beats a muxed stream of the same bitrate
    return (fmt.get("abr") or 0, not has_video(fmt), fmt.get("tbr") or 0)


def choose_format(
    formats: Optional[List[Dict[str, Any]]],
    quality: str = HIGHEST,
    filter_: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Pick the best yt-dlp format dict for ``quality``, or None.

    Formats without a direct ``url`` are never chosen.
    """
    candidates = [f for f in formats or [] if f.get("url") and _matches(f, filter_)]

    if quality == HIGHEST:
        candidates = [f for f in candidates if has_video(f) or has_audio(f)]
        rank = _video_rank
    elif quality == HIGHEST_AUDIO:
        candidates = [f for f in candidates if has_audio(f)]
        rank = _audio_rank
    else:
        raise ValueError(f"Unknown quality: {quality}")

    if not candidates:
        return None
    return max(candidates, key=rank)


class YtDlpExtractor:
    """Reads YouTube video metadata through yt-dlp."""

    def __init__(self, socket_timeout: Optional[float] = None):
        self.ydl_opts: Dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
            "skip_download": True,
        }
        if socket_timeout:
            self.ydl_opts["socket_timeout"] = socket_timeout
        self._youtube_ie = get_info_extractor("Youtube")

    def validate_url(self, url: str) -> bool:
        return bool(self._youtube_ie.suitable(strip_playlist_params(url)))

    def extract_info(self, url: str) -> Dict[str, Any]:
        try:
            with yt_dlp.YoutubeDL(self.ydl_opts) as ydl:
                info = ydl.extract_info(url, download=False)
        except Exception as e:
            raise ExtractionError.from_exception(e) from e
        if not info:
            raise ExtractionError("Video unavailable: no info returned")
        return ydl.sanitize_info(info)

    async def get_info(self, url: str) -> Dict[str, Any]:
        # yt-dlp blocks; a caller that stops waiting leaves the thread to finish on its own
        return await asyncio.to_thread(self.extract_info, url)

    def choose_format(
        self,
        formats: Optional[List[Dict[str, Any]]],
        quality: str = HIGHEST,
        filter_: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        return choose_format(formats, quality=quality, filter_=filter_)
