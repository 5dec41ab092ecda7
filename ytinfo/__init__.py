"""YouTube video info API backed by yt-dlp."""

__version__ = "0.1.0"
