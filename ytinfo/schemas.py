from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoFormat(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quality: Optional[str] = None
    container: Optional[str] = None
    has_video: bool = Field(False, alias="hasVideo")
    has_audio: bool = Field(False, alias="hasAudio")


class VideoInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    title: Optional[str] = None
    duration: int = 0
    thumbnail: Optional[str] = None
    video_url: Optional[str] = Field(None, alias="videoUrl")
    format: VideoFormat
    author: str = "Unknown"
    view_count: int = Field(0, alias="viewCount")
    upload_date: Optional[str] = Field(None, alias="uploadDate")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: Optional[str] = None
    details: Optional[str] = None
    timestamp: Optional[str] = None

    def body(self) -> dict:
        # Unset fields are left out of the JSON entirely
        return self.model_dump(exclude_none=True)
