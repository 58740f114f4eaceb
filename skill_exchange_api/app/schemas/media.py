"""
Pydantic models for uploaded media files.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

FileType = Literal["image", "video", "audio", "document"]
ProcessingStatus = Literal["pending", "processing", "completed", "failed"]


class MediaFileRead(BaseModel):
    id: str
    user_id: str
    filename: str
    original_name: str
    mime_type: str
    file_size: int
    file_type: FileType
    s3_key: str
    s3_bucket: str
    cdn_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    processed_url: Optional[str] = None
    related_type: Optional[str] = None
    related_id: Optional[str] = None
    is_public: bool = False
    processing_status: ProcessingStatus
    virus_scan_result: Optional[str] = None
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class MediaUrlRead(BaseModel):
    id: str
    url: str
