"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration at all (media uploads then point
at a bucket that most likely does not exist, which is fine for local
development).  In a production deployment override these via
environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


DEFAULT_ALLOWED_MIME_TYPES = (
    "image/jpeg,image/png,image/gif,image/webp,"
    "video/mp4,video/webm,video/quicktime,"
    "audio/mpeg,audio/wav,audio/ogg,"
    "application/pdf,text/plain,application/msword,"
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Skill Exchange API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Comma‑separated list of origins allowed to call the API from a
    # browser, e.g. CORS_ORIGINS="http://localhost:5173,https://app.example.com".
    cors_origins: List[str] = field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "")))

    # Object storage for uploaded media.
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    aws_s3_bucket: str = os.getenv("AWS_S3_BUCKET", "skillswap-media")
    aws_access_key_id: str = os.getenv("AWS_ACCESS_KEY_ID", "")
    aws_secret_access_key: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")
    cdn_domain: str = os.getenv("CDN_DOMAIN", "")
    media_max_file_size: int = int(os.getenv("MEDIA_MAX_FILE_SIZE", str(100 * 1024 * 1024)))
    media_allowed_mime_types: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("MEDIA_ALLOWED_MIME_TYPES", DEFAULT_ALLOWED_MIME_TYPES))
    )
    ffmpeg_path: str = os.getenv("FFMPEG_PATH", "ffmpeg")
    video_max_bitrate: str = os.getenv("VIDEO_MAX_BITRATE", "2000k")
    thumbnail_size: str = os.getenv("THUMBNAIL_SIZE", "300x200")

    # Share of every course purchase kept by the platform.  The rest goes
    # to the instructor.
    platform_commission_rate: float = float(os.getenv("PLATFORM_COMMISSION_RATE", "0.2"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
