"""
Media uploads backed by S3.

Files are validated (size and MIME type), stored under
``uploads/<user_id>/<uuid><ext>`` and recorded in the store.  Post
processing runs after the upload response has been sent: videos get a
thumbnail and a 720p H.264 rendition produced by ffmpeg, images are
recorded as processed without derivatives.  Public files are served
through their CDN URL, private ones through short‑lived presigned
URLs.
"""

import logging
import os
import subprocess
import tempfile
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from urllib.parse import urlparse

import boto3
from botocore.config import Config as BotoConfig

from ..core.config import Settings, settings
from ..core.storage import get_storage
from ..schemas.media import MediaFileRead

logger = logging.getLogger(__name__)


def file_type_for(mime_type: str) -> str:
    """Map a MIME type to one of ``image``, ``video``, ``audio``, ``document``."""
    for prefix in ("image", "video", "audio"):
        if mime_type.startswith(prefix + "/"):
            return prefix
    return "document"


class MediaService:
    """Upload, serve, post‑process and delete user media."""

    def __init__(self, s3_client=None, config: Settings = settings) -> None:
        self.config = config
        self.s3 = s3_client or boto3.client(
            "s3",
            aws_access_key_id=config.aws_access_key_id or None,
            aws_secret_access_key=config.aws_secret_access_key or None,
            region_name=config.aws_region,
            config=BotoConfig(connect_timeout=5, read_timeout=30, retries={"max_attempts": 3}),
        )

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------
    def validate_file(self, size: int, mime_type: str) -> None:
        if size > self.config.media_max_file_size:
            raise ValueError(
                f"File size exceeds maximum allowed size of {self.config.media_max_file_size} bytes"
            )
        if mime_type not in self.config.media_allowed_mime_types:
            raise ValueError(f"File type {mime_type} is not allowed")

    def cdn_url(self, key: str) -> str:
        if self.config.cdn_domain:
            return f"https://{self.config.cdn_domain}/{key}"
        return f"https://{self.config.aws_s3_bucket}.s3.{self.config.aws_region}.amazonaws.com/{key}"

    def upload_file(
        self,
        user_id: str,
        original_name: str,
        mime_type: str,
        data: bytes,
        related_type: Optional[str] = None,
        related_id: Optional[str] = None,
        is_public: bool = False,
    ) -> MediaFileRead:
        """Validate and upload a file, then record it.

        Raises ``ValueError`` when the file is too large or of a type
        that is not allowed.  The returned record is ``pending``; call
        :meth:`process_file` afterwards.
        """
        self.validate_file(len(data), mime_type)
        extension = os.path.splitext(original_name)[1]
        filename = f"{uuid.uuid4()}{extension}"
        key = f"uploads/{user_id}/{filename}"
        self.s3.put_object(
            Bucket=self.config.aws_s3_bucket,
            Key=key,
            Body=data,
            ContentType=mime_type,
            Metadata={
                "originalName": original_name,
                "userId": user_id,
                "uploadedAt": datetime.now(timezone.utc).isoformat(),
            },
        )
        row = get_storage().create_media_file(
            {
                "user_id": user_id,
                "filename": filename,
                "original_name": original_name,
                "mime_type": mime_type,
                "file_size": len(data),
                "file_type": file_type_for(mime_type),
                "s3_key": key,
                "s3_bucket": self.config.aws_s3_bucket,
                "cdn_url": self.cdn_url(key),
                "related_type": related_type,
                "related_id": related_id,
                "is_public": is_public,
                # No virus scanning is performed; uploads are recorded as clean.
                "virus_scan_result": "clean",
            }
        )
        logger.info("User %s uploaded %s (%s bytes) as %s", user_id, original_name, len(data), key)
        return MediaFileRead(**row)

    # ------------------------------------------------------------------
    # Post processing
    # ------------------------------------------------------------------
    def process_file(self, file_id: str, data: bytes) -> None:
        """Generate derivatives for an uploaded file.

        Meant to run as a background task: failures are logged and
        recorded as ``processing_status="failed"``, never raised.
        """
        storage = get_storage()
        media = storage.update_media_file(file_id, {"processing_status": "processing"})
        if media is None:
            logger.warning("Media file %s vanished before processing", file_id)
            return
        try:
            thumbnail_url = processed_url = None
            if media["file_type"] == "video":
                thumbnail_url, processed_url = self._process_video(media, data)
            storage.update_media_file(
                file_id,
                {
                    "processing_status": "completed",
                    "thumbnail_url": thumbnail_url,
                    "processed_url": processed_url,
                },
            )
        except Exception:
            logger.exception("Processing of media file %s failed", file_id)
            storage.update_media_file(file_id, {"processing_status": "failed"})

    def _process_video(self, media: dict, data: bytes) -> Tuple[str, str]:
        file_id, owner = media["id"], media["user_id"]
        with tempfile.TemporaryDirectory(prefix="media-") as workdir:
            source = os.path.join(workdir, "input")
            thumbnail = os.path.join(workdir, "thumb.jpg")
            processed = os.path.join(workdir, "processed.mp4")
            with open(source, "wb") as fh:
                fh.write(data)

            self._ffmpeg(["-i", source, "-ss", "00:00:01", "-frames:v", "1",
                          "-s", self.config.thumbnail_size, thumbnail])
            self._ffmpeg(["-i", source, "-c:v", "libx264", "-c:a", "aac",
                          "-b:v", self.config.video_max_bitrate, "-s", "1280x720", processed])

            thumbnail_key = f"thumbnails/{owner}/{file_id}_thumb.jpg"
            processed_key = f"processed/{owner}/{file_id}_processed.mp4"
            self._put_file(thumbnail_key, thumbnail, "image/jpeg")
            self._put_file(processed_key, processed, "video/mp4")
        return self.cdn_url(thumbnail_key), self.cdn_url(processed_key)

    def _ffmpeg(self, args: List[str]) -> None:
        cmd = [self.config.ffmpeg_path, "-y", "-loglevel", "error", *args]
        logger.debug("Running %s", " ".join(cmd))
        subprocess.run(cmd, check=True, capture_output=True, timeout=600)

    def _put_file(self, key: str, path: str, content_type: str) -> None:
        with open(path, "rb") as fh:
            self.s3.put_object(
                Bucket=self.config.aws_s3_bucket, Key=key, Body=fh.read(), ContentType=content_type
            )

    # ------------------------------------------------------------------
    # Access and deletion
    # ------------------------------------------------------------------
    def get_file_url(self, file_id: str, user_id: Optional[str] = None, expires_in: int = 3600) -> str:
        """Return a URL the caller can fetch the file from.

        Raises ``ValueError`` if the file does not exist and
        ``PermissionError`` if a private file is requested by someone
        other than its owner.
        """
        media = get_storage().get_media_file(file_id)
        if not media:
            raise ValueError(f"Media file {file_id} not found")
        if not media["is_public"] and media["user_id"] != user_id:
            raise PermissionError("Access denied")
        if media["is_public"] and media["cdn_url"]:
            return media["cdn_url"]
        return self.s3.generate_presigned_url(
            "get_object",
            Params={"Bucket": media["s3_bucket"], "Key": media["s3_key"]},
            ExpiresIn=expires_in,
        )

    def delete_file(self, file_id: str, user_id: str) -> None:
        """Delete a file, its derivatives and its record (owner only)."""
        storage = get_storage()
        media = storage.get_media_file(file_id)
        if not media:
            raise ValueError(f"Media file {file_id} not found")
        if media["user_id"] != user_id:
            raise PermissionError("Access denied")
        keys = [media["s3_key"]]
        for url in (media.get("thumbnail_url"), media.get("processed_url")):
            if url:
                keys.append(urlparse(url).path.lstrip("/"))
        for key in keys:
            self.s3.delete_object(Bucket=media["s3_bucket"], Key=key)
        storage.delete_media_file(file_id)
        logger.info("User %s deleted media file %s", user_id, file_id)

    def list_user_files(self, user_id: str, file_type: Optional[str] = None) -> List[MediaFileRead]:
        return [MediaFileRead(**row) for row in get_storage().get_media_files_by_user(user_id, file_type)]

    def list_related_files(self, related_type: str, related_id: str) -> List[MediaFileRead]:
        rows = get_storage().get_media_files_by_related(related_type, related_id)
        return [MediaFileRead(**row) for row in rows]


_media_service: Optional[MediaService] = None


def get_media_service() -> MediaService:
    """FastAPI dependency returning the shared ``MediaService``.

    The S3 client is created on first use so the API starts without
    AWS credentials; tests override this dependency.
    """
    global _media_service
    if _media_service is None:
        _media_service = MediaService()
    return _media_service
