"""
Media endpoints.

Uploads are multipart forms.  The file is stored and recorded right
away; thumbnails and transcoded renditions are produced by a background
task after the response has been sent.  These handlers are plain
functions because the S3 client is blocking; FastAPI runs them in its
threadpool.
"""

from typing import List, Optional

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    UploadFile,
    status,
)

from skill_exchange_api.app.schemas.media import FileType, MediaFileRead, MediaUrlRead
from skill_exchange_api.app.services.media_service import MediaService, get_media_service

router = APIRouter()


def _raise_for(error: Exception) -> None:
    if isinstance(error, PermissionError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    detail = str(error)
    status_code = status.HTTP_404_NOT_FOUND if "not found" in detail else status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=status_code, detail=detail)


@router.post("", response_model=MediaFileRead, status_code=status.HTTP_201_CREATED)
def upload_media(
    background_tasks: BackgroundTasks,
    user_id: str = Form(...),
    file: UploadFile = File(...),
    related_type: Optional[str] = Form(None),
    related_id: Optional[str] = Form(None),
    is_public: bool = Form(False),
    service: MediaService = Depends(get_media_service),
) -> MediaFileRead:
    """Upload a file.  Returns 400 if it is too large or of a disallowed type."""
    data = file.file.read()
    try:
        media = service.upload_file(
            user_id=user_id,
            original_name=file.filename or "upload",
            mime_type=file.content_type or "application/octet-stream",
            data=data,
            related_type=related_type,
            related_id=related_id,
            is_public=is_public,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    background_tasks.add_task(service.process_file, media.id, data)
    return media


@router.get("", response_model=List[MediaFileRead])
def list_media(
    user_id: str = Query(...),
    file_type: Optional[FileType] = Query(None),
    service: MediaService = Depends(get_media_service),
) -> List[MediaFileRead]:
    return service.list_user_files(user_id, file_type)


@router.get("/related/{related_type}/{related_id}", response_model=List[MediaFileRead])
def list_related_media(
    related_type: str,
    related_id: str,
    service: MediaService = Depends(get_media_service),
) -> List[MediaFileRead]:
    """Files attached to a skill, course, lesson or message."""
    return service.list_related_files(related_type, related_id)


@router.get("/{file_id}/url", response_model=MediaUrlRead)
def get_media_url(
    file_id: str,
    user_id: Optional[str] = Query(None),
    expires_in: int = Query(3600, ge=60, le=7 * 24 * 3600),
    service: MediaService = Depends(get_media_service),
) -> MediaUrlRead:
    """CDN URL for public files, a presigned URL for the owner of a private one."""
    try:
        url = service.get_file_url(file_id, user_id=user_id, expires_in=expires_in)
    except (ValueError, PermissionError) as e:
        _raise_for(e)
    return MediaUrlRead(id=file_id, url=url)


@router.delete("/{file_id}")
def delete_media(
    file_id: str,
    user_id: str = Query(...),
    service: MediaService = Depends(get_media_service),
) -> dict:
    try:
        service.delete_file(file_id, user_id)
    except (ValueError, PermissionError) as e:
        _raise_for(e)
    return {"detail": "Media file deleted successfully"}
