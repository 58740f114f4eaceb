"""Tests for media endpoints.

S3 is a ``MagicMock`` and ffmpeg is never run: ``subprocess.run`` is
replaced by a fake that writes the expected output file.
"""

import dataclasses
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from skill_exchange_api.app.core.config import settings
from skill_exchange_api.app.services import media_service
from skill_exchange_api.app.services.media_service import MediaService, file_type_for, get_media_service

TEST_SETTINGS = dataclasses.replace(
    settings, aws_s3_bucket="test-bucket", aws_region="eu-west-1", cdn_domain="", media_max_file_size=1024
)


@pytest.fixture
def s3():
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://signed.example.com/object"
    return client


@pytest.fixture
def client(app, s3):
    service = MediaService(s3_client=s3, config=TEST_SETTINGS)
    app.dependency_overrides[get_media_service] = lambda: service
    return TestClient(app)


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        with open(cmd[-1], "wb") as fh:
            fh.write(b"derived")

    monkeypatch.setattr(media_service.subprocess, "run", fake_run)
    return calls


def upload(client, user_id="u1", name="photo.png", mime="image/png", data=b"png-bytes", **form):
    return client.post(
        "/api/media",
        data={"user_id": user_id, **form},
        files={"file": (name, data, mime)},
    )


class TestFileType:
    def test_mapping(self):
        assert file_type_for("image/png") == "image"
        assert file_type_for("video/mp4") == "video"
        assert file_type_for("audio/mpeg") == "audio"
        assert file_type_for("application/pdf") == "document"


class TestUpload:
    """Tests for POST /api/media."""

    def test_upload_image(self, client, s3):
        response = upload(client, related_type="skill", related_id="s1")
        assert response.status_code == 201
        media = response.json()
        assert media["file_type"] == "image"
        assert media["s3_key"].startswith("uploads/u1/")
        assert media["s3_key"].endswith(".png")
        assert media["cdn_url"] == f"https://test-bucket.s3.eu-west-1.amazonaws.com/{media['s3_key']}"
        assert media["virus_scan_result"] == "clean"

        kwargs = s3.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "test-bucket"
        assert kwargs["Body"] == b"png-bytes"
        assert kwargs["Metadata"]["originalName"] == "photo.png"

        # background processing has run by the time TestClient returns
        [stored] = client.get("/api/media", params={"user_id": "u1"}).json()
        assert stored["processing_status"] == "completed"
        assert stored["thumbnail_url"] is None

    def test_too_large(self, client, s3):
        response = upload(client, data=b"x" * 2048)
        assert response.status_code == 400
        s3.put_object.assert_not_called()

    def test_type_not_allowed(self, client):
        response = upload(client, name="tool.exe", mime="application/x-msdownload")
        assert response.status_code == 400

    def test_video_processing(self, client, s3, fake_ffmpeg):
        media = upload(client, name="clip.mp4", mime="video/mp4", data=b"video").json()
        assert len(fake_ffmpeg) == 2
        [stored] = client.get("/api/media", params={"user_id": "u1", "file_type": "video"}).json()
        assert stored["processing_status"] == "completed"
        assert stored["thumbnail_url"].endswith(f"thumbnails/u1/{media['id']}_thumb.jpg")
        assert stored["processed_url"].endswith(f"processed/u1/{media['id']}_processed.mp4")
        keys = [call.kwargs["Key"] for call in s3.put_object.call_args_list]
        assert f"processed/u1/{media['id']}_processed.mp4" in keys

    def test_video_processing_failure(self, client, monkeypatch):
        def failing_run(cmd, **kwargs):
            raise media_service.subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr(media_service.subprocess, "run", failing_run)
        upload(client, name="clip.mp4", mime="video/mp4", data=b"video")
        [stored] = client.get("/api/media", params={"user_id": "u1"}).json()
        assert stored["processing_status"] == "failed"


class TestFileUrl:
    """Tests for GET /api/media/{id}/url."""

    def test_public_file_uses_cdn(self, client, s3):
        media = upload(client, is_public="true").json()
        response = client.get(f"/api/media/{media['id']}/url")
        assert response.status_code == 200
        assert response.json()["url"] == media["cdn_url"]
        s3.generate_presigned_url.assert_not_called()

    def test_private_file_for_owner(self, client, s3):
        media = upload(client).json()
        response = client.get(f"/api/media/{media['id']}/url", params={"user_id": "u1", "expires_in": 600})
        assert response.status_code == 200
        assert response.json()["url"] == "https://signed.example.com/object"
        assert s3.generate_presigned_url.call_args.kwargs["ExpiresIn"] == 600

    def test_private_file_for_stranger(self, client):
        media = upload(client).json()
        response = client.get(f"/api/media/{media['id']}/url", params={"user_id": "u2"})
        assert response.status_code == 403

    def test_missing_file(self, client):
        assert client.get("/api/media/missing/url").status_code == 404


class TestListAndDelete:
    def test_related(self, client):
        upload(client, related_type="course", related_id="c1")
        upload(client, related_type="course", related_id="c2")
        response = client.get("/api/media/related/course/c1")
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_delete_removes_derivatives(self, client, s3, fake_ffmpeg):
        media = upload(client, name="clip.mp4", mime="video/mp4", data=b"video").json()
        response = client.delete(f"/api/media/{media['id']}", params={"user_id": "u1"})
        assert response.status_code == 200
        deleted = [call.kwargs["Key"] for call in s3.delete_object.call_args_list]
        assert deleted == [
            media["s3_key"],
            f"thumbnails/u1/{media['id']}_thumb.jpg",
            f"processed/u1/{media['id']}_processed.mp4",
        ]
        assert client.get("/api/media", params={"user_id": "u1"}).json() == []

    def test_delete_by_other_user(self, client, s3):
        media = upload(client).json()
        response = client.delete(f"/api/media/{media['id']}", params={"user_id": "u2"})
        assert response.status_code == 403
        s3.delete_object.assert_not_called()

    def test_delete_missing(self, client):
        assert client.delete("/api/media/missing", params={"user_id": "u1"}).status_code == 404
