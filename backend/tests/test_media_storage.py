"""Tests for storing uploads on disk."""
import asyncio
import io
import uuid

import pytest
from fastapi import UploadFile

from gymsmash.services import media_storage
from gymsmash.services.media_storage import MediaTooLargeError, delete_file, save_upload


@pytest.fixture
def media_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(media_storage.settings, "media_dir", str(tmp_path))
    return tmp_path


def make_upload(data, name="squat.mp4"):
    return UploadFile(file=io.BytesIO(data), filename=name)


class TestSaveUpload:
    """Tests for streaming uploads to the media directory."""

    def test_saved_under_user_directory(self, media_dir):
        """Test the file lands in the owner's folder with its bytes."""
        user_id = uuid.uuid4()

        relative, size = asyncio.run(save_upload(make_upload(b"x" * 10), user_id, max_bytes=100))

        assert size == 10
        assert relative.startswith(f"{user_id}/")
        assert relative.endswith("_squat.mp4")
        assert (media_dir / relative).read_bytes() == b"x" * 10

    def test_too_large_removes_partial_file(self, media_dir):
        """Test an oversized upload fails and leaves nothing behind."""
        user_id = uuid.uuid4()

        with pytest.raises(MediaTooLargeError):
            asyncio.run(save_upload(make_upload(b"x" * 101), user_id, max_bytes=100))

        assert list((media_dir / str(user_id)).iterdir()) == []

    def test_exact_limit_allowed(self, media_dir):
        """Test a file exactly at the limit is kept."""
        _, size = asyncio.run(save_upload(make_upload(b"x" * 100), uuid.uuid4(), max_bytes=100))

        assert size == 100


class TestDeleteFile:
    """Tests for removing stored files."""

    def test_delete_stored_file(self, media_dir):
        """Test a stored file is removed."""
        relative, _ = asyncio.run(save_upload(make_upload(b"abc"), uuid.uuid4(), max_bytes=100))

        assert delete_file(relative)
        assert not (media_dir / relative).exists()

    def test_missing_file(self, media_dir):
        """Test deleting a file that is already gone reports False."""
        assert not delete_file(f"{uuid.uuid4()}/gone.jpg")

    def test_outside_media_dir_refused(self, media_dir):
        """Test paths escaping the media directory are left alone."""
        outside = media_dir.parent / "keep.txt"
        outside.write_text("keep")

        assert not delete_file("../keep.txt")
        assert outside.exists()
