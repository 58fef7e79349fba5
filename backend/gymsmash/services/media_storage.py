"""Storage of uploaded photos and videos on local disk."""
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from gymsmash.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

CHUNK_SIZE = 1024 * 1024


class MediaTooLargeError(Exception):
    """Raised when an upload exceeds the configured size limit."""


def safe_filename(name: Optional[str], default: str = "upload.bin") -> str:
    """Basename with anything outside ``[A-Za-z0-9._-@]`` replaced by ``_``."""
    base = os.path.basename(name or "")
    if not base:
        return default
    keep = []
    for ch in base:
        if ch.isalnum() or ch in (".", "_", "-", "@"):
            keep.append(ch)
        else:
            keep.append("_")
    return "".join(keep)[:180]


def media_root() -> Path:
    return Path(settings.media_dir)


def public_url(relative_path: str) -> str:
    """Public URL of a stored file."""
    base = settings.media_public_base_url.rstrip("/")
    prefix = settings.media_url_path.strip("/")
    return f"{base}/{prefix}/{relative_path}"


async def save_upload(
    file: UploadFile,
    user_id: uuid.UUID,
    max_bytes: Optional[int] = None,
) -> tuple[str, int]:
    """
    Stream an upload to ``<media_dir>/<user_id>/<uuid>_<name>``.

    Args:
        file: Incoming upload
        user_id: Owner, used as the directory name
        max_bytes: Size limit (defaults to the configured limit)

    Returns:
        (path relative to the media directory, bytes written)

    Raises:
        MediaTooLargeError: If the file is larger than the limit
    """
    limit = max_bytes if max_bytes is not None else settings.media_max_upload_mb * 1024 * 1024
    filename = f"{uuid.uuid4().hex}_{safe_filename(file.filename)}"
    relative = f"{user_id}/{filename}"

    user_dir = media_root() / str(user_id)
    user_dir.mkdir(parents=True, exist_ok=True)
    stored_path = user_dir / filename

    total = 0
    try:
        with stored_path.open("wb") as out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                total += len(chunk)
                if total > limit:
                    raise MediaTooLargeError(f"Upload exceeds {limit} bytes")
                out.write(chunk)
    except MediaTooLargeError:
        stored_path.unlink(missing_ok=True)
        raise
    finally:
        await file.close()

    logger.info(f"Stored upload {relative} ({total} bytes)")
    return relative, total


def delete_file(relative_path: str) -> bool:
    """Remove a stored file; paths outside the media directory are refused."""
    root = media_root().resolve()
    target = (root / relative_path).resolve()
    if root not in target.parents:
        logger.warning(f"Refusing to delete {relative_path} outside media directory")
        return False
    if not target.exists():
        return False
    target.unlink()
    return True
