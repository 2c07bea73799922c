"""Upload storage on the local filesystem.

Files land under the public directory and are served by the static mounts:

    <public>/images/<entity>/<name>   ->  /images/<entity>/<name>
    <public>/pdfs/<entity>/<name>     ->  /pdfs/<entity>/<name>
    <public>/videos/<entity>/<name>   ->  /videos/<entity>/<name>

The folder is picked from the declared MIME type; nothing else is checked.
"""
from __future__ import annotations

import logging
import random
import shutil
import time
from enum import Enum
from pathlib import Path

from fastapi import UploadFile

from .config import settings

logger = logging.getLogger(__name__)


class MediaKind(str, Enum):
    """Top-level public folders."""
    IMAGES = "images"
    PDFS = "pdfs"
    VIDEOS = "videos"


class StorageError(Exception):
    """Raised when an upload cannot be written or removed."""
    pass


def public_root() -> Path:
    return Path(settings.storage.public_dir)


def media_kind_for(content_type: str | None) -> MediaKind:
    """Route a MIME type to its public folder."""
    if content_type == "application/pdf":
        return MediaKind.PDFS
    if content_type and content_type.startswith("video/"):
        return MediaKind.VIDEOS
    return MediaKind.IMAGES


def unique_filename(original: str | None) -> str:
    """`<epoch-ms>-<random>` plus the original extension."""
    suffix = Path(original).suffix if original else ""
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"


def entity_dir(kind: MediaKind, entity: str) -> Path:
    directory = public_root() / kind.value / entity
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def public_url(path: Path) -> str:
    """Map a file under the public dir to its URL path."""
    relative = Path(path).resolve().relative_to(public_root().resolve())
    return "/" + relative.as_posix()


async def save_upload(upload: UploadFile, entity: str) -> str:
    """Persist an uploaded file and return its public URL path.

    Args:
        upload: File received by the endpoint
        entity: Sub-folder name (products, news, references, team, ...)

    Returns:
        URL path such as ``/images/products/1700000000000-42.jpg``

    Raises:
        StorageError: If the file cannot be written
    """
    kind = media_kind_for(upload.content_type)

    try:
        target = entity_dir(kind, entity) / unique_filename(upload.filename)
        await upload.seek(0)
        with target.open("wb") as out:
            shutil.copyfileobj(upload.file, out)
    except OSError as e:
        logger.error(f"Failed to store upload {upload.filename}: {e}")
        raise StorageError(f"Failed to store {upload.filename}: {e}") from e
    finally:
        await upload.close()

    url = public_url(target)
    logger.info(f"Stored {upload.filename} ({upload.content_type}) as {url}")
    return url


def remove_file(path: Path) -> None:
    """Delete a file if it still exists."""
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        raise StorageError(f"Failed to remove {path}: {e}") from e
