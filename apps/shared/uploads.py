"""
Uploaded file storage

Saves image uploads under the public uploads directory and removes files
that are no longer referenced. Files are addressed by their public URL
("/uploads/<name>"), which is what image rows store.
"""
import os
import logging
from typing import Iterable, Optional
from uuid import uuid4

import aiofiles
from fastapi import HTTPException, UploadFile

from apps.shared import config

logger = logging.getLogger(__name__)


def url_to_path(image_url: str) -> Optional[str]:
    """
    Map a public upload URL to its file on disk.

    Returns None for URLs outside the uploads directory (external links,
    path traversal attempts), which are never touched.
    """
    if not image_url or not image_url.startswith(config.UPLOAD_URL_PREFIX + "/"):
        return None
    relative = image_url[len(config.UPLOAD_URL_PREFIX) + 1:]
    upload_root = os.path.realpath(config.UPLOAD_DIR)
    path = os.path.realpath(os.path.join(upload_root, relative))
    if os.path.commonpath([upload_root, path]) != upload_root or path == upload_root:
        return None
    return path


def remove_uploaded_file(image_url: str) -> bool:
    """
    Delete one uploaded file. Returns True if a file was removed.

    A file that is already gone counts as success; any other OS error is
    logged and swallowed, the owning database change has already committed.
    """
    path = url_to_path(image_url)
    if path is None:
        logger.warning(f"Skipping cleanup of non-upload URL: {image_url}")
        return False
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.error(f"Could not delete uploaded file {path}: {e}")
        return False
    logger.info(f"Deleted uploaded file: {path}")
    return True


def remove_uploaded_files(image_urls: Iterable[str]) -> list[str]:
    """Best-effort delete of each URL, once per distinct URL. Returns removed URLs."""
    removed = []
    seen = set()
    for url in image_urls:
        if url in seen:
            continue
        seen.add(url)
        if remove_uploaded_file(url):
            removed.append(url)
    return removed


async def save_image_upload(file: UploadFile, subdir: str = "") -> str:
    """
    Validate and store an uploaded image, returning its public URL.

    Raises HTTPException(400) for non-image files or files over the size limit.
    """
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files can be uploaded")

    contents = await file.read()
    if len(contents) > config.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {config.MAX_UPLOAD_SIZE // (1024 * 1024)} MB",
        )

    filename = file.filename or ""
    ext = os.path.splitext(filename)[1].lower()
    if not ext[1:].isalnum() or len(ext) > 8:
        ext = ".jpg"
    unique_name = f"{uuid4().hex}{ext}"

    target_dir = os.path.join(config.UPLOAD_DIR, subdir) if subdir else config.UPLOAD_DIR
    os.makedirs(target_dir, exist_ok=True)

    async with aiofiles.open(os.path.join(target_dir, unique_name), "wb") as f:
        await f.write(contents)

    logger.info(f"Uploaded image: {unique_name}")

    url_dir = f"{config.UPLOAD_URL_PREFIX}/{subdir}" if subdir else config.UPLOAD_URL_PREFIX
    return f"{url_dir}/{unique_name}"
