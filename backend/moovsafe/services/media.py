"""Image host uploads for inspection and maintenance records.

Files arrive as named multipart fields, are checked here, then pushed to the
image host concurrently. Every stored file keeps the host's public id next to
its URL so it can be deleted later without parsing the URL.
"""
import asyncio
import io
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from moovsafe.core.config import settings
from moovsafe.core.errors import BadRequestError, UploadError
from moovsafe.core.validation import is_form_request, read_form

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
ALLOWED_CONTENT_TYPES = ("image/", "application/pdf")


class ImageStoreError(Exception):
    """Raised by an image store when the remote host rejects a call."""


@dataclass
class StoredImage:
    url: str
    public_id: str


class ImageStore:
    """Remote image host interface."""

    async def upload(self, content: bytes, filename: str, folder: str) -> StoredImage:
        raise NotImplementedError

    async def delete(self, public_ids: List[str]) -> None:
        raise NotImplementedError


class CloudinaryImageStore(ImageStore):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    async def upload(self, content: bytes, filename: str, folder: str) -> StoredImage:
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                folder=folder,
                resource_type="auto",
                filename=filename,
            )
        except CloudinaryError as e:
            raise ImageStoreError(str(e)) from e
        return StoredImage(url=result["secure_url"], public_id=result["public_id"])

    async def delete(self, public_ids: List[str]) -> None:
        try:
            await run_in_threadpool(cloudinary.api.delete_resources, list(public_ids))
        except CloudinaryError as e:
            raise ImageStoreError(str(e)) from e


@lru_cache
def get_image_store() -> ImageStore:
    """Dependency returning the configured image store."""
    return CloudinaryImageStore(
        settings.CLOUDINARY_CLOUD_NAME,
        settings.CLOUDINARY_API_KEY,
        settings.CLOUDINARY_API_SECRET,
    )


def upload_folder(*parts: str) -> str:
    return "/".join([settings.UPLOAD_FOLDER_PREFIX, *parts])


def sanitize_filename(filename: Optional[str]) -> str:
    """Strip directories and unsafe characters from a client-supplied filename."""
    filename = Path(filename or "").name
    filename = re.sub(r'[^\w\s\-\.]', '', filename)
    return filename.lstrip('.') or "upload"


async def collect_files(request: Request, limits: Mapping[str, int]) -> Dict[str, List[UploadFile]]:
    """Pick the named file fields out of a multipart request.

    ``limits`` maps field name to the maximum number of files allowed. A
    trailing ``[]`` on the part name is ignored. Empty parts are skipped.
    """
    files: Dict[str, List[UploadFile]] = {name: [] for name in limits}
    if not is_form_request(request):
        return files

    form = await read_form(request)
    for key in form.keys():
        name = key[:-2] if key.endswith("[]") else key
        if name not in limits:
            continue
        files[name].extend(
            v for v in form.getlist(key) if isinstance(v, UploadFile) and v.filename
        )

    for name, uploads in files.items():
        if len(uploads) > limits[name]:
            raise BadRequestError(f"Too many files for field '{name}' (max {limits[name]})")
    return files


async def read_upload(file: UploadFile) -> bytes:
    content_type = file.content_type or ""
    if not content_type.startswith(ALLOWED_CONTENT_TYPES):
        raise BadRequestError(f"File '{file.filename}' must be an image or PDF")

    content = await file.read()
    if len(content) > MAX_FILE_SIZE:
        raise BadRequestError(
            f"File '{file.filename}' too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )
    return content


async def upload_many(store: ImageStore, files: List[UploadFile], folder: str) -> List[StoredImage]:
    """Upload files concurrently; results come back in input order.

    If any upload fails, the ones that succeeded are removed again before
    the error is raised.
    """
    if not files:
        return []

    contents = [await read_upload(f) for f in files]
    results = await asyncio.gather(*(
        store.upload(content, sanitize_filename(f.filename), folder)
        for content, f in zip(contents, files)
    ), return_exceptions=True)

    stored = [r for r in results if isinstance(r, StoredImage)]
    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        await discard_images(store, [image.public_id for image in stored])
        if isinstance(errors[0], ImageStoreError):
            logger.error(f"Upload to {folder} failed: {errors[0]}")
            raise UploadError() from errors[0]
        raise errors[0]

    logger.info(f"Uploaded {len(stored)} file(s) to {folder}")
    return stored


async def upload_one(store: ImageStore, files: List[UploadFile], folder: str) -> Optional[StoredImage]:
    stored = await upload_many(store, files[:1], folder)
    return stored[0] if stored else None


async def discard_images(store: ImageStore, public_ids: Iterable[Optional[str]]) -> None:
    """Best-effort removal of stored files; failures are only logged."""
    ids = [public_id for public_id in public_ids if public_id]
    if not ids:
        return
    try:
        await store.delete(ids)
        logger.info(f"Deleted {len(ids)} remote image(s)")
    except ImageStoreError as e:
        logger.warning(f"Failed to delete remote images {ids}: {e}")
