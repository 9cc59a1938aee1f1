# catalog_api/core/storage_utils.py
import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Iterable, Protocol

from fastapi import HTTPException, Request, status
from supabase import Client

from catalog_api.core.config import Settings
from catalog_api.core.supabase_client import supabase_admin

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/400x400"

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@dataclass(frozen=True)
class StoredMedia:
    """
    A file living on the media host.

    - url: public URL stored on catalog records
    - handle: opaque value needed to delete the file later
    """

    url: str
    handle: str


class MediaStorage(Protocol):
    def upload(self, folder: str, content_type: str, file_bytes: bytes) -> StoredMedia: ...

    def delete(self, handle: str) -> None: ...


class SupabaseMediaStorage:
    """
    Media Attachment Service backed by a Supabase Storage bucket.

    The handle of an uploaded file is its object path inside the bucket,
    e.g. 'products/<uuid4>.png'. The client is created on first use, so the
    API can boot without media host credentials.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.bucket = settings.SUPABASE_BUCKET
        self._client: Client | None = None
        self._lock = threading.Lock()

    @property
    def client(self) -> Client:
        with self._lock:
            if self._client is None:
                self._client = supabase_admin(self.settings)
            return self._client

    def upload(self, folder: str, content_type: str, file_bytes: bytes) -> StoredMedia:
        """
        Upload raw bytes and return the public URL plus deletion handle.

        Raises:
            Any exception raised by Supabase client if upload fails.
        """
        ext = ALLOWED_IMAGE_CONTENT_TYPES[content_type]
        path = f"{folder}/{generate_filename(ext)}"
        storage = self.client.storage.from_(self.bucket)
        storage.upload(path, file_bytes, {"content-type": content_type, "upsert": "true"})
        return StoredMedia(url=storage.get_public_url(path), handle=path)

    def delete(self, handle: str) -> None:
        # Supabase Python client expects a list of paths.
        self.client.storage.from_(self.bucket).remove([handle])


def get_media_storage(request: Request) -> MediaStorage:
    """FastAPI dependency returning the media storage attached to the app."""
    return request.app.state.media


def validate_image(content_type: str | None, file_bytes: bytes) -> str:
    """
    Check an uploaded image before it is sent to the media host.

    Returns:
        The normalized content type.

    Raises:
        HTTPException(400): unsupported or missing content type.
        HTTPException(413): file larger than MAX_IMAGE_BYTES.
    """
    if not content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
        )

    if len(file_bytes) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image too large (max 5MB).",
        )

    return content_type


def delete_quietly(media: MediaStorage, handles: Iterable[str]) -> None:
    """
    Best-effort removal of media handles.

    Failures are logged as warnings and never raised.
    """
    for handle in handles:
        try:
            media.delete(handle)
        except Exception as e:
            logger.warning(f"⚠️ Failed to delete media '{handle}': {e}")


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"
