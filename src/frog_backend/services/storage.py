"""Blob storage for uploaded post images."""

from __future__ import annotations

import logging
import re
import secrets
import time
from pathlib import Path, PurePosixPath
from typing import Final
from urllib.parse import urlparse

import aiofiles
import aiofiles.os

from frog_backend.core.settings import settings

logger = logging.getLogger(__name__)

UPLOADS_ROUTE: Final[str] = "/uploads"
_SAFE_EXTENSION: Final = re.compile(r"^\.[a-z0-9]+$")
_DEFAULT_EXTENSION: Final[str] = ".img"


def build_upload_name(original_filename: str | None) -> str:
    """Return a collision-resistant blob name keeping a sanitized extension."""
    extension = PurePosixPath(str(original_filename or "")).suffix.lower() or _DEFAULT_EXTENSION
    if not _SAFE_EXTENSION.match(extension):
        extension = _DEFAULT_EXTENSION
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{extension}"


def local_upload_name(image_url: str) -> str | None:
    """Return the blob name behind a ``/uploads/`` URL, or ``None`` for remote images."""
    try:
        path = urlparse(str(image_url or "")).path
    except ValueError:
        return None
    if not path.startswith(f"{UPLOADS_ROUTE}/"):
        return None
    name = PurePosixPath(path).name
    return name or None


class LocalBlobStore:
    """Filesystem-backed blob store served under ``/uploads``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def ensure(self) -> Path:
        """Create the storage directory if needed and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def _path(self, name: str) -> Path:
        # Names never carry directories; strip anything that tries to.
        return self.root / PurePosixPath(name).name

    async def save(self, name: str, data: bytes) -> None:
        """Write a blob."""
        await aiofiles.os.makedirs(self.root, exist_ok=True)
        async with aiofiles.open(self._path(name), "wb") as handle:
            await handle.write(data)

    async def remove(self, name: str) -> bool:
        """Delete a blob if present and report whether it existed."""
        path = self._path(name)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        logger.debug("Removed blob %s", path)
        return True

    def public_url(self, name: str, base_url: str) -> str:
        """Return the absolute URL under which a blob is served."""
        return f"{base_url.rstrip('/')}{UPLOADS_ROUTE}/{name}"


_blob_store: LocalBlobStore | None = None


def get_blob_store() -> LocalBlobStore:
    """Return the process-wide blob store rooted at ``settings.uploads_dir``."""
    global _blob_store
    if _blob_store is None:
        _blob_store = LocalBlobStore(Path(settings.uploads_dir).resolve())
    return _blob_store
