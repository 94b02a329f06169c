"""
Local Filesystem Storage Implementation.
Stores journal collections and media blobs under a base directory.
"""

import logging
import uuid
import aiofiles
import aiofiles.os
from pathlib import Path
from typing import Optional

from ..models import MediaKind
from .interface import AttachmentStore

logger = logging.getLogger(__name__)

MEDIA_EXTENSIONS = {
    MediaKind.PHOTO: "jpg",
    MediaKind.VIDEO: "mov",
}


class LocalStorage:
    """
    Path-addressed file storage rooted at a base directory.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored files
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def full_path(self, path: str) -> Path:
        """Convert relative path to absolute path within base directory."""
        full_path = (self.base_dir / path).resolve()

        # Security check: ensure path is within base_dir
        if not full_path.is_relative_to(self.base_dir):
            raise ValueError(f"Invalid path: {path} - path traversal detected")

        return full_path

    async def save(self, path: str, content: bytes | str) -> bool:
        """
        Write content, creating parent directories.

        The content goes to a temporary sibling first and then replaces the
        target in one step, so readers never see a half-written file.
        """
        temp_path: Optional[Path] = None
        try:
            full_path = self.full_path(path)
            full_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = full_path.with_name(f".{full_path.name}.{uuid.uuid4().hex}.tmp")

            if isinstance(content, str):
                async with aiofiles.open(temp_path, 'w', encoding='utf-8') as f:
                    await f.write(content)
            else:
                async with aiofiles.open(temp_path, 'wb') as f:
                    await f.write(content)

            await aiofiles.os.replace(temp_path, full_path)
            return True
        except OSError as e:
            logger.error(f"Error saving file {path}: {e}")
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            return False

    async def load(self, path: str) -> Optional[bytes]:
        """File content, or None if it does not exist."""
        full_path = self.full_path(path)
        if not full_path.exists():
            return None

        async with aiofiles.open(full_path, 'rb') as f:
            return await f.read()

    async def delete(self, path: str) -> bool:
        """Delete a file. Missing files and I/O errors return False."""
        try:
            full_path = self.full_path(path)
            if full_path.exists():
                full_path.unlink()
                return True
            return False
        except (OSError, ValueError) as e:
            logger.warning(f"Error deleting file {path}: {e}")
            return False


class LocalAttachmentStore(AttachmentStore):
    """
    Media blobs as uuid-named files in one directory of a LocalStorage.
    The handle is the filename.
    """

    def __init__(self, storage: LocalStorage, media_dir: str = "media"):
        self.storage = storage
        self.media_dir = media_dir

    def _path(self, handle: str) -> str:
        if not handle or "/" in handle or "\\" in handle:
            raise ValueError(f"Invalid attachment handle: {handle!r}")
        return f"{self.media_dir}/{handle}"

    async def save(self, content: bytes, kind: MediaKind = MediaKind.PHOTO) -> Optional[str]:
        handle = f"{uuid.uuid4().hex}.{MEDIA_EXTENSIONS[MediaKind(kind)]}"
        if not await self.storage.save(self._path(handle), content):
            return None
        logger.debug(f"Saved {MediaKind(kind).value} attachment {handle} ({len(content)} bytes)")
        return handle

    async def load(self, handle: str) -> Optional[bytes]:
        return await self.storage.load(self._path(handle))

    async def delete(self, handle: str) -> bool:
        try:
            path = self._path(handle)
        except ValueError as e:
            logger.warning(str(e))
            return False
        return await self.storage.delete(path)

    def resolve(self, handle: str) -> Path:
        return self.storage.full_path(self._path(handle))
