"""
Storage Interfaces - contracts for record repositories and attachment stores.

The journal core and analytics are written against these interfaces only,
so the storage engine can be swapped (in-memory, JSON files, a database).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from ..models import MediaKind

T = TypeVar("T", bound=BaseModel)

Predicate = Callable[[T], bool]


class Repository(ABC, Generic[T]):
    """
    CRUD and sorted/filtered query over one record collection.

    Records are identified by their `id` field. Implementations hand out copies:
    changing a returned record has no effect until it is passed to update().
    """

    collection: str

    @abstractmethod
    async def insert(self, record: T) -> T:
        """
        Store a new record.

        Raises:
            ValueError: If a record with the same id already exists
        """

    @abstractmethod
    async def update(self, record: T) -> T:
        """
        Replace the stored record that has the same id.

        Raises:
            NotFoundError: If no record has that id
        """

    @abstractmethod
    async def delete(self, record_id: str) -> T:
        """
        Remove a record and everything it owns by value.

        Returns:
            The removed record

        Raises:
            NotFoundError: If no record has that id
        """

    @abstractmethod
    async def get(self, record_id: str) -> T:
        """
        Raises:
            NotFoundError: If no record has that id
        """

    @abstractmethod
    async def query(
        self,
        predicate: Optional[Predicate] = None,
        sort_key: Optional[str] = None,
        descending: bool = False
    ) -> List[T]:
        """
        Records matching predicate, optionally sorted by a field.

        Args:
            predicate: Filter; all records when None
            sort_key: Field name to sort by (e.g. "date", "timestamp"); the sort
                is stable, and records keep insertion order when None
            descending: Newest/largest first
        """

    async def first(
        self,
        predicate: Optional[Predicate] = None,
        sort_key: Optional[str] = None,
        descending: bool = False
    ) -> Optional[T]:
        results = await self.query(predicate, sort_key, descending)
        return results[0] if results else None

    async def count(self, predicate: Optional[Predicate] = None) -> int:
        return len(await self.query(predicate))


class AttachmentStore(ABC):
    """
    Blob store for photos and videos. Handles are opaque strings.
    """

    @abstractmethod
    async def save(self, content: bytes, kind: MediaKind = MediaKind.PHOTO) -> Optional[str]:
        """
        Store a blob under a new unique handle.

        Returns:
            The handle, or None if the blob could not be written
        """

    @abstractmethod
    async def load(self, handle: str) -> Optional[bytes]:
        """Blob content, or None if the handle is unknown."""

    @abstractmethod
    async def delete(self, handle: str) -> bool:
        """
        Release a blob.

        Returns:
            bool: True if something was deleted. Never raises for missing blobs.
        """

    @abstractmethod
    def resolve(self, handle: str) -> Path:
        """Location of the blob behind a handle."""
