"""
JSON File Repository - one collection per JSON document on a LocalStorage.

Older documents are upgraded to the current record shape when loaded, so the
rest of the application only ever sees current-shape records.
"""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from ..exceptions import NotFoundError
from ..models import EntryStatus, MediaKind
from .interface import Predicate, Repository, T
from .local_storage import LocalStorage
from .memory_repository import sort_records

logger = logging.getLogger(__name__)

Migration = Callable[[Dict[str, Any]], Dict[str, Any]]


def _media_list(raw: Dict[str, Any]) -> None:
    """Fold legacy single/parallel media fields into `media`."""
    single_name = raw.pop("media_filename", None)
    single_type = raw.pop("media_type", None)
    names = raw.pop("media_filenames", None) or []
    types = raw.pop("media_types", None) or []

    if raw.get("media"):
        return
    media = [
        {"handle": name, "kind": types[i] if i < len(types) else MediaKind.PHOTO.value}
        for i, name in enumerate(names)
    ]
    if not media and single_name:
        media = [{"handle": single_name, "kind": single_type or MediaKind.PHOTO.value}]
    raw["media"] = media


def migrate_workout(raw: Dict[str, Any]) -> Dict[str, Any]:
    _media_list(raw)
    for exercise in raw.get("exercise_details") or []:
        _media_list(exercise)
        exercise.setdefault("order_index", 0)
    return raw


def migrate_nutrition(raw: Dict[str, Any]) -> Dict[str, Any]:
    legacy_photo = raw.pop("photo_filename", None)
    handles = raw.pop("photo_filenames", None) or raw.get("photo_handles") or []
    if not handles and legacy_photo:
        handles = [legacy_photo]
    raw["photo_handles"] = handles

    if "primitive_status" in raw:
        raw.setdefault("status", raw.pop("primitive_status"))
    if raw.get("status") is None:
        raw["status"] = EntryStatus.COMPLETE.value
    return raw


class JsonFileRepository(Repository[T]):
    """
    Repository persisted as `<collection>.json` holding a list of records.

    Every mutation rewrites the whole document. An asyncio lock serialises
    reads and read-modify-write cycles within the process, and LocalStorage
    replaces the file atomically.
    """

    def __init__(
        self,
        storage: LocalStorage,
        model: Type[T],
        collection: str,
        migrate: Optional[Migration] = None
    ):
        self.storage = storage
        self.model = model
        self.collection = collection
        self.migrate = migrate
        self._path = f"{collection}.json"
        self._lock = asyncio.Lock()

    async def _load(self) -> Dict[str, T]:
        content = await self.storage.load(self._path)
        if content is None:
            return {}

        records: Dict[str, T] = {}
        for raw in json.loads(content.decode('utf-8')):
            if self.migrate is not None:
                raw = self.migrate(raw)
            record = self.model.model_validate(raw)
            records[record.id] = record
        return records

    async def _save(self, records: Dict[str, T]) -> None:
        payload = [record.model_dump(mode="json") for record in records.values()]
        content = json.dumps(payload, indent=2, ensure_ascii=False)
        if not await self.storage.save(self._path, content):
            raise OSError(f"Could not write collection {self.collection}")

    async def insert(self, record: T) -> T:
        async with self._lock:
            records = await self._load()
            if record.id in records:
                raise ValueError(f"{self.collection}: duplicate id {record.id!r}")
            records[record.id] = record
            await self._save(records)
        logger.debug(f"{self.collection}: inserted {record.id}")
        return record

    async def update(self, record: T) -> T:
        async with self._lock:
            records = await self._load()
            if record.id not in records:
                raise NotFoundError(self.collection, record.id)
            records[record.id] = record
            await self._save(records)
        logger.debug(f"{self.collection}: updated {record.id}")
        return record

    async def delete(self, record_id: str) -> T:
        async with self._lock:
            records = await self._load()
            if record_id not in records:
                raise NotFoundError(self.collection, record_id)
            removed = records.pop(record_id)
            await self._save(records)
        logger.debug(f"{self.collection}: deleted {record_id}")
        return removed

    async def get(self, record_id: str) -> T:
        async with self._lock:
            records = await self._load()
        if record_id not in records:
            raise NotFoundError(self.collection, record_id)
        return records[record_id]

    async def query(
        self,
        predicate: Optional[Predicate] = None,
        sort_key: Optional[str] = None,
        descending: bool = False
    ) -> List[T]:
        async with self._lock:
            records = await self._load()
        matches = [r for r in records.values() if predicate is None or predicate(r)]
        return sort_records(matches, sort_key, descending)
