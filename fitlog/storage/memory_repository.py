"""
In-memory Repository - records kept in a dict, copied in and out.
"""

import logging
from operator import attrgetter
from typing import Dict, Iterable, List, Optional, Type

from ..exceptions import NotFoundError
from .interface import Predicate, Repository, T

logger = logging.getLogger(__name__)


def sort_records(records: Iterable[T], sort_key: Optional[str], descending: bool) -> List[T]:
    """Stable sort by a field name; input order when sort_key is None."""
    records = list(records)
    if sort_key is None:
        return records[::-1] if descending else records
    return sorted(records, key=attrgetter(sort_key), reverse=descending)


class InMemoryRepository(Repository[T]):
    """
    Repository backed by a dict keyed by record id, in insertion order.
    """

    def __init__(self, model: Type[T], collection: str, records: Optional[Iterable[T]] = None):
        self.model = model
        self.collection = collection
        self._records: Dict[str, T] = {}
        for record in records or []:
            self._records[record.id] = record.model_copy(deep=True)

    async def insert(self, record: T) -> T:
        if record.id in self._records:
            raise ValueError(f"{self.collection}: duplicate id {record.id!r}")
        self._records[record.id] = record.model_copy(deep=True)
        logger.debug(f"{self.collection}: inserted {record.id}")
        return record

    async def update(self, record: T) -> T:
        if record.id not in self._records:
            raise NotFoundError(self.collection, record.id)
        self._records[record.id] = record.model_copy(deep=True)
        logger.debug(f"{self.collection}: updated {record.id}")
        return record

    async def delete(self, record_id: str) -> T:
        try:
            removed = self._records.pop(record_id)
        except KeyError:
            raise NotFoundError(self.collection, record_id) from None
        logger.debug(f"{self.collection}: deleted {record_id}")
        return removed

    async def get(self, record_id: str) -> T:
        try:
            return self._records[record_id].model_copy(deep=True)
        except KeyError:
            raise NotFoundError(self.collection, record_id) from None

    async def query(
        self,
        predicate: Optional[Predicate] = None,
        sort_key: Optional[str] = None,
        descending: bool = False
    ) -> List[T]:
        matches = (
            record.model_copy(deep=True)
            for record in self._records.values()
            if predicate is None or predicate(record)
        )
        return sort_records(matches, sort_key, descending)
