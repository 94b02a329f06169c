"""Storage module - repository and attachment-store interfaces and implementations."""

from .interface import Repository, AttachmentStore
from .local_storage import LocalStorage, LocalAttachmentStore
from .memory_repository import InMemoryRepository
from .json_repository import JsonFileRepository, migrate_nutrition, migrate_workout
from .journal_store import JournalStore

__all__ = [
    'Repository', 'AttachmentStore', 'LocalStorage', 'LocalAttachmentStore',
    'InMemoryRepository', 'JsonFileRepository', 'migrate_nutrition', 'migrate_workout',
    'JournalStore',
]
