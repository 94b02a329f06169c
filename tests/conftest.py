"""
Shared test fixtures and configuration.
"""

import os
from datetime import datetime

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("FITLOG_LOCAL_STORAGE_PATH", "/tmp/fitlog_test_data")
os.environ.setdefault("FITLOG_LOG_FILE_ENABLED", "false")

from fitlog.core import JournalService  # noqa: E402
from fitlog.storage import JournalStore, LocalAttachmentStore, LocalStorage  # noqa: E402


@pytest.fixture
def now():
    """Fixed reference time: Sunday 2026-03-15 14:30."""
    return datetime(2026, 3, 15, 14, 30)


@pytest.fixture
def local_storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def attachments(local_storage):
    return LocalAttachmentStore(local_storage, "media")


@pytest.fixture
def store():
    return JournalStore.in_memory()


@pytest.fixture
def journal(store, attachments):
    return JournalService(store, attachments)
