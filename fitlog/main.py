"""
FitLog - application wiring.
"""

import logging

from .config import Settings, settings
from .core import JournalService
from .core.logging_config import setup_logging
from .storage import JournalStore, LocalAttachmentStore, LocalStorage

logger = logging.getLogger(__name__)


def create_journal(config: Settings = settings, configure_logging: bool = True) -> JournalService:
    """
    Build a JournalService backed by JSON collections and local media files.

    Args:
        config: Settings to read storage and logging options from
        configure_logging: Install the logging handlers first

    Returns:
        JournalService ready for use
    """
    if configure_logging:
        setup_logging(config)

    storage = LocalStorage(config.local_storage_path)
    journal = JournalService(
        store=JournalStore.on_disk(storage),
        attachments=LocalAttachmentStore(storage, config.attachments_dir),
        recent_log_days=config.recent_log_days,
    )

    logger.info(f"Starting {config.app_name} v{config.app_version}")
    logger.info(f"Storage path: {storage.base_dir}")
    return journal
