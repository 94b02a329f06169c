"""
Error taxonomy for the journal core.

Aggregations never raise on empty input; an empty window is a valid result.
"""

from typing import Any, Optional


class FitLogError(Exception):
    """Base class for all journal errors."""


class ValidationError(FitLogError, ValueError):
    """Rejected user input. Raised before any entity is built or stored."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class NotFoundError(FitLogError, LookupError):
    """A repository operation referenced an unknown record id."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}: no record with id {record_id!r}")
        self.collection = collection
        self.record_id = record_id
