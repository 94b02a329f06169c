"""Core module - journal service, analytics and the pure computation helpers."""

from .journal import JournalService
from .drafts import ExerciseDraft, SetGroup, WorkoutDraft, group_sets
from .catalog import exercises_for
from .time_window import resolve_window, relative_label, offset_range

__all__ = [
    'JournalService', 'ExerciseDraft', 'SetGroup', 'WorkoutDraft', 'group_sets',
    'exercises_for', 'resolve_window', 'relative_label', 'offset_range',
]
