"""
Journal Store - the three record collections the journal is made of.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..models import DailyLog, NutritionEntry, WorkoutRecord
from .interface import Repository
from .json_repository import JsonFileRepository, migrate_nutrition, migrate_workout
from .local_storage import LocalStorage
from .memory_repository import InMemoryRepository


@dataclass
class JournalStore:
    """Repositories for DailyLogs, WorkoutRecords and NutritionEntries."""
    daily_logs: Repository[DailyLog]
    workouts: Repository[WorkoutRecord]
    nutrition: Repository[NutritionEntry]

    @classmethod
    def in_memory(cls) -> "JournalStore":
        return cls(
            daily_logs=InMemoryRepository(DailyLog, "daily_logs"),
            workouts=InMemoryRepository(WorkoutRecord, "workouts"),
            nutrition=InMemoryRepository(NutritionEntry, "nutrition"),
        )

    @classmethod
    def on_disk(cls, storage: LocalStorage) -> "JournalStore":
        return cls(
            daily_logs=JsonFileRepository(storage, DailyLog, "daily_logs"),
            workouts=JsonFileRepository(storage, WorkoutRecord, "workouts", migrate=migrate_workout),
            nutrition=JsonFileRepository(storage, NutritionEntry, "nutrition", migrate=migrate_nutrition),
        )

    async def earliest_record_date(self) -> Optional[date]:
        """
        Day of the oldest record across all three collections.

        Returns:
            Optional[date]: None when the journal is empty
        """
        candidates = []

        log = await self.daily_logs.first(sort_key="date")
        if log is not None:
            candidates.append(log.date)

        workout = await self.workouts.first(sort_key="timestamp")
        if workout is not None:
            candidates.append(workout.timestamp.date())

        entry = await self.nutrition.first(sort_key="timestamp")
        if entry is not None:
            candidates.append(entry.timestamp.date())

        return min(candidates) if candidates else None
