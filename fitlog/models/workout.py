"""
Workout Models - training sessions, their exercises and performed sets.

Children are held by value inside their parent: a WorkoutRecord owns its
ExerciseSets, which own their SetEntry rows, so removing a workout removes
the whole tree. Weights are always kilograms.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .daily_log import new_id
from .enums import ExerciseType, MediaKind, MuscleGroup, TrainingType


class SetEntry(BaseModel):
    """One performed set."""
    id: str = Field(default_factory=new_id)
    weight: float = Field(default=0.0, ge=0)  # kg
    reps: int = Field(default=0, ge=0)

    @property
    def volume(self) -> float:
        return self.weight * self.reps


class MediaAttachment(BaseModel):
    """Opaque attachment-store handle plus what it points at."""
    handle: str
    kind: MediaKind = MediaKind.PHOTO


class ExerciseSet(BaseModel):
    """One exercise within a workout."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    exercise_name: str
    exercise_type: ExerciseType
    muscle_group: MuscleGroup
    sets: List[SetEntry] = Field(default_factory=list)
    note: Optional[str] = None
    order_index: int = 0
    media: List[MediaAttachment] = Field(default_factory=list)

    @property
    def total_volume(self) -> float:
        """Sum of weight x reps over all sets, 0 when there are none."""
        return sum(entry.weight * entry.reps for entry in self.sets)

    @property
    def max_weight(self) -> float:
        return max((entry.weight for entry in self.sets), default=0.0)

    @property
    def set_count(self) -> int:
        return len(self.sets)

    @property
    def media_handles(self) -> List[str]:
        return [item.handle for item in self.media]


class WorkoutRecord(BaseModel):
    """One training session."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    timestamp: datetime
    training_type: TrainingType
    exercise_details: List[ExerciseSet] = Field(default_factory=list)
    duration_minutes: int = Field(default=0, ge=0)
    note: Optional[str] = None
    media: List[MediaAttachment] = Field(default_factory=list)

    @property
    def total_volume(self) -> float:
        return sum(exercise.total_volume for exercise in self.exercise_details)

    @property
    def total_sets(self) -> int:
        return sum(exercise.set_count for exercise in self.exercise_details)

    @property
    def sorted_exercises(self) -> List[ExerciseSet]:
        """Exercises by order_index; equal indexes keep their stored order."""
        return sorted(self.exercise_details, key=lambda exercise: exercise.order_index)

    @property
    def is_anaerobic(self) -> bool:
        return self.training_type is TrainingType.ANAEROBIC

    def attachment_handles(self) -> List[str]:
        """Every attachment handle owned by the session or its exercises."""
        handles = [item.handle for item in self.media]
        for exercise in self.exercise_details:
            handles.extend(exercise.media_handles)
        return handles

    def reindex(self) -> None:
        """Make order_index dense 0..N-1, keeping the current sorted order."""
        ordered = self.sorted_exercises
        for index, exercise in enumerate(ordered):
            exercise.order_index = index
        self.exercise_details = ordered
