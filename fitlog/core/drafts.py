"""
Workout drafting - the editable shape of a workout before it is committed.

Forms edit sets as groups ("3 sets of 20kg x 10"), in the unit the user
prefers. Committing converts weights to kilograms once and expands each group
into individual SetEntry rows; loading a record for editing collapses rows
back into groups.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..models import (
    ExerciseSet, ExerciseType, MediaAttachment, MuscleGroup, SetEntry,
    TrainingType, WeightUnit, WorkoutRecord
)
from ..models.conversion import from_kg, to_kg
from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def parse_float(raw: Any, field: str, minimum: Optional[float] = 0.0) -> float:
    """
    Parse numeric form input.

    Raises:
        ValidationError: If the value is not a finite number or is below minimum
    """
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {raw!r}", field=field, value=raw)
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be finite, got {raw!r}", field=field, value=raw)
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be >= {minimum}, got {raw!r}", field=field, value=raw)
    return value


def parse_int(raw: Any, field: str, minimum: Optional[int] = 0) -> int:
    """Parse whole-number form input; "12.0" is accepted, "12.5" is not."""
    value = parse_float(raw, field, minimum)
    if not value.is_integer():
        raise ValidationError(f"{field} must be a whole number, got {raw!r}", field=field, value=raw)
    return int(value)


def parse_optional_float(raw: Any, field: str) -> Optional[float]:
    """Blank input means "not entered"."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return parse_float(raw, field)


def parse_optional_int(raw: Any, field: str) -> Optional[int]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return parse_int(raw, field)


class SetGroup(BaseModel):
    """N identical sets, weight in the exercise's entry unit."""
    weight: float = Field(default=20.0, ge=0)
    reps: int = Field(default=10, ge=0)
    number_of_sets: int = Field(default=3, ge=1)

    @property
    def volume(self) -> float:
        return self.weight * self.reps * self.number_of_sets


class ExerciseDraft(BaseModel):
    exercise_name: str = ""
    exercise_type: ExerciseType = ExerciseType.FREE_WEIGHT
    muscle_group: MuscleGroup = MuscleGroup.CHEST
    weight_unit: WeightUnit = WeightUnit.KG
    sets: List[SetGroup] = Field(default_factory=list)
    note: Optional[str] = None
    media: List[MediaAttachment] = Field(default_factory=list)

    @property
    def total_sets(self) -> int:
        return sum(group.number_of_sets for group in self.sets)

    def to_exercise(self, order_index: int) -> ExerciseSet:
        """Expand set groups into kg-normalised SetEntry rows."""
        entries: List[SetEntry] = []
        for group in self.sets:
            weight_kg = to_kg(group.weight, self.weight_unit)
            for _ in range(group.number_of_sets):
                entries.append(SetEntry(weight=weight_kg, reps=group.reps))

        return ExerciseSet(
            exercise_name=self.exercise_name.strip(),
            exercise_type=self.exercise_type,
            muscle_group=self.muscle_group,
            sets=entries,
            note=self.note or None,
            order_index=order_index,
            media=list(self.media),
        )

    @classmethod
    def from_exercise(cls, exercise: ExerciseSet, weight_unit: WeightUnit = WeightUnit.KG) -> "ExerciseDraft":
        return cls(
            exercise_name=exercise.exercise_name,
            exercise_type=exercise.exercise_type,
            muscle_group=exercise.muscle_group,
            weight_unit=weight_unit,
            sets=group_sets(exercise, weight_unit),
            note=exercise.note,
            media=list(exercise.media),
        )


def group_sets(exercise: ExerciseSet, unit: WeightUnit = WeightUnit.KG) -> List[SetGroup]:
    """Collapse rows with equal weight and reps into groups, first-seen order."""
    counts: Dict[Tuple[float, int], int] = {}
    for entry in exercise.sets:
        key = (entry.weight, entry.reps)
        counts[key] = counts.get(key, 0) + 1
    return [
        SetGroup(weight=from_kg(weight, unit), reps=reps, number_of_sets=count)
        for (weight, reps), count in counts.items()
    ]


class WorkoutDraft(BaseModel):
    timestamp: datetime
    training_type: TrainingType = TrainingType.ANAEROBIC
    duration_minutes: int = 0
    note: Optional[str] = None
    exercises: List[ExerciseDraft] = Field(default_factory=list)
    media: List[MediaAttachment] = Field(default_factory=list)

    def validate_for_save(self) -> None:
        """
        Check the draft can be committed.

        Raises:
            ValidationError: Duration not positive, or an anaerobic draft with no
                exercises, an unnamed exercise, or an exercise without sets
        """
        if self.duration_minutes <= 0:
            raise ValidationError("Duration must be greater than 0 minutes",
                                  field="duration_minutes", value=self.duration_minutes)
        if self.training_type is not TrainingType.ANAEROBIC:
            return
        if not self.exercises:
            raise ValidationError("A strength workout needs at least one exercise", field="exercises")
        for index, exercise in enumerate(self.exercises):
            if not exercise.exercise_name.strip():
                raise ValidationError(f"Exercise #{index + 1} has no name", field="exercise_name")
            if not exercise.sets:
                raise ValidationError(f"Exercise {exercise.exercise_name!r} has no sets", field="sets")

    def to_record(self, record_id: Optional[str] = None) -> WorkoutRecord:
        """
        Build the WorkoutRecord to persist.

        Exercises get dense order indexes in list order. Aerobic sessions carry
        no exercise detail.
        """
        self.validate_for_save()
        exercises: List[ExerciseSet] = []
        if self.training_type is TrainingType.ANAEROBIC:
            exercises = [draft.to_exercise(index) for index, draft in enumerate(self.exercises)]

        fields = dict(
            timestamp=self.timestamp,
            training_type=self.training_type,
            exercise_details=exercises,
            duration_minutes=self.duration_minutes,
            note=self.note or None,
            media=list(self.media),
        )
        if record_id is not None:
            fields["id"] = record_id
        try:
            return WorkoutRecord(**fields)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    @classmethod
    def from_record(cls, record: WorkoutRecord, weight_unit: WeightUnit = WeightUnit.KG) -> "WorkoutDraft":
        return cls(
            timestamp=record.timestamp,
            training_type=record.training_type,
            duration_minutes=record.duration_minutes,
            note=record.note,
            exercises=[ExerciseDraft.from_exercise(e, weight_unit) for e in record.sorted_exercises],
            media=list(record.media),
        )

    @classmethod
    def from_form(
        cls,
        timestamp: datetime,
        training_type: TrainingType,
        duration: Any,
        note: Optional[str] = None,
        exercises: Optional[List[ExerciseDraft]] = None,
    ) -> "WorkoutDraft":
        """Draft from raw form values; duration text is parsed strictly."""
        return cls(
            timestamp=timestamp,
            training_type=training_type,
            duration_minutes=parse_int(duration, "duration_minutes"),
            note=note,
            exercises=exercises or [],
        )
