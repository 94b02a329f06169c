"""Models module."""

from .enums import (
    TrainingType, ExerciseType, MuscleGroup, NutritionUnit, WeightUnit,
    MacroType, EntryStatus, MediaKind, TimePeriod, MuscleMetric, HealthMetric
)
from .daily_log import DailyLog, new_id, sleep_hours_between
from .workout import SetEntry, MediaAttachment, ExerciseSet, WorkoutRecord
from .nutrition import NutritionEntry, MEAL_TYPES, PENDING_DESCRIPTION
from .analytics import (
    DateWindow, OffsetRange, MuscleBalanceItem, VolumeTrendPoint, WorkoutSummary,
    MacroTotal, MetricMaximum, HealthMetricSummary, AnalyticsReport
)

__all__ = [
    'TrainingType', 'ExerciseType', 'MuscleGroup', 'NutritionUnit', 'WeightUnit',
    'MacroType', 'EntryStatus', 'MediaKind', 'TimePeriod', 'MuscleMetric', 'HealthMetric',
    'DailyLog', 'new_id', 'sleep_hours_between',
    'SetEntry', 'MediaAttachment', 'ExerciseSet', 'WorkoutRecord',
    'NutritionEntry', 'MEAL_TYPES', 'PENDING_DESCRIPTION',
    'DateWindow', 'OffsetRange', 'MuscleBalanceItem', 'VolumeTrendPoint', 'WorkoutSummary',
    'MacroTotal', 'MetricMaximum', 'HealthMetricSummary', 'AnalyticsReport',
]
