"""
Analytics Models - chart-ready aggregate structures.
"""

from datetime import date, datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field

from .enums import HealthMetric, MacroType, MuscleGroup, MuscleMetric, TimePeriod


class DateWindow(BaseModel):
    """Inclusive [start, end] range."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class OffsetRange(BaseModel):
    """Scrollable offsets for a period, both ends inclusive."""
    lower: int
    upper: int

    def clamp(self, offset: int) -> int:
        return max(self.lower, min(self.upper, offset))


class MuscleBalanceItem(BaseModel):
    muscle_group: MuscleGroup
    sets: int = 0
    volume: float = 0.0
    value: float = 0.0  # sets or volume, depending on the selected metric


class VolumeTrendPoint(BaseModel):
    date: datetime
    muscle_group: MuscleGroup
    volume: float


class WorkoutSummary(BaseModel):
    workout_count: int = 0
    total_minutes: int = 0
    anaerobic_count: int = 0
    total_volume: float = 0.0
    total_sets: int = 0
    average_volume: float = 0.0


class MacroTotal(BaseModel):
    macro: MacroType
    total_portions: float


class MetricMaximum(BaseModel):
    date: date
    value: Union[int, float]


class HealthMetricSummary(BaseModel):
    """Average is None when no log in the set has a value for the metric."""
    metric: HealthMetric
    average: Optional[float] = None
    maximum: Optional[MetricMaximum] = None
    sample_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.sample_count > 0


class AnalyticsReport(BaseModel):
    """Everything the analytics screen shows for one period and offset."""
    period: TimePeriod
    offset: int
    label: str
    window: DateWindow
    metric: MuscleMetric
    muscle_balance: List[MuscleBalanceItem] = Field(default_factory=list)
    volume_trend: List[VolumeTrendPoint] = Field(default_factory=list)
    workout_summary: WorkoutSummary = Field(default_factory=WorkoutSummary)
    macros: List[MacroTotal] = Field(default_factory=list)
    calories_total: float = 0.0
    pending_count: int = 0
    health: List[HealthMetricSummary] = Field(default_factory=list)
    has_workout_data: bool = False
    has_nutrition_data: bool = False
