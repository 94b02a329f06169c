"""
Daily Log Model - one record of body metrics per calendar day.
"""

import uuid
from datetime import date, datetime, time
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import HealthMetric


def new_id() -> str:
    """Random unique record id."""
    return uuid.uuid4().hex


class DailyLog(BaseModel):
    """
    Body metrics for a single day.

    The day is the unique key: datetimes passed as `date` are truncated to
    their calendar day, so two logs for the same day always compare equal
    on `date`.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id)
    date: date

    weight: Optional[float] = Field(default=None, ge=0)  # kg
    sleep_duration_hours: Optional[float] = Field(default=None, ge=0)
    wake_up_time: Optional[datetime] = None
    sleep_time: Optional[datetime] = None
    steps: Optional[int] = Field(default=None, ge=0)
    resting_heart_rate: Optional[int] = Field(default=None, ge=0)  # bpm

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_day(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value

    @property
    def start_of_day(self) -> datetime:
        """Local midnight of the logged day."""
        return datetime.combine(self.date, time.min)

    @property
    def is_empty(self) -> bool:
        return all(self.metric_value(metric) is None for metric in HealthMetric)

    def metric_value(self, metric: HealthMetric) -> Optional[Union[int, float]]:
        return getattr(self, HealthMetric(metric).value)


def sleep_hours_between(sleep_time: datetime, wake_up_time: datetime) -> float:
    """
    Hours slept between two clock times, wrapping across midnight.

    Only the time of day is used, so a 23:30 bedtime and a 07:00 wake-up give
    7.5 hours whatever dates the two values carry.
    """
    asleep = sleep_time.hour * 60 + sleep_time.minute
    awake = wake_up_time.hour * 60 + wake_up_time.minute
    minutes = (awake - asleep) % (24 * 60)
    return minutes / 60
