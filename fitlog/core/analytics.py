"""
Analytics Aggregation Engine - turns raw journal records into window summaries.

Every function is pure: it takes the records (already fetched from the
repositories) and returns a fresh aggregate. An empty window is a valid
result and yields empty lists and zero counts.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models import (
    AnalyticsReport, DailyLog, DateWindow, HealthMetric, HealthMetricSummary,
    MacroTotal, MacroType, MetricMaximum, MuscleBalanceItem, MuscleGroup,
    MuscleMetric, NutritionEntry, TimePeriod, VolumeTrendPoint, WorkoutRecord,
    WorkoutSummary
)
from .time_window import relative_label, resolve_window

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Window filters
# ---------------------------------------------------------------------------

def filter_workouts(workouts: Iterable[WorkoutRecord], window: DateWindow) -> List[WorkoutRecord]:
    return [w for w in workouts if window.contains(w.timestamp)]


def filter_nutrition(entries: Iterable[NutritionEntry], window: DateWindow) -> List[NutritionEntry]:
    return [e for e in entries if window.contains(e.timestamp)]


def filter_daily_logs(logs: Iterable[DailyLog], window: DateWindow) -> List[DailyLog]:
    """Logs whose day lies in the window. Compared by date, so tz-free."""
    first, last = window.start.date(), window.end.date()
    return [log for log in logs if first <= log.date <= last]


def has_workout_data(workouts: Iterable[WorkoutRecord], window: DateWindow) -> bool:
    return any(window.contains(w.timestamp) for w in workouts)


def has_nutrition_data(entries: Iterable[NutritionEntry], window: DateWindow) -> bool:
    return any(window.contains(e.timestamp) for e in entries)


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------

def muscle_balance(
    workouts: Iterable[WorkoutRecord],
    metric: MuscleMetric = MuscleMetric.SETS
) -> List[MuscleBalanceItem]:
    """
    Sets and volume per muscle group over anaerobic workouts.

    Groups with zero sets and MuscleGroup.OTHER are left out. Items are sorted
    by the selected metric, largest first; ties keep first-seen order.
    """
    metric = MuscleMetric(metric)
    stats: Dict[MuscleGroup, Tuple[int, float]] = {}
    for workout in workouts:
        if not workout.is_anaerobic:
            continue
        for exercise in workout.exercise_details:
            sets, volume = stats.get(exercise.muscle_group, (0, 0.0))
            stats[exercise.muscle_group] = (sets + exercise.set_count, volume + exercise.total_volume)

    items = [
        MuscleBalanceItem(
            muscle_group=group,
            sets=sets,
            volume=volume,
            value=float(sets) if metric is MuscleMetric.SETS else volume,
        )
        for group, (sets, volume) in stats.items()
        if group is not MuscleGroup.OTHER and sets > 0
    ]
    items.sort(key=lambda item: item.value, reverse=True)
    return items


def volume_trend(workouts: Iterable[WorkoutRecord]) -> List[VolumeTrendPoint]:
    """One point per exercise of each anaerobic workout, oldest first."""
    points = [
        VolumeTrendPoint(
            date=workout.timestamp,
            muscle_group=exercise.muscle_group,
            volume=exercise.total_volume,
        )
        for workout in workouts
        if workout.is_anaerobic
        for exercise in workout.exercise_details
    ]
    points.sort(key=lambda point: point.date)
    return points


def workout_summary(workouts: Sequence[WorkoutRecord]) -> WorkoutSummary:
    anaerobic = [w for w in workouts if w.is_anaerobic]
    total_volume = sum(w.total_volume for w in anaerobic)
    return WorkoutSummary(
        workout_count=len(workouts),
        total_minutes=sum(w.duration_minutes for w in workouts),
        anaerobic_count=len(anaerobic),
        total_volume=total_volume,
        total_sets=sum(w.total_sets for w in anaerobic),
        average_volume=total_volume / len(anaerobic) if anaerobic else 0.0,
    )


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------

def macro_totals(entries: Iterable[NutritionEntry]) -> List[MacroTotal]:
    """Summed portions per macro; macros totalling zero are omitted."""
    totals: Dict[MacroType, float] = {macro: 0.0 for macro in MacroType}
    for entry in entries:
        for macro, portions in entry.macro_portions().items():
            totals[macro] += portions
    return [
        MacroTotal(macro=macro, total_portions=total)
        for macro, total in totals.items()
        if total > 0
    ]


def calories_total(entries: Iterable[NutritionEntry]) -> float:
    return sum(entry.estimated_calories for entry in entries)


def pending_entries(entries: Iterable[NutritionEntry]) -> List[NutritionEntry]:
    """Pending entries, newest first."""
    pending = [entry for entry in entries if entry.is_pending]
    pending.sort(key=lambda entry: entry.timestamp, reverse=True)
    return pending


def pending_count(entries: Iterable[NutritionEntry]) -> int:
    return sum(1 for entry in entries if entry.is_pending)


# ---------------------------------------------------------------------------
# Daily health metrics
# ---------------------------------------------------------------------------

def recent_logs(logs: Iterable[DailyLog], limit: int = 30) -> List[DailyLog]:
    """The `limit` most recent logs, oldest first."""
    ordered = sorted(logs, key=lambda log: log.date)
    return ordered[-limit:] if limit > 0 else []


def health_summary(logs: Iterable[DailyLog], metric: HealthMetric) -> HealthMetricSummary:
    """
    Average and maximum of one DailyLog field, ignoring logs without a value.

    The maximum keeps the earliest log when several share the top value.
    """
    metric = HealthMetric(metric)
    samples = [
        (log.date, value)
        for log in logs
        if (value := log.metric_value(metric)) is not None
    ]
    if not samples:
        return HealthMetricSummary(metric=metric)

    average = sum(value for _, value in samples) / len(samples)
    best_date, best_value = samples[0]
    for day, value in samples[1:]:
        if value > best_value:
            best_date, best_value = day, value

    return HealthMetricSummary(
        metric=metric,
        average=average,
        maximum=MetricMaximum(date=best_date, value=best_value),
        sample_count=len(samples),
    )


def health_summaries(logs: Iterable[DailyLog]) -> List[HealthMetricSummary]:
    logs = list(logs)
    return [health_summary(logs, metric) for metric in HealthMetric]


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def build_report(
    daily_logs: Iterable[DailyLog],
    workouts: Iterable[WorkoutRecord],
    nutrition: Iterable[NutritionEntry],
    period: TimePeriod,
    offset: int,
    now: datetime,
    metric: MuscleMetric = MuscleMetric.SETS,
    window: Optional[DateWindow] = None,
) -> AnalyticsReport:
    """
    Aggregate every analytics section for one window.

    Args:
        daily_logs: All DailyLogs
        workouts: All WorkoutRecords
        nutrition: All NutritionEntries
        period: Window size
        offset: Window offset from now
        now: Reference time
        metric: Muscle-balance ranking metric
        window: Explicit range overriding period/offset resolution

    Returns:
        AnalyticsReport for the window
    """
    period = TimePeriod(period)
    if window is None:
        window = resolve_window(period, offset, now)

    nutrition = list(nutrition)
    window_workouts = filter_workouts(workouts, window)
    window_entries = filter_nutrition(nutrition, window)
    window_logs = filter_daily_logs(daily_logs, window)

    logger.debug(
        f"Report {period.value}/{offset}: {len(window_workouts)} workouts, "
        f"{len(window_entries)} meals, {len(window_logs)} daily logs"
    )

    return AnalyticsReport(
        period=period,
        offset=offset,
        label=relative_label(period, offset),
        window=window,
        metric=metric,
        muscle_balance=muscle_balance(window_workouts, metric),
        volume_trend=volume_trend(window_workouts),
        workout_summary=workout_summary(window_workouts),
        macros=macro_totals(window_entries),
        calories_total=calories_total(window_entries),
        pending_count=pending_count(nutrition),
        health=health_summaries(window_logs),
        has_workout_data=has_workout_data(window_workouts, window),
        has_nutrition_data=has_nutrition_data(window_entries, window),
    )
