"""
Journal Service - the single commit point for daily logs, workouts and meals.

The presentation layer edits drafts and raw form values; this service turns
them into entities, writes them to the repositories and keeps the attachment
store in step (blobs of deleted or replaced records are released).
"""

from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence, Tuple
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..models import (
    AnalyticsReport, DailyLog, EntryStatus, MediaAttachment, MediaKind,
    MuscleMetric, NutritionEntry, NutritionUnit, OffsetRange, PENDING_DESCRIPTION,
    TimePeriod, WorkoutRecord, sleep_hours_between
)
from ..models.conversion import calories_from_servings
from ..models.nutrition import DEFAULT_HAND_PORTION_DESCRIPTION, DEFAULT_MEAL_TYPE
from ..storage import AttachmentStore, JournalStore
from . import analytics
from .drafts import WorkoutDraft, parse_float, parse_optional_float, parse_optional_int
from .logging_config import get_logger
from .time_window import offset_range

logger = get_logger(__name__, component="journal")


class JournalService:
    """
    Creates, edits and deletes journal records.

    Every mutation is one atomic repository call; a form that is abandoned
    simply never reaches this service.
    """

    def __init__(self, store: JournalStore, attachments: AttachmentStore, recent_log_days: int = 30):
        """
        Args:
            store: The three record repositories
            attachments: Blob store for photos and videos
            recent_log_days: How many DailyLogs recent_logs() returns
        """
        self.store = store
        self.attachments = attachments
        self.recent_log_days = recent_log_days

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    async def save_media(self, items: Iterable[Tuple[bytes, MediaKind]]) -> List[MediaAttachment]:
        """
        Store blobs and return their attachments, in input order.
        Blobs that fail to save are skipped.
        """
        saved: List[MediaAttachment] = []
        for content, kind in items:
            handle = await self.attachments.save(content, kind)
            if handle is None:
                logger.warning(f"Skipping {MediaKind(kind).value} that could not be saved")
                continue
            saved.append(MediaAttachment(handle=handle, kind=kind))
        return saved

    async def release(self, handles: Iterable[str]) -> int:
        """Delete blobs; returns how many were actually removed."""
        released = 0
        for handle in handles:
            if await self.attachments.delete(handle):
                released += 1
            else:
                logger.warning(f"Attachment {handle} was already gone")
        return released

    # ------------------------------------------------------------------
    # Daily logs
    # ------------------------------------------------------------------

    async def get_daily_log(self, day: date) -> Optional[DailyLog]:
        day = day.date() if isinstance(day, datetime) else day
        return await self.store.daily_logs.first(lambda log: log.date == day)

    async def record_daily_log(
        self,
        day: date,
        weight: Any = None,
        sleep_duration_hours: Any = None,
        wake_up_time: Optional[datetime] = None,
        sleep_time: Optional[datetime] = None,
        steps: Any = None,
        resting_heart_rate: Any = None,
    ) -> DailyLog:
        """
        Create the day's log or overwrite the existing one's fields.

        Numeric fields accept numbers or form text; blank text clears a field.
        With no sleep duration but both clock times, the duration is derived.

        Raises:
            ValidationError: On non-numeric or negative input; nothing is stored
        """
        fields = {
            "weight": parse_optional_float(weight, "weight"),
            "sleep_duration_hours": parse_optional_float(sleep_duration_hours, "sleep_duration_hours"),
            "wake_up_time": wake_up_time,
            "sleep_time": sleep_time,
            "steps": parse_optional_int(steps, "steps"),
            "resting_heart_rate": parse_optional_int(resting_heart_rate, "resting_heart_rate"),
        }
        if fields["sleep_duration_hours"] is None and sleep_time and wake_up_time:
            fields["sleep_duration_hours"] = sleep_hours_between(sleep_time, wake_up_time)

        existing = await self.get_daily_log(day)
        if existing is None:
            log = DailyLog(date=day, **fields)
            await self.store.daily_logs.insert(log)
            logger.info(f"Created daily log for {log.date.isoformat()}")
            return log

        for name, value in fields.items():
            setattr(existing, name, value)
        await self.store.daily_logs.update(existing)
        logger.info(f"Updated daily log for {existing.date.isoformat()}")
        return existing

    async def today_log(self, now: datetime) -> Optional[DailyLog]:
        return await self.get_daily_log(now.date())

    async def history_logs(self, now: datetime) -> List[DailyLog]:
        """All logs except today's, newest first."""
        today = now.date()
        return await self.store.daily_logs.query(
            lambda log: log.date != today, sort_key="date", descending=True
        )

    async def recent_logs(self) -> List[DailyLog]:
        """The most recent logs for the health carousel, oldest first."""
        logs = await self.store.daily_logs.query(sort_key="date")
        return analytics.recent_logs(logs, self.recent_log_days)

    async def delete_daily_log(self, log_id: str) -> DailyLog:
        removed = await self.store.daily_logs.delete(log_id)
        logger.info(f"Deleted daily log for {removed.date.isoformat()}")
        return removed

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    async def log_workout(self, draft: WorkoutDraft) -> WorkoutRecord:
        """
        Commit a new workout.

        Raises:
            ValidationError: If the draft cannot be saved
        """
        record = draft.to_record()
        await self.store.workouts.insert(record)
        await self.release(self._draft_handles(draft) - set(record.attachment_handles()))
        logger.info(
            f"Logged {record.training_type.value} workout {record.id}: "
            f"{len(record.exercise_details)} exercises, {record.total_volume:.0f} kg"
        )
        return record

    async def update_workout(self, workout_id: str, draft: WorkoutDraft) -> WorkoutRecord:
        """
        Replace a workout's content with the draft, keeping its id.
        Attachments the new version no longer references are released.

        Raises:
            NotFoundError: If the workout does not exist
            ValidationError: If the draft cannot be saved
        """
        previous = await self.store.workouts.get(workout_id)
        record = draft.to_record(record_id=workout_id)
        await self.store.workouts.update(record)

        kept = set(record.attachment_handles())
        dropped = (set(previous.attachment_handles()) | self._draft_handles(draft)) - kept
        await self.release(sorted(dropped))
        logger.info(f"Updated workout {workout_id}")
        return record

    async def delete_workout(self, workout_id: str) -> WorkoutRecord:
        """Delete a workout with all its exercises, sets and media."""
        removed = await self.store.workouts.delete(workout_id)
        await self.release(removed.attachment_handles())
        logger.info(f"Deleted workout {workout_id}")
        return removed

    async def get_workout(self, workout_id: str) -> WorkoutRecord:
        return await self.store.workouts.get(workout_id)

    async def list_workouts(self, descending: bool = True) -> List[WorkoutRecord]:
        return await self.store.workouts.query(sort_key="timestamp", descending=descending)

    @staticmethod
    def _draft_handles(draft: WorkoutDraft) -> set:
        handles = {item.handle for item in draft.media}
        for exercise in draft.exercises:
            handles.update(item.handle for item in exercise.media)
        return handles

    # ------------------------------------------------------------------
    # Nutrition
    # ------------------------------------------------------------------

    async def log_meal(
        self,
        timestamp: datetime,
        meal_type: str = DEFAULT_MEAL_TYPE,
        description: str = "",
        amount: Any = 0,
        unit: NutritionUnit = NutritionUnit.SERVING,
        protein_portions: Optional[float] = None,
        carb_portions: Optional[float] = None,
        veg_portions: Optional[float] = None,
        fat_portions: Optional[float] = None,
        calories_per_unit: Any = None,
        manual_calories: Any = None,
        note: Optional[str] = None,
        photos: Sequence[bytes] = (),
    ) -> NutritionEntry:
        """
        Commit a complete meal entry.

        Hand-portion mode (any portion given) needs a description or a photo and
        falls back to a generic description. Amount mode needs a description and
        a numeric amount; a per-unit calorie figure is multiplied by the amount
        and stored as the manual calorie total, so it cannot be combined with
        an explicit manual total. A photo-only entry is rejected when none of
        its photos could be stored.

        Raises:
            ValidationError: If the form cannot be saved
        """
        portions = dict(
            protein_portions=parse_optional_float(protein_portions, "protein_portions"),
            carb_portions=parse_optional_float(carb_portions, "carb_portions"),
            veg_portions=parse_optional_float(veg_portions, "veg_portions"),
            fat_portions=parse_optional_float(fat_portions, "fat_portions"),
        )
        hand_portion = any(value is not None for value in portions.values())
        description = (description or "").strip()
        manual = parse_optional_float(manual_calories, "manual_calories")

        photo_only = hand_portion and not description
        if hand_portion:
            if photo_only and not photos:
                raise ValidationError("Add a description or a photo", field="entry_description")
            description = description or DEFAULT_HAND_PORTION_DESCRIPTION
            unit = NutritionUnit.HAND_PORTION
            amount_value = 0.0
        else:
            if not description:
                raise ValidationError("Description is required", field="entry_description")
            amount_value = parse_float(amount, "amount")
            per_unit = parse_optional_float(calories_per_unit, "calories_per_unit")
            if per_unit is not None:
                if manual is not None:
                    raise ValidationError(
                        "Give either a calorie total or calories per unit", field="calories_per_unit"
                    )
                manual = calories_from_servings(per_unit, amount_value)

        try:
            entry = NutritionEntry(
                timestamp=timestamp,
                meal_type=meal_type,
                entry_description=description,
                amount=amount_value,
                unit=unit,
                manual_calories=manual,
                note=note or None,
                status=EntryStatus.COMPLETE,
                **portions,
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        saved = await self.save_media((photo, MediaKind.PHOTO) for photo in photos)
        if photo_only and not saved:
            raise ValidationError("None of the photos could be saved", field="photos")
        entry.photo_handles = [item.handle for item in saved]
        await self.store.nutrition.insert(entry)
        logger.info(f"Logged {meal_type} entry {entry.id}: {entry.estimated_calories:.0f} kcal")
        return entry

    async def quick_save_photos(
        self,
        photos: Sequence[bytes],
        timestamp: datetime,
        meal_type: str = DEFAULT_MEAL_TYPE,
    ) -> NutritionEntry:
        """
        Save photos now and leave the entry pending until portions are filled in.

        Raises:
            ValidationError: If no photo is given or none could be stored
        """
        if not photos:
            raise ValidationError("Quick save needs at least one photo", field="photos")

        saved = await self.save_media((photo, MediaKind.PHOTO) for photo in photos)
        if not saved:
            raise ValidationError("None of the photos could be saved", field="photos")
        entry = NutritionEntry(
            timestamp=timestamp,
            meal_type=meal_type,
            entry_description=PENDING_DESCRIPTION,
            photo_handles=[item.handle for item in saved],
            status=EntryStatus.PENDING,
        )
        await self.store.nutrition.insert(entry)
        logger.info(f"Quick-saved pending entry {entry.id} with {len(saved)} photos")
        return entry

    async def complete_entry(
        self,
        entry_id: str,
        description: str,
        protein_portions: Optional[float] = None,
        carb_portions: Optional[float] = None,
        veg_portions: Optional[float] = None,
        fat_portions: Optional[float] = None,
        manual_calories: Any = None,
        note: Optional[str] = None,
    ) -> NutritionEntry:
        """
        Fill in a pending entry's portions and mark it complete.

        Without an explicit calorie total, the portion estimate is stored as
        the entry's manual calories.

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: If the description is blank or a number is invalid
        """
        description = (description or "").strip()
        if not description:
            raise ValidationError("Description is required", field="entry_description")
        values = dict(
            entry_description=description,
            protein_portions=parse_optional_float(protein_portions, "protein_portions"),
            carb_portions=parse_optional_float(carb_portions, "carb_portions"),
            veg_portions=parse_optional_float(veg_portions, "veg_portions"),
            fat_portions=parse_optional_float(fat_portions, "fat_portions"),
            manual_calories=parse_optional_float(manual_calories, "manual_calories"),
            note=note or None,
            unit=NutritionUnit.HAND_PORTION,
            status=EntryStatus.COMPLETE,
        )

        entry = await self.store.nutrition.get(entry_id)
        entry = entry.model_copy(update=values)
        if entry.manual_calories is None:
            # Freeze the portion estimate as the entry's calorie total
            entry.manual_calories = entry.estimated_calories
        await self.store.nutrition.update(entry)
        logger.info(f"Completed entry {entry_id}: {entry.estimated_calories:.0f} kcal")
        return entry

    async def delete_nutrition_entry(self, entry_id: str) -> NutritionEntry:
        """Delete an entry and release its photos."""
        removed = await self.store.nutrition.delete(entry_id)
        await self.release(removed.photo_handles)
        logger.info(f"Deleted nutrition entry {entry_id}")
        return removed

    async def list_nutrition(self, descending: bool = True) -> List[NutritionEntry]:
        return await self.store.nutrition.query(sort_key="timestamp", descending=descending)

    async def pending_entries(self) -> List[NutritionEntry]:
        return await self.store.nutrition.query(
            lambda entry: entry.is_pending, sort_key="timestamp", descending=True
        )

    async def pending_count(self) -> int:
        return await self.store.nutrition.count(lambda entry: entry.is_pending)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def offset_range(self, period: TimePeriod, now: datetime) -> OffsetRange:
        earliest = await self.store.earliest_record_date()
        return offset_range(period, earliest, now)

    async def report(
        self,
        period: TimePeriod,
        offset: int,
        now: datetime,
        metric: MuscleMetric = MuscleMetric.SETS,
    ) -> AnalyticsReport:
        """Fetch every collection and aggregate the requested window."""
        return analytics.build_report(
            daily_logs=await self.store.daily_logs.query(sort_key="date"),
            workouts=await self.store.workouts.query(sort_key="timestamp"),
            nutrition=await self.store.nutrition.query(sort_key="timestamp"),
            period=period,
            offset=offset,
            now=now,
            metric=metric,
        )
