"""
Integration tests for JournalService against in-memory repositories and a
temporary attachment directory.
"""

from datetime import date, datetime
from pathlib import Path

import pytest

from fitlog.core import ExerciseDraft, JournalService, SetGroup, WorkoutDraft
from fitlog.exceptions import NotFoundError, ValidationError
from fitlog.models import (
    EntryStatus, ExerciseType, HealthMetric, MediaAttachment, MediaKind,
    MuscleGroup, MuscleMetric, NutritionUnit, PENDING_DESCRIPTION, TimePeriod,
    TrainingType
)
from fitlog.storage import AttachmentStore


class UnwritableAttachments(AttachmentStore):
    """Attachment store whose disk is full."""

    async def save(self, content, kind=MediaKind.PHOTO):
        return None

    async def load(self, handle):
        return None

    async def delete(self, handle):
        return False

    def resolve(self, handle):
        return Path("/nonexistent") / handle


def strength_draft(timestamp, media=None, exercise_media=None):
    return WorkoutDraft(
        timestamp=timestamp,
        duration_minutes=60,
        exercises=[
            ExerciseDraft(
                exercise_name="Barbell Bench Press - Flat",
                muscle_group=MuscleGroup.CHEST,
                sets=[SetGroup(weight=20, reps=10, number_of_sets=3)],
                media=exercise_media or [],
            ),
            ExerciseDraft(
                exercise_name="Barbell Row",
                exercise_type=ExerciseType.FREE_WEIGHT,
                muscle_group=MuscleGroup.BACK,
                sets=[SetGroup(weight=30, reps=8, number_of_sets=2)],
            ),
        ],
        media=media or [],
    )


class TestDailyLogs:
    """Tests for the daily-log upsert and history."""

    @pytest.mark.asyncio
    async def test_one_log_per_day(self, journal, store):
        await journal.record_daily_log(datetime(2026, 3, 15, 7, 0), weight="70.5")
        updated = await journal.record_daily_log(datetime(2026, 3, 15, 21, 0), weight=70.2, steps="8500")

        assert await store.daily_logs.count() == 1
        assert updated.date == date(2026, 3, 15)
        assert updated.weight == 70.2
        assert updated.steps == 8500

    @pytest.mark.asyncio
    async def test_invalid_input_stores_nothing(self, journal, store):
        with pytest.raises(ValidationError) as exc_info:
            await journal.record_daily_log(date(2026, 3, 15), weight="seventy")
        assert exc_info.value.field == "weight"
        assert await store.daily_logs.count() == 0

    @pytest.mark.asyncio
    async def test_negative_steps_rejected(self, journal):
        with pytest.raises(ValidationError):
            await journal.record_daily_log(date(2026, 3, 15), steps=-10)

    @pytest.mark.asyncio
    async def test_sleep_duration_derived_from_clock_times(self, journal):
        log = await journal.record_daily_log(
            date(2026, 3, 15),
            sleep_time=datetime(2026, 3, 14, 23, 30),
            wake_up_time=datetime(2026, 3, 15, 7, 0),
        )
        assert log.sleep_duration_hours == 7.5

    @pytest.mark.asyncio
    async def test_entered_sleep_duration_wins(self, journal):
        log = await journal.record_daily_log(
            date(2026, 3, 15),
            sleep_duration_hours="6",
            sleep_time=datetime(2026, 3, 14, 23, 30),
            wake_up_time=datetime(2026, 3, 15, 7, 0),
        )
        assert log.sleep_duration_hours == 6

    @pytest.mark.asyncio
    async def test_today_and_history(self, journal, now):
        for day in (12, 15, 14):
            await journal.record_daily_log(date(2026, 3, day), steps=day * 1000)

        today = await journal.today_log(now)
        history = await journal.history_logs(now)
        assert today.steps == 15000
        assert [log.date.day for log in history] == [14, 12]

    @pytest.mark.asyncio
    async def test_recent_logs(self, store, attachments):
        journal = JournalService(store, attachments, recent_log_days=2)
        for day in (3, 1, 2):
            await journal.record_daily_log(date(2026, 3, day), weight=70 + day)

        recent = await journal.recent_logs()
        assert [log.date.day for log in recent] == [2, 3]

    @pytest.mark.asyncio
    async def test_delete(self, journal):
        log = await journal.record_daily_log(date(2026, 3, 15), weight=70)
        await journal.delete_daily_log(log.id)
        assert await journal.get_daily_log(date(2026, 3, 15)) is None
        with pytest.raises(NotFoundError):
            await journal.delete_daily_log(log.id)


class TestWorkouts:
    """Tests for committing, editing and deleting workouts."""

    @pytest.mark.asyncio
    async def test_log_workout(self, journal, now):
        record = await journal.log_workout(strength_draft(now))
        stored = await journal.get_workout(record.id)
        assert stored.total_volume == 1080
        assert [e.order_index for e in stored.sorted_exercises] == [0, 1]

    @pytest.mark.asyncio
    async def test_invalid_draft_not_stored(self, journal, store, now):
        draft = WorkoutDraft(timestamp=now, duration_minutes=0, training_type=TrainingType.AEROBIC)
        with pytest.raises(ValidationError):
            await journal.log_workout(draft)
        assert await store.workouts.count() == 0

    @pytest.mark.asyncio
    async def test_delete_releases_media(self, journal, attachments, now):
        media = await journal.save_media([(b"photo", MediaKind.PHOTO), (b"video", MediaKind.VIDEO)])
        record = await journal.log_workout(strength_draft(now, media=media[:1], exercise_media=media[1:]))
        assert sorted(record.attachment_handles()) == sorted(m.handle for m in media)

        await journal.delete_workout(record.id)
        for item in media:
            assert not attachments.resolve(item.handle).exists()
        with pytest.raises(NotFoundError):
            await journal.get_workout(record.id)

    @pytest.mark.asyncio
    async def test_aerobic_commit_releases_exercise_media(self, journal, attachments, now):
        media = await journal.save_media([(b"clip", MediaKind.VIDEO)])
        draft = strength_draft(now, exercise_media=media)
        draft.training_type = TrainingType.AEROBIC
        record = await journal.log_workout(draft)

        assert record.exercise_details == []
        assert not attachments.resolve(media[0].handle).exists()

    @pytest.mark.asyncio
    async def test_update_releases_dropped_media(self, journal, attachments, now):
        kept, dropped = await journal.save_media([(b"keep", MediaKind.PHOTO), (b"drop", MediaKind.PHOTO)])
        record = await journal.log_workout(strength_draft(now, media=[kept, dropped]))

        draft = WorkoutDraft.from_record(record)
        draft.media = [kept]
        draft.exercises[0].sets = [SetGroup(weight=25, reps=10, number_of_sets=3)]
        updated = await journal.update_workout(record.id, draft)

        assert updated.id == record.id
        assert updated.total_volume == 750 + 480
        assert attachments.resolve(kept.handle).exists()
        assert not attachments.resolve(dropped.handle).exists()

    @pytest.mark.asyncio
    async def test_update_unknown_workout(self, journal, now):
        with pytest.raises(NotFoundError):
            await journal.update_workout("missing", strength_draft(now))

    @pytest.mark.asyncio
    async def test_list_newest_first(self, journal):
        older = await journal.log_workout(strength_draft(datetime(2026, 3, 10, 18)))
        newer = await journal.log_workout(strength_draft(datetime(2026, 3, 14, 18)))
        assert [w.id for w in await journal.list_workouts()] == [newer.id, older.id]


class TestNutrition:
    """Tests for meal entries and the pending-photo flow."""

    @pytest.mark.asyncio
    async def test_hand_portion_meal(self, journal, now):
        entry = await journal.log_meal(
            now, meal_type="lunch", description="Chicken rice",
            protein_portions=1, carb_portions=1, veg_portions=1, fat_portions=0.5,
        )
        assert entry.unit is NutritionUnit.HAND_PORTION
        assert entry.estimated_calories == 315
        assert entry.status is EntryStatus.COMPLETE

    @pytest.mark.asyncio
    async def test_hand_portion_with_photo_only(self, journal, now):
        entry = await journal.log_meal(now, protein_portions=2, photos=[b"plate"])
        assert entry.entry_description == "Eating out"
        assert len(entry.photo_handles) == 1

    @pytest.mark.asyncio
    async def test_hand_portion_needs_description_or_photo(self, journal, now):
        with pytest.raises(ValidationError):
            await journal.log_meal(now, protein_portions=1)

    @pytest.mark.asyncio
    async def test_amount_mode_with_calories_per_unit(self, journal, now):
        entry = await journal.log_meal(
            now, description="Greek yogurt", amount="2", unit=NutritionUnit.SERVING,
            calories_per_unit="150",
        )
        assert entry.amount == 2
        assert entry.manual_calories == 300
        assert entry.estimated_calories == 300

    @pytest.mark.asyncio
    async def test_calories_per_unit_and_total_conflict(self, journal, store, now):
        with pytest.raises(ValidationError) as exc_info:
            await journal.log_meal(
                now, description="Greek yogurt", amount="2",
                calories_per_unit="150", manual_calories="500",
            )
        assert exc_info.value.field == "calories_per_unit"
        assert await store.nutrition.count() == 0

    @pytest.mark.asyncio
    async def test_photo_only_meal_needs_a_stored_photo(self, store, now):
        journal = JournalService(store, UnwritableAttachments())
        with pytest.raises(ValidationError):
            await journal.log_meal(now, protein_portions=2, photos=[b"plate"])
        assert await store.nutrition.count() == 0

    @pytest.mark.asyncio
    async def test_described_meal_kept_when_photos_fail(self, store, now):
        journal = JournalService(store, UnwritableAttachments())
        entry = await journal.log_meal(now, description="Ramen", protein_portions=1, photos=[b"bowl"])
        assert entry.photo_handles == []
        assert await store.nutrition.count() == 1

    @pytest.mark.asyncio
    async def test_calorie_unit(self, journal, now):
        entry = await journal.log_meal(now, description="Latte", amount=180, unit=NutritionUnit.CALORIE)
        assert entry.estimated_calories == 180

    @pytest.mark.asyncio
    async def test_amount_mode_validation(self, journal, store, now):
        with pytest.raises(ValidationError):
            await journal.log_meal(now, description="  ", amount=1)
        with pytest.raises(ValidationError):
            await journal.log_meal(now, description="Toast", amount="two")
        assert await store.nutrition.count() == 0

    @pytest.mark.asyncio
    async def test_quick_save_then_complete(self, journal, now):
        pending = await journal.quick_save_photos([b"one", b"two"], now, meal_type="dinner")
        assert pending.status is EntryStatus.PENDING
        assert pending.entry_description == PENDING_DESCRIPTION
        assert len(pending.photo_handles) == 2
        assert await journal.pending_count() == 1

        completed = await journal.complete_entry(
            pending.id, "Hotpot",
            protein_portions=1, carb_portions=1, veg_portions=1, fat_portions=0.5,
        )
        assert completed.status is EntryStatus.COMPLETE
        assert completed.unit is NutritionUnit.HAND_PORTION
        assert completed.manual_calories == 315
        assert completed.photo_handles == pending.photo_handles
        assert await journal.pending_count() == 0

    @pytest.mark.asyncio
    async def test_complete_with_manual_calories(self, journal, now):
        pending = await journal.quick_save_photos([b"one"], now)
        completed = await journal.complete_entry(pending.id, "Burger", protein_portions=2, manual_calories="850")
        assert completed.estimated_calories == 850

    @pytest.mark.asyncio
    async def test_complete_requires_description(self, journal, now):
        pending = await journal.quick_save_photos([b"one"], now)
        with pytest.raises(ValidationError):
            await journal.complete_entry(pending.id, " ")
        assert (await journal.pending_entries())[0].id == pending.id

    @pytest.mark.asyncio
    async def test_complete_unknown_entry(self, journal):
        with pytest.raises(NotFoundError):
            await journal.complete_entry("missing", "Soup")

    @pytest.mark.asyncio
    async def test_quick_save_needs_photos(self, journal, now):
        with pytest.raises(ValidationError):
            await journal.quick_save_photos([], now)

    @pytest.mark.asyncio
    async def test_quick_save_when_no_photo_is_stored(self, store, now):
        journal = JournalService(store, UnwritableAttachments())
        with pytest.raises(ValidationError):
            await journal.quick_save_photos([b"one", b"two"], now)
        assert await store.nutrition.count() == 0
        assert await journal.pending_count() == 0

    @pytest.mark.asyncio
    async def test_delete_releases_photos(self, journal, attachments, now):
        entry = await journal.quick_save_photos([b"one", b"two"], now)
        paths = [attachments.resolve(handle) for handle in entry.photo_handles]
        assert all(path.exists() for path in paths)

        await journal.delete_nutrition_entry(entry.id)
        assert not any(path.exists() for path in paths)
        assert await journal.list_nutrition() == []


class TestJournalAnalytics:
    """Tests for reports and scroll bounds through the service."""

    @pytest.mark.asyncio
    async def test_report(self, journal, now):
        await journal.record_daily_log(now, weight=70.5, steps=8500)
        await journal.log_workout(strength_draft(now.replace(hour=9)))
        await journal.log_meal(now, description="Lunch", protein_portions=1, carb_portions=1,
                               veg_portions=1, fat_portions=0.5)
        await journal.quick_save_photos([b"later"], now)

        report = await journal.report(TimePeriod.DAY, 0, now, MuscleMetric.VOLUME)
        health = {s.metric: s for s in report.health}

        assert report.label == "today"
        assert report.workout_summary.total_volume == 1080
        assert report.muscle_balance[0].muscle_group is MuscleGroup.CHEST
        assert report.calories_total == 315
        assert report.pending_count == 1
        assert health[HealthMetric.WEIGHT].average == 70.5
        assert health[HealthMetric.STEPS].maximum.value == 8500

    @pytest.mark.asyncio
    async def test_report_for_empty_window(self, journal, now):
        await journal.log_workout(strength_draft(now))
        report = await journal.report(TimePeriod.WEEK, -2, now)
        assert report.has_workout_data is False
        assert report.muscle_balance == []

    @pytest.mark.asyncio
    async def test_offset_range(self, journal, now):
        assert (await journal.offset_range(TimePeriod.DAY, now)).lower == 0

        await journal.log_meal(datetime(2026, 3, 10, 12), description="Toast", amount=1)
        bounds = await journal.offset_range(TimePeriod.DAY, now)
        assert bounds.lower == -5
        assert bounds.upper == 3


class TestJournalService:
    """Construction from configuration."""

    def test_create_journal(self, tmp_path):
        from fitlog.config import Settings
        from fitlog.main import create_journal

        config = Settings(local_storage_path=str(tmp_path / "journal"), log_file_enabled=False, recent_log_days=7)
        journal = create_journal(config, configure_logging=False)
        assert isinstance(journal, JournalService)
        assert journal.recent_log_days == 7
        assert (tmp_path / "journal").is_dir()

    def test_media_attachment_defaults(self):
        assert MediaAttachment(handle="x.jpg").kind is MediaKind.PHOTO
