"""
Enumerations shared by the journal entities and analytics.
"""

from enum import Enum


class TrainingType(str, Enum):
    """Strength (anaerobic) vs. cardio (aerobic) session."""
    AEROBIC = "aerobic"
    ANAEROBIC = "anaerobic"


class ExerciseType(str, Enum):
    MACHINE = "machine"
    FREE_WEIGHT = "free_weight"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    OTHER = "other"


class NutritionUnit(str, Enum):
    SERVING = "serving"
    WEIGHT_GRAMS = "weight_grams"
    CALORIE = "calorie"
    HAND_PORTION = "hand_portion"


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class MacroType(str, Enum):
    """Macro categories of the hand-portion rule."""
    PROTEIN = "protein"
    CARBS = "carbs"
    VEGETABLES = "vegetables"
    FATS = "fats"

    @property
    def unit_name(self) -> str:
        """Body-part unit one portion is measured in."""
        return {
            MacroType.PROTEIN: "palm",
            MacroType.CARBS: "cupped hand",
            MacroType.VEGETABLES: "fist",
            MacroType.FATS: "thumb",
        }[self]


class EntryStatus(str, Enum):
    COMPLETE = "complete"
    PENDING = "pending"  # photo saved, portions not filled in yet


class MediaKind(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


class TimePeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class MuscleMetric(str, Enum):
    """Ranking metric for the muscle-balance chart."""
    SETS = "sets"
    VOLUME = "volume"


class HealthMetric(str, Enum):
    """DailyLog fields summarised by the health carousel."""
    WEIGHT = "weight"
    STEPS = "steps"
    RESTING_HEART_RATE = "resting_heart_rate"
    SLEEP_DURATION = "sleep_duration_hours"
