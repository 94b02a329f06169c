"""
Exercise Catalog - suggested exercise names per muscle group and equipment.

Static data. Every list ends with the CUSTOM_EXERCISE catch-all so the user
can always type a name of their own.
"""

from typing import Dict, List, Tuple

from ..models.enums import ExerciseType, MuscleGroup

CUSTOM_EXERCISE = "Other"

_FREE = ExerciseType.FREE_WEIGHT
_MACHINE = ExerciseType.MACHINE

EXERCISE_CATALOG: Dict[Tuple[MuscleGroup, ExerciseType], List[str]] = {
    (MuscleGroup.CHEST, _FREE): [
        "Barbell Bench Press - Flat",
        "Barbell Bench Press - Incline",
        "Barbell Bench Press - Decline",
        "Dumbbell Bench Press - Flat",
        "Dumbbell Bench Press - Incline",
        "Dumbbell Bench Press - Decline",
        "Dumbbell Fly",
        "Parallel Bar Dip",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.BACK, _FREE): [
        "Deadlift - Conventional",
        "Deadlift - Sumo",
        "Pull-up",
        "Chin-up",
        "Barbell Row",
        "One-arm Dumbbell Row",
        "Dumbbell Pullover",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.LEGS, _FREE): [
        "Barbell Squat - Back",
        "Barbell Squat - Front",
        "Goblet Squat",
        "Romanian Deadlift (RDL)",
        "Lunge - Walking",
        "Lunge - Reverse",
        "Bulgarian Split Squat",
        "Standing Calf Raise",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.SHOULDERS, _FREE): [
        "Barbell Shoulder Press",
        "Military Press",
        "Dumbbell Shoulder Press",
        "Dumbbell Lateral Raise",
        "Dumbbell Front Raise",
        "Bent-over Reverse Fly",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.ARMS, _FREE): [
        "Barbell Curl",
        "Dumbbell Curl",
        "Hammer Curl",
        "Close-grip Bench Press",
        "French Press",
        "Skull Crusher",
        "Overhead Triceps Extension",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.CORE, _FREE): [
        "Weighted Plank",
        "Russian Twist",
        "Hanging Leg Raise",
        "Weighted Crunch",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.CHEST, _MACHINE): [
        "Seated Chest Press",
        "Pec Deck Fly",
        "Cable Crossover",
        "Smith Machine Bench Press",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.BACK, _MACHINE): [
        "Lat Pulldown",
        "Seated Cable Row",
        "Assisted Pull-up Machine",
        "Straight-arm Cable Pulldown",
        "T-bar Row",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.LEGS, _MACHINE): [
        "Leg Press",
        "Seated Leg Extension",
        "Lying Leg Curl",
        "Seated Leg Curl",
        "Hip Abduction Machine",
        "Hip Adduction Machine",
        "Smith Machine Squat",
        "Leg Press Calf Raise",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.SHOULDERS, _MACHINE): [
        "Machine Shoulder Press",
        "Reverse Pec Deck",
        "Cable Lateral Raise",
        "Cable Face Pull",
        "Smith Machine Shoulder Press",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.ARMS, _MACHINE): [
        "Preacher Curl Machine",
        "Cable Curl",
        "Cable Triceps Pushdown",
        "Machine Triceps Extension",
        CUSTOM_EXERCISE,
    ],
    (MuscleGroup.CORE, _MACHINE): [
        "Ab Crunch Machine",
        "Rotary Torso Machine",
        "Cable Crunch",
        CUSTOM_EXERCISE,
    ],
}


def exercises_for(muscle_group: MuscleGroup, exercise_type: ExerciseType) -> List[str]:
    """
    Suggested exercise names for a muscle group and equipment type.

    Returns a fresh list; MuscleGroup.OTHER yields only the catch-all entry.
    """
    muscle_group = MuscleGroup(muscle_group)
    if muscle_group is MuscleGroup.OTHER:
        return [CUSTOM_EXERCISE]
    return list(EXERCISE_CATALOG[(muscle_group, ExerciseType(exercise_type))])
