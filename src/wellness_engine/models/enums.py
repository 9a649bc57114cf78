"""Enumerations and domain constants for the wellness engine.

Thresholds that come from a published protocol cite their source.
"""

from enum import IntEnum, auto


class FastState(IntEnum):
    """Lifecycle of a single fast."""

    ACTIVE = auto()
    COMPLETED = auto()
    CANCELLED = auto()


class FastPreset(IntEnum):
    """Time-restricted eating schedules (fasting hours : eating hours)."""

    SIXTEEN_EIGHT = auto()
    EIGHTEEN_SIX = auto()
    TWENTY_FOUR = auto()
    TWENTY_THREE_ONE = auto()
    CUSTOM = auto()


class FastingPhase(IntEnum):
    """Metabolic stages of a fast, ordered by elapsed time.

    Ordering matters: a later phase always compares greater than an
    earlier one, so ``phase_for`` can be checked for monotonicity.
    """

    FED = auto()
    EARLY_FASTING = auto()
    FASTING_STATE = auto()
    FAT_BURNING = auto()
    KETOSIS = auto()
    DEEP_KETOSIS = auto()


class MuscleGroup(IntEnum):
    """Primary muscle group trained by an exercise."""

    CHEST = auto()
    BACK = auto()
    SHOULDERS = auto()
    LEGS = auto()
    ARMS = auto()
    CORE = auto()
    FULL_BODY = auto()


class TemplateColor(IntEnum):
    BLUE = auto()
    ORANGE = auto()
    GREEN = auto()
    PURPLE = auto()
    RED = auto()


class SetStatus(IntEnum):
    """Outcome of a single working set.

    SHORT is a set the lifter finished with fewer reps than prescribed:
    the reps count toward volume but the set counts as a failure for
    progression purposes.
    """

    PENDING = auto()
    COMPLETED = auto()
    SHORT = auto()
    FAILED = auto()


class SessionState(IntEnum):
    """Workout session controller states."""

    NOT_STARTED = auto()
    ACTIVE = auto()
    RESTING = auto()
    COMPLETE = auto()
    FINISHED = auto()
    CANCELLED = auto()


class HabitFrequency(IntEnum):
    DAILY = auto()
    SPECIFIC_DAYS = auto()


class Weekday(IntEnum):
    """ISO weekday numbering (1=Monday, 7=Sunday), matches date.isoweekday()."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class HabitColor(IntEnum):
    RED = auto()
    ORANGE = auto()
    YELLOW = auto()
    GREEN = auto()
    MINT = auto()
    TEAL = auto()
    CYAN = auto()
    BLUE = auto()
    INDIGO = auto()
    PURPLE = auto()
    PINK = auto()


# ---------------------------------------------------------------------------
# Fasting constants
# ---------------------------------------------------------------------------

# Phase entry thresholds in elapsed hours. Anton et al. (2018), Flipping the
# metabolic switch, Obesity 26(2):254-268
FASTING_PHASE_START_HOURS = {
    FastingPhase.FED: 0.0,
    FastingPhase.EARLY_FASTING: 4.0,
    FastingPhase.FASTING_STATE: 8.0,
    FastingPhase.FAT_BURNING: 12.0,
    FastingPhase.KETOSIS: 18.0,
    FastingPhase.DEEP_KETOSIS: 24.0,
}

# Nominal end of the open-ended final phase, used only for time-in-phase
FINAL_PHASE_END_HOURS = 48.0

FASTING_PHASE_NAMES = {
    FastingPhase.FED: "Fed State",
    FastingPhase.EARLY_FASTING: "Early Fasting",
    FastingPhase.FASTING_STATE: "Fasting State",
    FastingPhase.FAT_BURNING: "Fat Burning",
    FastingPhase.KETOSIS: "Ketosis",
    FastingPhase.DEEP_KETOSIS: "Deep Ketosis",
}

FASTING_PHASE_DESCRIPTIONS = {
    FastingPhase.FED: "Your body is digesting your last meal",
    FastingPhase.EARLY_FASTING: "Insulin levels dropping, blood sugar stabilizing",
    FastingPhase.FASTING_STATE: "Glycogen stores depleting, fat burning begins",
    FastingPhase.FAT_BURNING: "Entering ketosis, autophagy starting",
    FastingPhase.KETOSIS: "Full ketosis, significant autophagy",
    FastingPhase.DEEP_KETOSIS: "Maximum autophagy, HGH boost",
}

FASTING_PHASE_BENEFITS = {
    FastingPhase.FED: ("Nutrient absorption", "Energy from food"),
    FastingPhase.EARLY_FASTING: ("Insulin sensitivity improving", "Blood sugar regulation"),
    FastingPhase.FASTING_STATE: ("Fat mobilization starting", "Mental clarity improving"),
    FastingPhase.FAT_BURNING: (
        "Ketone production",
        "Autophagy activation",
        "Increased fat burning",
    ),
    FastingPhase.KETOSIS: ("Full fat adaptation", "Cellular cleanup", "Reduced inflammation"),
    FastingPhase.DEEP_KETOSIS: (
        "Peak autophagy",
        "HGH increase",
        "Enhanced cellular repair",
        "Immune cell renewal",
    ),
}

FAST_PRESET_HOURS = {
    FastPreset.SIXTEEN_EIGHT: 16.0,
    FastPreset.EIGHTEEN_SIX: 18.0,
    FastPreset.TWENTY_FOUR: 20.0,
    FastPreset.TWENTY_THREE_ONE: 23.0,
    FastPreset.CUSTOM: 16.0,  # Starting value for a custom duration
}

FAST_PRESET_LABELS = {
    FastPreset.SIXTEEN_EIGHT: "16:8",
    FastPreset.EIGHTEEN_SIX: "18:6",
    FastPreset.TWENTY_FOUR: "20:4",
    FastPreset.TWENTY_THREE_ONE: "23:1",
    FastPreset.CUSTOM: "Custom",
}

# ---------------------------------------------------------------------------
# Progressive overload: StrongLifts 5x5 linear progression
# ---------------------------------------------------------------------------
FAILURE_DELOAD_THRESHOLD = 3  # Deload after 3 consecutive failed sessions
DELOAD_FACTOR = 0.90  # Drop 10% of the working weight
DELOAD_ROUNDING = 5.0  # Round the deloaded weight to the nearest 5 lb

# Beginner starting weights (lb), empty bar for most lifts
DEFAULT_SEED_WEIGHT = 45.0
BUILT_IN_SEED_WEIGHTS = {
    "squat": 45.0,
    "bench_press": 45.0,
    "barbell_row": 65.0,
    "overhead_press": 45.0,
    "deadlift": 95.0,
}

# Defaults for user-defined exercises
CUSTOM_EXERCISE_DEFAULT_SETS = 3
CUSTOM_EXERCISE_DEFAULT_REPS = 10
DEFAULT_WEIGHT_INCREMENT = 5.0

# ---------------------------------------------------------------------------
# Workout session
# ---------------------------------------------------------------------------
DEFAULT_REST_SECONDS = 180  # 3 min between heavy compound sets
REST_TICK_SECONDS = 1

# Standard Olympic plate sizes (lb), heaviest first
STANDARD_PLATES = (45.0, 35.0, 25.0, 10.0, 5.0, 2.5)
DEFAULT_BARBELL_WEIGHT = 45.0
