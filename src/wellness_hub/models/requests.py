"""Generation request configurations submitted from the generator forms."""

from dataclasses import dataclass, field

from .nutrition import DietType
from .workout import Difficulty, SplitType, WorkoutType

DAYS_PER_WEEK_RANGE = (1, 7)
WORKOUT_DURATION_RANGE = (15, 120)
CALORIE_RANGE = (1200, 5000)
MEALS_PER_DAY_RANGE = (3, 6)
PREPARATION_TIME_RANGE = (15, 120)


def _check_range(name: str, value: int, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be a whole number")
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


def _clean_list(values: list[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


@dataclass
class WorkoutRequest:
    """Parameters for a weekly workout plan."""

    days_per_week: int = 3
    type: WorkoutType = WorkoutType.STRENGTH
    split_type: SplitType = SplitType.FULL_BODY
    difficulty: Difficulty = Difficulty.BEGINNER
    duration: int = 45  # minutes
    equipment: list[str] = field(default_factory=lambda: ["dumbbells", "bodyweight"])

    def validate(self) -> "WorkoutRequest":
        """Check ranges and enums, raising ValueError on the first problem."""
        _check_range("Days per week", self.days_per_week, DAYS_PER_WEEK_RANGE)
        _check_range("Duration", self.duration, WORKOUT_DURATION_RANGE)
        self.type = WorkoutType(self.type)
        self.split_type = SplitType(self.split_type)
        self.difficulty = Difficulty(self.difficulty)
        self.equipment = _clean_list(self.equipment)
        return self


@dataclass
class NutritionRequest:
    """Parameters for a daily meal plan."""

    target_calories: int = 2000
    meals_per_day: int = 3
    diet_type: DietType = DietType.BALANCED
    allergies: list[str] = field(default_factory=list)
    preferences: list[str] = field(default_factory=list)
    preparation_time: int = 30  # max minutes per meal

    def validate(self) -> "NutritionRequest":
        """Check ranges and enums, raising ValueError on the first problem."""
        _check_range("Calorie target", self.target_calories, CALORIE_RANGE)
        _check_range("Meals per day", self.meals_per_day, MEALS_PER_DAY_RANGE)
        _check_range("Preparation time", self.preparation_time, PREPARATION_TIME_RANGE)
        self.diet_type = DietType(self.diet_type)
        self.allergies = _clean_list(self.allergies)
        self.preferences = _clean_list(self.preferences)
        return self
