"""Plan generation: prompts, provider, and shape validation."""

from .mock import MOCK_NUTRITION_PLAN, MOCK_WORKOUTS
from .prompts import PromptPair, build_nutrition_messages, build_workout_messages
from .provider import PlanProvider, create_provider
from .schema import (
    PlannedNutrition,
    PlannedWorkout,
    ValidationResult,
    strip_code_fences,
    validate_nutrition_plan,
    validate_workout_plan,
)

__all__ = [
    "MOCK_NUTRITION_PLAN",
    "MOCK_WORKOUTS",
    "PlanProvider",
    "PlannedNutrition",
    "PlannedWorkout",
    "PromptPair",
    "ValidationResult",
    "build_nutrition_messages",
    "build_workout_messages",
    "create_provider",
    "strip_code_fences",
    "validate_nutrition_plan",
    "validate_workout_plan",
]
