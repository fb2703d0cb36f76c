"""Data models for wellness-hub."""

from .nutrition import DietType, MacroNutrients, Meal, MealType, NutritionPlan
from .requests import NutritionRequest, WorkoutRequest
from .user import User
from .workout import Difficulty, Exercise, SplitType, Workout, WorkoutType

__all__ = [
    "DietType",
    "Difficulty",
    "Exercise",
    "MacroNutrients",
    "Meal",
    "MealType",
    "NutritionPlan",
    "NutritionRequest",
    "SplitType",
    "User",
    "Workout",
    "WorkoutRequest",
    "WorkoutType",
]
