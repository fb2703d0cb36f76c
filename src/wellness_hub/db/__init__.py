"""Database layer for wellness-hub."""

from .engine import get_db_path, init_db
from .repositories import (
    NutritionPlanRepository,
    UserRepository,
    WorkoutRepository,
)

__all__ = [
    "get_db_path",
    "init_db",
    "NutritionPlanRepository",
    "UserRepository",
    "WorkoutRepository",
]
