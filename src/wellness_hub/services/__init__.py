"""Application services."""

from .metrics import DashboardSummary, build_dashboard, group_by_date
from .planner import GenerationOutcome, NutritionPlanner, WorkoutPlanner, next_occurrence

__all__ = [
    "DashboardSummary",
    "GenerationOutcome",
    "NutritionPlanner",
    "WorkoutPlanner",
    "build_dashboard",
    "group_by_date",
    "next_occurrence",
]
