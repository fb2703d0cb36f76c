"""Dashboard and calendar summaries computed from stored records."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..models.nutrition import MacroNutrients, NutritionPlan
from ..models.workout import Workout

# Shown before the user has generated a meal plan
DEFAULT_DAILY_TARGETS = MacroNutrients(protein=150, carbohydrates=200, fats=65, calories=2000)

UPCOMING_LIMIT = 5


def default_daily_targets() -> MacroNutrients:
    """A fresh copy of the targets shown before any meal plan exists."""
    return MacroNutrients(**DEFAULT_DAILY_TARGETS.to_dict())


@dataclass
class DashboardSummary:
    """Numbers shown on the dashboard cards."""

    active_streak: int = 0
    completed_this_month: int = 0
    monthly_goal: int = 12
    last_workout: Workout | None = None
    upcoming: list[Workout] = field(default_factory=list)
    current_plan: NutritionPlan | None = None
    daily_targets: MacroNutrients = field(default_factory=default_daily_targets)

    @property
    def monthly_progress(self) -> float:
        """Completed workouts this month as a percentage of the goal (capped at 100)."""
        if self.monthly_goal <= 0:
            return 0.0
        return min(100.0, self.completed_this_month / self.monthly_goal * 100)


def _completion_day(workout: Workout) -> date | None:
    if not workout.completed:
        return None
    if workout.completion_date:
        return workout.completion_date.date()
    return workout.scheduled_date


def active_streak(workouts: list[Workout], today: date | None = None) -> int:
    """Consecutive days with a completed workout.

    The streak may end today or yesterday; a gap of a full day resets it.
    """
    today = today or date.today()
    days = {d for d in (_completion_day(w) for w in workouts) if d is not None}
    if not days:
        return 0

    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def completed_in_month(workouts: list[Workout], today: date | None = None) -> int:
    """Number of workouts completed in the current calendar month."""
    today = today or date.today()
    count = 0
    for workout in workouts:
        day = _completion_day(workout)
        if day and day.year == today.year and day.month == today.month:
            count += 1
    return count


def last_completed(workouts: list[Workout]) -> Workout | None:
    """Most recently completed workout."""
    completed = [w for w in workouts if _completion_day(w) is not None]
    if not completed:
        return None
    return max(completed, key=lambda w: (_completion_day(w), w.id or 0))


def upcoming_workouts(
    workouts: list[Workout], today: date | None = None, limit: int = UPCOMING_LIMIT
) -> list[Workout]:
    """Open workouts scheduled today or later, soonest first."""
    today = today or date.today()
    pending = [
        w for w in workouts
        if not w.completed and w.scheduled_date is not None and w.scheduled_date >= today
    ]
    pending.sort(key=lambda w: (w.scheduled_date, w.id or 0))
    return pending[:limit]


def group_by_date(workouts: list[Workout]) -> dict[date, list[Workout]]:
    """Calendar view: scheduled workouts keyed by date, in date order."""
    grouped: dict[date, list[Workout]] = defaultdict(list)
    for workout in workouts:
        if workout.scheduled_date is not None:
            grouped[workout.scheduled_date].append(workout)
    return dict(sorted(grouped.items()))


def build_dashboard(
    workouts: list[Workout],
    plans: list[NutritionPlan],
    monthly_goal: int = 12,
    today: date | None = None,
) -> DashboardSummary:
    """Summarize a user's records for the dashboard.

    ``plans`` is expected latest first, so the first plan is the current one.
    """
    current_plan = plans[0] if plans else None
    return DashboardSummary(
        active_streak=active_streak(workouts, today),
        completed_this_month=completed_in_month(workouts, today),
        monthly_goal=monthly_goal,
        last_workout=last_completed(workouts),
        upcoming=upcoming_workouts(workouts, today),
        current_plan=current_plan,
        daily_targets=current_plan.target_macros if current_plan else default_daily_targets(),
    )
