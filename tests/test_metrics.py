"""Tests for dashboard and calendar summaries."""

from datetime import date, datetime

from wellness_hub.models.nutrition import MacroNutrients, NutritionPlan
from wellness_hub.models.workout import Workout
from wellness_hub.services.metrics import (
    DEFAULT_DAILY_TARGETS,
    DashboardSummary,
    active_streak,
    build_dashboard,
    completed_in_month,
    group_by_date,
    last_completed,
    upcoming_workouts,
)

TODAY = date(2024, 3, 15)


def done(day: int, month: int = 3, id: int | None = None) -> Workout:
    workout = Workout(title=f"Done {month}/{day}", exercises=[], id=id)
    workout.mark_complete(datetime(2024, month, day, 7, 0))
    return workout


def planned(day: int, id: int | None = None) -> Workout:
    return Workout(title=f"Planned {day}", exercises=[], scheduled_date=date(2024, 3, day), id=id)


class TestActiveStreak:
    """Tests for active_streak."""

    def test_empty(self):
        assert active_streak([], TODAY) == 0

    def test_ending_today(self):
        assert active_streak([done(13), done(14), done(15)], TODAY) == 3

    def test_ending_yesterday(self):
        assert active_streak([done(13), done(14)], TODAY) == 2

    def test_gap_resets(self):
        assert active_streak([done(10), done(11), done(13)], TODAY) == 0

    def test_same_day_counts_once(self):
        assert active_streak([done(15), done(15)], TODAY) == 1

    def test_open_workouts_ignored(self):
        assert active_streak([planned(15)], TODAY) == 0


class TestMonthly:
    """Tests for completed_in_month and DashboardSummary.monthly_progress."""

    def test_current_month_only(self):
        workouts = [done(1), done(14), done(28, month=2)]
        assert completed_in_month(workouts, TODAY) == 2

    def test_progress_capped(self):
        summary = DashboardSummary(completed_this_month=20, monthly_goal=12)
        assert summary.monthly_progress == 100.0

    def test_progress(self):
        summary = DashboardSummary(completed_this_month=3, monthly_goal=12)
        assert summary.monthly_progress == 25.0


class TestDashboardSummary:
    """Tests for DashboardSummary defaults."""

    def test_defaults(self):
        summary = DashboardSummary()

        assert summary.monthly_goal == 12
        assert summary.daily_targets == DEFAULT_DAILY_TARGETS
        assert summary.monthly_progress == 0.0

    def test_default_targets_not_shared(self):
        first = DashboardSummary()
        first.daily_targets.calories = 1500

        assert DashboardSummary().daily_targets.calories == 2000
        assert DEFAULT_DAILY_TARGETS.calories == 2000


class TestWorkoutLists:
    """Tests for last_completed, upcoming_workouts and group_by_date."""

    def test_last_completed(self):
        assert last_completed([done(3, id=1), done(9, id=2), done(5, id=3)]).id == 2
        assert last_completed([planned(20)]) is None

    def test_upcoming(self):
        past = planned(10, id=1)
        later = planned(20, id=2)
        sooner = planned(16, id=3)
        finished = planned(17, id=4)
        finished.completed = True

        assert [w.id for w in upcoming_workouts([past, later, sooner, finished], TODAY)] == [3, 2]

    def test_upcoming_limit(self):
        workouts = [planned(16 + i, id=i) for i in range(8)]
        assert len(upcoming_workouts(workouts, TODAY)) == 5

    def test_group_by_date(self):
        workouts = [planned(20, id=1), planned(18, id=2), planned(20, id=3), done(1)]
        grouped = group_by_date(workouts)

        assert list(grouped) == [date(2024, 3, 18), date(2024, 3, 20)]
        assert [w.id for w in grouped[date(2024, 3, 20)]] == [1, 3]


class TestBuildDashboard:
    """Tests for build_dashboard."""

    def test_without_plans(self):
        summary = build_dashboard([done(15)], [], monthly_goal=10, today=TODAY)

        assert summary.active_streak == 1
        assert summary.completed_this_month == 1
        assert summary.current_plan is None
        assert summary.daily_targets == DEFAULT_DAILY_TARGETS

    def test_current_plan_targets(self):
        macros = MacroNutrients.from_calories(2400)
        plan = NutritionPlan(
            title="Bulk", description="", target_calories=2400, target_macros=macros, meals=[]
        )
        summary = build_dashboard([], [plan], today=TODAY)

        assert summary.current_plan is plan
        assert summary.daily_targets == macros
