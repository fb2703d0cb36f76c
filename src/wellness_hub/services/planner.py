"""Plan generation pipeline: prompt, generate, validate, persist."""

import copy
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..db.repositories import NutritionPlanRepository, WorkoutRepository
from ..errors import BatchPersistenceFailed, PersistenceFailed, ProviderUnavailable
from ..generation.mock import MOCK_NUTRITION_PLAN, MOCK_WORKOUTS
from ..generation.prompts import build_nutrition_messages, build_workout_messages
from ..generation.provider import NUTRITION_MAX_TOKENS, WORKOUT_MAX_TOKENS, PlanProvider
from ..generation.schema import (
    PlannedNutrition,
    PlannedWorkout,
    validate_nutrition_plan,
    validate_workout_plan,
)
from ..models.nutrition import MacroNutrients, NutritionPlan
from ..models.requests import NutritionRequest, WorkoutRequest
from ..models.user import User
from ..models.workout import Workout

logger = logging.getLogger(__name__)

DEMO_WORKOUT_NOTICE = (
    "Currently using mock workout data. "
    "Add a GROQ API key to enable AI workout generation."
)
DEMO_NUTRITION_NOTICE = (
    "Currently using mock meal plan data. "
    "Add a GROQ API key to enable AI meal plan generation."
)


@dataclass
class GenerationOutcome:
    """What a generation run stored, and how."""

    items: list = field(default_factory=list)
    demo_mode: bool = False
    notice: str = ""


def next_occurrence(day_of_week: int, today: date | None = None) -> date:
    """Next date falling on an ISO weekday (Monday=1), today included."""
    today = today or date.today()
    days_ahead = (day_of_week - today.isoweekday() + 7) % 7
    return today + timedelta(days=days_ahead)


class WorkoutPlanner:
    """Generates and stores a week of workouts."""

    def __init__(self, provider: PlanProvider, workouts: WorkoutRepository):
        self.provider = provider
        self.workouts = workouts

    async def plan(self, request: WorkoutRequest) -> tuple[list[PlannedWorkout], bool]:
        """Produce validated workouts, falling back to the demo plan.

        Returns the planned workouts and whether demo mode was used.
        """
        prompt = build_workout_messages(request)
        try:
            raw = await self.provider.complete(prompt, max_tokens=WORKOUT_MAX_TOKENS)
        except ProviderUnavailable:
            logger.info("Provider unavailable, using demo workouts")
            return copy.deepcopy(MOCK_WORKOUTS[: request.days_per_week]), True

        result = validate_workout_plan(raw, expected_days=request.days_per_week)
        if not result.ok:
            logger.warning("Rejected workout plan: %s", result.error)
        return result.unwrap(), False

    async def generate(
        self, user: User, request: WorkoutRequest, today: date | None = None
    ) -> GenerationOutcome:
        """Run the full pipeline for a signed-in user.

        Workouts are written one at a time. If a write fails the loop stops
        and BatchPersistenceFailed reports what was already committed; those
        rows are not rolled back.
        """
        request.validate()
        planned, demo_mode = await self.plan(request)

        saved: list[Workout] = []
        for index, item in enumerate(planned):
            workout = Workout(
                title=item.title,
                description=item.description,
                exercises=item.exercises,
                type=request.type,
                difficulty=request.difficulty,
                split_type=request.split_type,
                scheduled_date=next_occurrence(item.day_of_week, today),
                is_rest_day=item.is_rest_day,
            )
            try:
                saved.append(await self.workouts.create(user.id, workout))
            except PersistenceFailed as e:
                logger.error(
                    "Stopped after saving %d of %d workouts: %s", len(saved), len(planned), e
                )
                raise BatchPersistenceFailed(
                    f"Failed to save workout {index + 1} of {len(planned)} ('{item.title}'); "
                    f"{len(saved)} saved before the failure. {e}",
                    committed=saved,
                    failed_index=index,
                ) from e

        logger.info("Saved %d workouts for user %s (demo=%s)", len(saved), user.id, demo_mode)
        notice = DEMO_WORKOUT_NOTICE if demo_mode else (
            f"Generated {len(saved)} workouts for your weekly plan!"
        )
        return GenerationOutcome(items=saved, demo_mode=demo_mode, notice=notice)


class NutritionPlanner:
    """Generates and stores a daily meal plan."""

    def __init__(self, provider: PlanProvider, plans: NutritionPlanRepository):
        self.provider = provider
        self.plans = plans

    async def plan(self, request: NutritionRequest) -> tuple[PlannedNutrition, bool]:
        """Produce a validated meal plan, falling back to the demo plan."""
        prompt = build_nutrition_messages(request)
        try:
            raw = await self.provider.complete(prompt, max_tokens=NUTRITION_MAX_TOKENS)
        except ProviderUnavailable:
            logger.info("Provider unavailable, using demo meal plan")
            return copy.deepcopy(MOCK_NUTRITION_PLAN), True

        result = validate_nutrition_plan(raw, expected_meals=request.meals_per_day)
        if not result.ok:
            logger.warning("Rejected nutrition plan: %s", result.error)
        return result.unwrap(), False

    async def generate(self, user: User, request: NutritionRequest) -> GenerationOutcome:
        """Run the full pipeline for a signed-in user."""
        request.validate()
        planned, demo_mode = await self.plan(request)

        plan = NutritionPlan(
            title=planned.title,
            description=planned.description,
            target_calories=request.target_calories,
            target_macros=planned.target_macros or MacroNutrients.from_calories(request.target_calories),
            meals=planned.meals,
            dietary_restrictions=list(request.allergies),
            preferences=list(request.preferences),
        )
        saved = await self.plans.create(user.id, plan)

        logger.info("Saved nutrition plan %s for user %s (demo=%s)", saved.id, user.id, demo_mode)
        notice = DEMO_NUTRITION_NOTICE if demo_mode else "Generated your customized meal plan!"
        return GenerationOutcome(items=[saved], demo_mode=demo_mode, notice=notice)
