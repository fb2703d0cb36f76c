"""Plan generation commands."""

import click

from ..config import get_settings
from ..db import NutritionPlanRepository, WorkoutRepository, get_db_path
from ..errors import BatchPersistenceFailed, WellnessError
from ..generation.provider import create_provider
from ..models.nutrition import DietType
from ..models.requests import NutritionRequest, WorkoutRequest
from ..models.workout import Difficulty, SplitType, WorkoutType
from ..services.planner import NutritionPlanner, WorkoutPlanner
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    sign_in,
)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@click.group()
def generate():
    """Generate workout and meal plans."""
    pass


@generate.command("workouts")
@click.argument("email")
@click.password_option(confirmation_prompt=False, help="Account password")
@click.option("--days", "-d", type=click.IntRange(1, 7), default=3, help="Workouts per week")
@click.option(
    "--type", "workout_type",
    type=click.Choice([t.value for t in WorkoutType]), default="strength",
)
@click.option("--split", type=click.Choice([s.value for s in SplitType]), default="fullBody")
@click.option(
    "--difficulty", type=click.Choice([d.value for d in Difficulty]), default="beginner",
)
@click.option("--duration", type=click.IntRange(15, 120), default=45, help="Minutes per workout")
@click.option(
    "--equipment", "-e", default="dumbbells,bodyweight", help="Comma separated equipment list",
)
@click.pass_context
@async_command
async def generate_workouts(
    ctx,
    email: str,
    password: str,
    days: int,
    workout_type: str,
    split: str,
    difficulty: str,
    duration: int,
    equipment: str,
):
    """Generate and save a weekly workout plan for EMAIL.

    Examples:

        wellness-hub generate workouts you@example.com --days 4 --split upperLower

        wellness-hub generate workouts you@example.com -e "barbell,pull-up bar"
    """
    ensure_initialized(ctx)
    user = await sign_in(ctx, email, password)

    settings = get_settings()
    planner = WorkoutPlanner(create_provider(settings), WorkoutRepository(get_db_path()))
    request = WorkoutRequest(
        days_per_week=days,
        type=workout_type,
        split_type=split,
        difficulty=difficulty,
        duration=duration,
        equipment=_split_csv(equipment),
    )

    echo_info(f"Generating {days} workouts...")
    try:
        outcome = await planner.generate(user, request)
    except BatchPersistenceFailed as e:
        echo_error(str(e))
        echo_warning(f"{len(e.committed)} workouts were saved before the failure.")
        ctx.exit(1)
    except WellnessError as e:
        echo_error(f"{e.title}: {e}")
        ctx.exit(1)

    if outcome.demo_mode:
        echo_warning(outcome.notice)
    else:
        echo_success(outcome.notice)

    click.echo()
    rows = [
        [
            str(w.id),
            w.title,
            w.scheduled_date.strftime("%a %d %b") if w.scheduled_date else "-",
            "rest" if w.is_rest_day else str(len(w.exercises)),
        ]
        for w in outcome.items
    ]
    click.echo(format_table(["ID", "Title", "Scheduled", "Exercises"], rows))


@generate.command("nutrition")
@click.argument("email")
@click.password_option(confirmation_prompt=False, help="Account password")
@click.option("--calories", type=click.IntRange(1200, 5000), default=2000, help="Daily calories")
@click.option("--meals", type=click.IntRange(3, 6), default=3, help="Meals per day")
@click.option("--diet", type=click.Choice([d.value for d in DietType]), default="balanced")
@click.option("--allergies", default="", help="Comma separated allergies")
@click.option("--preferences", default="", help="Comma separated preferences")
@click.option("--prep-time", type=click.IntRange(15, 120), default=30, help="Max minutes per meal")
@click.pass_context
@async_command
async def generate_nutrition(
    ctx,
    email: str,
    password: str,
    calories: int,
    meals: int,
    diet: str,
    allergies: str,
    preferences: str,
    prep_time: int,
):
    """Generate and save a daily meal plan for EMAIL."""
    ensure_initialized(ctx)
    user = await sign_in(ctx, email, password)

    settings = get_settings()
    planner = NutritionPlanner(create_provider(settings), NutritionPlanRepository(get_db_path()))
    request = NutritionRequest(
        target_calories=calories,
        meals_per_day=meals,
        diet_type=diet,
        allergies=_split_csv(allergies),
        preferences=_split_csv(preferences),
        preparation_time=prep_time,
    )

    echo_info("Generating meal plan...")
    try:
        outcome = await planner.generate(user, request)
    except WellnessError as e:
        echo_error(f"{e.title}: {e}")
        ctx.exit(1)

    if outcome.demo_mode:
        echo_warning(outcome.notice)
    else:
        echo_success(outcome.notice)

    plan = outcome.items[0]
    click.echo()
    click.echo(click.style(plan.title, bold=True) + f" (ID: {plan.id})")
    rows = [
        [meal.meal_type.value, meal.name, str(meal.macros.calories), f"{meal.preparation_time} min"]
        for meal in plan.meals
    ]
    click.echo(format_table(["Meal", "Name", "Calories", "Prep"], rows))
