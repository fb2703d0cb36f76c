"""Workout routes: generator form, history, completion and edits."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from ...auth.gate import require_user
from ...errors import WellnessError
from ...models.requests import WorkoutRequest
from ...models.user import User
from ...models.workout import Difficulty, SplitType, WorkoutType
from ..deps import get_templates, notice_context, workout_planner, workout_repo
from ..notices import redirect_with_error, redirect_with_notice

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])

EQUIPMENT_CHOICES = [
    "bodyweight",
    "dumbbells",
    "barbell",
    "kettlebells",
    "resistance bands",
    "pull-up bar",
    "machines",
]


@router.get("", response_class=HTMLResponse)
async def workouts_page(request: Request, user: User = Depends(require_user)):
    """Generator form plus workout history, latest first."""
    templates = get_templates(request)
    workouts = await workout_repo(request).list_for_user(user.id)

    return templates.TemplateResponse(
        request,
        "workouts/list.html",
        {
            "user": user,
            "workouts": workouts,
            "defaults": WorkoutRequest(),
            "workout_types": [t.value for t in WorkoutType],
            "split_types": [s.value for s in SplitType],
            "difficulties": [d.value for d in Difficulty],
            "equipment_choices": EQUIPMENT_CHOICES,
            "demo_mode": not request.app.state.provider.available,
            **notice_context(request),
        },
    )


@router.post("/generate")
async def generate_workouts(
    request: Request,
    user: User = Depends(require_user),
    days_per_week: int = Form(3),
    workout_type: str = Form("strength", alias="type"),
    split_type: str = Form("fullBody"),
    difficulty: str = Form("beginner"),
    duration: int = Form(45),
    equipment: list[str] = Form(default=[]),
):
    """Generate and save a weekly workout plan."""
    try:
        workout_request = WorkoutRequest(
            days_per_week=days_per_week,
            type=workout_type,
            split_type=split_type,
            difficulty=difficulty,
            duration=duration,
            equipment=equipment,
        ).validate()
    except ValueError as e:
        return redirect_with_notice("/workouts", str(e), level="error", title="Invalid Settings")

    try:
        outcome = await workout_planner(request).generate(user, workout_request)
    except WellnessError as e:
        logger.warning("Workout generation failed for user %s: %s", user.id, e)
        return redirect_with_error("/workouts", e)

    if outcome.demo_mode:
        return redirect_with_notice("/workouts", outcome.notice, level="info", title="Using Demo Mode")
    return redirect_with_notice("/workouts", outcome.notice, level="success", title="Success")


@router.get("/{workout_id}", response_class=HTMLResponse)
async def view_workout(request: Request, workout_id: int, user: User = Depends(require_user)):
    """Workout details with edit form."""
    templates = get_templates(request)
    workout = await workout_repo(request).get(user.id, workout_id)

    if not workout:
        return redirect_with_notice("/workouts", "Workout not found", level="error")

    return templates.TemplateResponse(
        request,
        "workouts/view.html",
        {
            "user": user,
            "workout": workout,
            **notice_context(request),
        },
    )


@router.post("/{workout_id}/complete")
async def complete_workout(request: Request, workout_id: int, user: User = Depends(require_user)):
    """Mark a workout as complete."""
    try:
        workout = await workout_repo(request).mark_complete(user.id, workout_id)
    except WellnessError as e:
        return redirect_with_error("/workouts", e)

    if not workout:
        return redirect_with_notice("/workouts", "Workout not found", level="error")

    return redirect_with_notice(
        "/workouts",
        "Great job! Your workout has been marked as complete.",
        level="success",
        title="Workout completed",
    )


@router.post("/{workout_id}")
async def update_workout(
    request: Request,
    workout_id: int,
    user: User = Depends(require_user),
    title: str = Form(...),
    description: str = Form(""),
    scheduled_date: str = Form(""),
):
    """Edit a workout's title, description and date."""
    title = title.strip()
    if not title:
        return redirect_with_notice(f"/workouts/{workout_id}", "Title is required", level="error")

    patch = {"title": title, "description": description.strip() or None}
    if scheduled_date:
        try:
            patch["scheduled_date"] = date.fromisoformat(scheduled_date)
        except ValueError:
            return redirect_with_notice(
                f"/workouts/{workout_id}", "Scheduled date must be YYYY-MM-DD", level="error"
            )
    else:
        patch["scheduled_date"] = None

    try:
        workout = await workout_repo(request).update(user.id, workout_id, patch)
    except WellnessError as e:
        return redirect_with_error(f"/workouts/{workout_id}", e)

    if not workout:
        return redirect_with_notice("/workouts", "Workout not found", level="error")

    return redirect_with_notice(
        f"/workouts/{workout_id}",
        "Your workout has been updated successfully.",
        level="success",
        title="Workout updated",
    )
