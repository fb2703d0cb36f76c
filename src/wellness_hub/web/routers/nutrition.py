"""Nutrition routes: meal plan generator, current plan and history."""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from ...auth.gate import require_user
from ...errors import WellnessError
from ...models.nutrition import DietType
from ...models.requests import NutritionRequest
from ...models.user import User
from ...services.metrics import default_daily_targets
from ..deps import get_templates, notice_context, nutrition_planner, nutrition_repo
from ..notices import redirect_with_error, redirect_with_notice

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@router.get("", response_class=HTMLResponse)
async def nutrition_page(request: Request, user: User = Depends(require_user)):
    """Current meal plan, history and generator form."""
    templates = get_templates(request)
    plans = await nutrition_repo(request).list_for_user(user.id)
    latest = plans[0] if plans else None

    return templates.TemplateResponse(
        request,
        "nutrition/list.html",
        {
            "user": user,
            "latest": latest,
            "history": plans[1:],
            "daily_targets": latest.target_macros if latest else default_daily_targets(),
            "defaults": NutritionRequest(),
            "diet_types": [d.value for d in DietType],
            "demo_mode": not request.app.state.provider.available,
            **notice_context(request),
        },
    )


@router.post("/generate")
async def generate_nutrition(
    request: Request,
    user: User = Depends(require_user),
    target_calories: int = Form(2000),
    meals_per_day: int = Form(3),
    diet_type: str = Form("balanced"),
    allergies: str = Form(""),
    preferences: str = Form(""),
    preparation_time: int = Form(30),
):
    """Generate and save a daily meal plan."""
    try:
        nutrition_request = NutritionRequest(
            target_calories=target_calories,
            meals_per_day=meals_per_day,
            diet_type=diet_type,
            allergies=_split_csv(allergies),
            preferences=_split_csv(preferences),
            preparation_time=preparation_time,
        ).validate()
    except ValueError as e:
        return redirect_with_notice("/nutrition", str(e), level="error", title="Invalid Settings")

    try:
        outcome = await nutrition_planner(request).generate(user, nutrition_request)
    except WellnessError as e:
        logger.warning("Meal plan generation failed for user %s: %s", user.id, e)
        return redirect_with_error("/nutrition", e)

    if outcome.demo_mode:
        return redirect_with_notice("/nutrition", outcome.notice, level="info", title="Using Demo Mode")
    return redirect_with_notice("/nutrition", outcome.notice, level="success", title="Success")


@router.get("/{plan_id}", response_class=HTMLResponse)
async def view_plan(request: Request, plan_id: int, user: User = Depends(require_user)):
    """A single meal plan with every recipe."""
    templates = get_templates(request)
    plan = await nutrition_repo(request).get(user.id, plan_id)

    if not plan:
        return redirect_with_notice("/nutrition", "Meal plan not found", level="error")

    return templates.TemplateResponse(
        request,
        "nutrition/view.html",
        {
            "user": user,
            "plan": plan,
            **notice_context(request),
        },
    )
