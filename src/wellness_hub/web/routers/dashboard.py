"""Dashboard route."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...auth.gate import get_session
from ...models.user import User
from ...services.metrics import build_dashboard
from ..deps import get_templates, notice_context, nutrition_repo, workout_repo

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request, user: User | None = Depends(get_session)):
    """Dashboard: streak, monthly goal, upcoming workouts and the current meal plan."""
    templates = get_templates(request)

    summary = None
    if user:
        workouts = await workout_repo(request).list_for_user(user.id)
        plans = await nutrition_repo(request).list_for_user(user.id)
        summary = build_dashboard(
            workouts,
            plans,
            monthly_goal=request.app.state.settings.monthly_workout_goal,
        )

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "user": user,
            "summary": summary,
            "demo_mode": not request.app.state.provider.available,
            **notice_context(request),
        },
    )
