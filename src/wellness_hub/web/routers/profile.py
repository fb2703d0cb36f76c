"""User profile route."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...auth.gate import get_session
from ...models.user import User
from ..deps import get_templates, notice_context, nutrition_repo, workout_repo

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_class=HTMLResponse)
async def profile_page(request: Request, user: User | None = Depends(get_session)):
    """Account details and record counts."""
    templates = get_templates(request)

    stats = None
    if user:
        workouts = await workout_repo(request).list_for_user(user.id)
        plans = await nutrition_repo(request).list_for_user(user.id)
        stats = {
            "workouts": len(workouts),
            "completed": sum(1 for w in workouts if w.completed),
            "nutrition_plans": len(plans),
        }

    return templates.TemplateResponse(
        request,
        "profile.html",
        {
            "user": user,
            "stats": stats,
            "demo_mode": not request.app.state.provider.available,
            **notice_context(request),
        },
    )
