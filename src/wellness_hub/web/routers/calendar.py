"""Calendar route."""

from datetime import date

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...auth.gate import require_user
from ...models.user import User
from ...services.metrics import group_by_date
from ..deps import get_templates, notice_context, workout_repo

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", response_class=HTMLResponse)
async def calendar_page(request: Request, user: User = Depends(require_user)):
    """Scheduled workouts grouped by day."""
    templates = get_templates(request)
    workouts = await workout_repo(request).list_for_user(user.id)

    return templates.TemplateResponse(
        request,
        "calendar.html",
        {
            "user": user,
            "days": group_by_date(workouts),
            "today": date.today(),
            **notice_context(request),
        },
    )
