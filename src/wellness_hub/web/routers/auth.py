"""Sign-in, sign-up and sign-out routes."""

from urllib.parse import urlencode

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...auth.gate import SESSION_COOKIE, authenticate, get_session, issue_token, register
from ...errors import Unauthenticated
from ..deps import get_templates, notice_context, user_repo
from ..notices import redirect_with_error, redirect_with_notice

router = APIRouter(prefix="/auth", tags=["auth"])


def _safe_next(next_url: str) -> str:
    """Only follow local redirects."""
    if next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return "/"


def _signed_in(request: Request, user, next_url: str) -> RedirectResponse:
    settings = request.app.state.settings
    response = RedirectResponse(url=_safe_next(next_url), status_code=303)
    response.set_cookie(
        SESSION_COOKIE,
        issue_token(user, settings),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )
    return response


@router.get("", response_class=HTMLResponse)
async def auth_page(request: Request, next: str = "/"):
    """Sign-in / sign-up page."""
    templates = get_templates(request)
    user = await get_session(request)

    return templates.TemplateResponse(
        request,
        "auth.html",
        {
            "user": user,
            "next": _safe_next(next),
            **notice_context(request),
        },
    )


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    next: str = Form("/"),
):
    """Check credentials and start a session."""
    try:
        user = await authenticate(user_repo(request), email, password)
    except Unauthenticated as e:
        return redirect_with_error("/auth?" + urlencode({"next": _safe_next(next)}), e)
    return _signed_in(request, user, next)


@router.post("/signup")
async def signup(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    display_name: str = Form(""),
    next: str = Form("/"),
):
    """Create an account and sign in."""
    try:
        user = await register(user_repo(request), email, password, display_name)
    except ValueError as e:
        return redirect_with_notice(
            "/auth?" + urlencode({"next": _safe_next(next)}),
            str(e),
            level="error",
            title="Sign-up Failed",
        )
    return _signed_in(request, user, next)


@router.post("/logout")
async def logout():
    """End the session."""
    response = redirect_with_notice("/", "You have been signed out.", level="info")
    response.delete_cookie(SESSION_COOKIE)
    return response
