"""Transient notices ("toasts") carried on redirect query strings."""

from urllib.parse import urlencode

from fastapi.responses import RedirectResponse

from ..errors import WellnessError

LEVELS = ("info", "success", "error")


def redirect_with_notice(
    url: str, message: str, level: str = "info", title: str | None = None
) -> RedirectResponse:
    """Redirect (303, so POSTs become GETs) and show a notice on arrival."""
    params = {"notice": message, "level": level if level in LEVELS else "info"}
    if title:
        params["title"] = title
    separator = "&" if "?" in url else "?"
    return RedirectResponse(url=f"{url}{separator}{urlencode(params)}", status_code=303)


def redirect_with_error(url: str, error: WellnessError) -> RedirectResponse:
    """Redirect back and surface an expected failure."""
    return redirect_with_notice(url, str(error), level="error", title=error.title)
