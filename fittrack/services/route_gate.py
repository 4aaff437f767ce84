from fastapi import Request
from fastapi.responses import RedirectResponse

from fittrack.config import settings

# Pages that need a session cookie before they are worth rendering.
PROTECTED_ROUTES = (
    "/calendar",
    "/calorie-calculator",
    "/calorie-log",
    "/nutrition-search",
    "/my-account",
)
AUTH_ROUTES = ("/login", "/register")
BYPASS_PREFIXES = ("/api/", "/docs", "/redoc", "/openapi.json", "/favicon.ico")

LOGIN_PAGE = "/login"
HOME_PAGE = "/calendar"


def _matches(path: str, routes: tuple) -> bool:
    return any(path == route or path.startswith(route + "/") for route in routes)


def gate_redirect(path: str, has_token: bool) -> str | None:
    """Where a page request should be sent instead, or None to let it through.

    Only the presence of a token is considered. Whether it is valid is
    decided later by the API's session dependency.
    """
    if path.startswith(BYPASS_PREFIXES):
        return None
    if not has_token and _matches(path, PROTECTED_ROUTES):
        return LOGIN_PAGE
    if has_token and _matches(path, AUTH_ROUTES):
        return HOME_PAGE
    return None


async def route_gate(request: Request, call_next):
    has_token = bool(request.cookies.get(settings.AUTH_COOKIE_NAME))
    target = gate_redirect(request.url.path, has_token)
    if target:
        return RedirectResponse(url=target, status_code=307)
    return await call_next(request)
