"""Admin access guard and static credential check."""

import hmac
import json
import os
from urllib.parse import quote, unquote

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import InvalidCredentialsError

ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/admin/login"
LOGOUT_PATH = "/admin/logout"

AUTH_COOKIE = "adminAuth"
AUTH_COOKIE_MAX_AGE = 60 * 60 * 24  # 1 day

ADMIN_USERNAME = os.environ.get("BARBEARIA_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.environ.get("BARBEARIA_ADMIN_PASSWORD", "admin123")


def is_guarded_path(path: str) -> bool:
    """Admin area paths, except the login and logout pages."""
    if path != ADMIN_PREFIX and not path.startswith(ADMIN_PREFIX + "/"):
        return False
    return not (path.startswith(LOGIN_PATH) or path.startswith(LOGOUT_PATH))


def is_authenticated(cookie_value: str | None) -> bool:
    """
    Decide whether an ``adminAuth`` cookie value grants access.

    The value is a (possibly URL-encoded) JSON object. Anything that is
    missing, unparseable, not an object, or lacks a truthy
    ``isAuthenticated`` is rejected. The content is not signed.
    """
    if not cookie_value:
        return False
    try:
        data = json.loads(unquote(cookie_value))
    except ValueError:
        return False
    if not isinstance(data, dict):
        return False
    return bool(data.get("isAuthenticated"))


def auth_cookie_value(username: str) -> str:
    """Encoded cookie value marking ``username`` as logged in."""
    return quote(json.dumps({"isAuthenticated": True, "username": username}))


def check_credentials(username: str, password: str) -> None:
    """
    Compare against the configured admin pair.

    Raises:
        InvalidCredentialsError: If either value doesn't match.
    """
    user_ok = hmac.compare_digest(username.encode(), ADMIN_USERNAME.encode())
    pass_ok = hmac.compare_digest(password.encode(), ADMIN_PASSWORD.encode())
    if not (user_ok and pass_ok):
        raise InvalidCredentialsError()


class AdminGuardMiddleware(BaseHTTPMiddleware):
    """Redirect unauthenticated admin requests to the login page."""

    async def dispatch(self, request: Request, call_next):
        if is_guarded_path(request.url.path) and not is_authenticated(
            request.cookies.get(AUTH_COOKIE)
        ):
            return RedirectResponse(LOGIN_PATH, status_code=307)
        return await call_next(request)
