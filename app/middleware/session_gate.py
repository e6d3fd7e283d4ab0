"""
Session gate: a real HTTP middleware that runs before any page is served.

For requests under a protected prefix (admin dashboard, setup screens and
everything below them), the session cookie must be present and equal to the
configured sentinel. Otherwise the browser is sent back to the login page.

There is no server-side session table: the cookie value is the only proof of
login. It is set by POST /api/auth/login and cleared by logout.

Registered in main.py:
    app.add_middleware(
        SessionGateMiddleware,
        protected_prefixes=settings.protected_prefixes_list,
        cookie_name=settings.session_cookie_name,
    )
"""
import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.core.security import is_valid_session

logger = logging.getLogger(__name__)


def is_protected_path(path: str, prefixes: Iterable[str]) -> bool:
    """
    Segment-aware prefix match: "/admin-home" covers "/admin-home" and
    "/admin-home/…" but not "/admin-homework".
    """
    for prefix in prefixes:
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


class SessionGateMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        protected_prefixes: Iterable[str],
        cookie_name: str = "session",
        redirect_path: str = "/",
    ):
        super().__init__(app)
        self.protected_prefixes = list(protected_prefixes)
        self.cookie_name = cookie_name
        self.redirect_path = redirect_path

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if is_protected_path(path, self.protected_prefixes):
            if not is_valid_session(request.cookies.get(self.cookie_name)):
                logger.info(f"Session gate redirect: path={path}")
                return RedirectResponse(url=self.redirect_path, status_code=307)
        return await call_next(request)
