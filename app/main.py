"""
Application entry point.

Run locally:
    uvicorn app.main:app --reload --port 8000

In Docker:
    CMD ["uvicorn", "app.main:app", "--host", "0.0.0.0", "--port", "8000"]

API docs available at:
    http://localhost:8000/docs   (Swagger UI)
    http://localhost:8000/redoc  (ReDoc)
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.core.rate_limiter import limiter
from app.middleware.session_gate import SessionGateMiddleware
from app.routers import applications, auth, instances

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ── Error rendering ───────────────────────────────────────────────────────────
# Every error leaves as {"error": "<message>"} (+ extras such as attemptsLeft).
# Nothing from stack traces or driver internals reaches the caller.

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        body = {"error": "Method not allowed"}
    else:
        body = {"error": exc.detail}
    body.update(getattr(exc, "extra", {}))
    return JSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Sync on purpose: SlowAPIMiddleware calls this handler directly, without awaiting.
    logger.warning(f"Global rate limit hit: path={request.url.path}")
    return JSONResponse(
        {"error": "Too many requests. Please try again later."},
        status_code=429,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Project Green Leaf API",
        description=(
            "Backend for the Project Green Leaf research-recruitment program. "
            "Accepts public applications, bootstraps the admin instance, "
            "and gates the admin pages behind a session cookie."
        ),
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Error handlers ────────────────────────────────────────────────────────
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Middleware ────────────────────────────────────────────────────────────
    # Last added runs first: CORS → global rate limit → session gate → routes.
    app.add_middleware(
        SessionGateMiddleware,
        protected_prefixes=settings.protected_prefixes_list,
        cookie_name=settings.session_cookie_name,
    )

    # Attach limiter to app state (required by slowapi)
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    # In production, CORS_ORIGINS in .env should only list the frontend domain.
    # Credentials are allowed so the session cookie travels with login calls.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(applications.router, prefix="/api/applications", tags=["Applications"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(instances.router, prefix="/api/create-instance", tags=["Admin Instance"])

    # ── Health Check ──────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health_check():
        """
        Simple health check endpoint for load balancers and Docker health checks.
        Returns 200 if the application is running. Does not touch the database.
        """
        return {"status": "ok", "version": API_VERSION}

    return app


app = create_app()
