"""
Auth router: admin login and logout.

Login:
  POST /api/auth/login → validate credentials → set the session cookie.
  Every attempt is counted up front and given back unless the credentials
  were wrong, so only failures use up the per-IP lockout; once the window is
  exhausted every attempt gets 429, correct password or not.

Logout:
  POST /api/auth/logout → clear the session cookie.
"""
import asyncio
import logging
import time

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.core.dependencies import read_json_body, validate_payload
from app.core.exceptions import InvalidCredentialsException, RateLimitException
from app.core.rate_limiter import get_client_ip, login_limiter
from app.database import MongoGateway, get_gateway
from app.schemas.auth import LoginRequest, LoginResponse, LoginUser, MessageResponse
from app.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Login ─────────────────────────────────────────────────────────────────────

@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    response: Response,
    gateway: MongoGateway = Depends(get_gateway),
):
    """
    Login with username and password.

    The credential check always takes at least LOGIN_MIN_RESPONSE_SECONDS,
    whichever branch is taken, so latency doesn't reveal whether the
    username exists or how far bcrypt got.
    """
    client_ip = get_client_ip(request)
    # Counted before the first await; the slot is given back below unless
    # the credentials were wrong.
    if not login_limiter.check(client_ip):
        logger.warning(f"Login lockout: ip={client_ip}")
        raise RateLimitException(
            "Too many login attempts. Please try again later.",
            retry_after=login_limiter.retry_after(client_ip),
        )

    failed = False
    try:
        payload = await read_json_body(request, settings.login_max_body_bytes)
        body = validate_payload(LoginRequest, payload)

        started = time.monotonic()
        try:
            record = await run_in_threadpool(
                auth_service.authenticate, gateway, body.username, body.password
            )
        finally:
            elapsed = time.monotonic() - started
            if elapsed < settings.login_min_response_seconds:
                await asyncio.sleep(settings.login_min_response_seconds - elapsed)

        if record is None:
            failed = True
            attempts_left = login_limiter.remaining(client_ip)
            logger.warning(f"Failed login: ip={client_ip}, attempts_left={attempts_left}")
            raise InvalidCredentialsException(attempts_left)
    finally:
        # Only wrong credentials keep their slot
        if not failed:
            login_limiter.release(client_ip)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=settings.session_cookie_value,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    logger.info(f"Login successful: username={body.username}, ip={client_ip}")
    return LoginResponse(user=LoginUser(username=body.username))


# ── Logout ────────────────────────────────────────────────────────────────────

@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie. Safe to call when not logged in."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return MessageResponse(message="Logged out")
