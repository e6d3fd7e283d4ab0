"""
Instance router: one-time admin credential bootstrap.

POST /api/create-instance
  Body is ignored (only its size is checked). Succeeds once per fresh
  database; afterwards every call gets 409 and the original credentials
  can't be retrieved again.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.core.dependencies import enforce_body_limit
from app.core.exceptions import RateLimitException
from app.core.rate_limiter import get_client_ip, instance_limiter
from app.database import MongoGateway, get_gateway
from app.schemas.instance import InstanceCreatedResponse, InstanceCredentials
from app.services import instance_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=InstanceCreatedResponse, status_code=201)
async def create_instance(
    request: Request,
    response: Response,
    gateway: MongoGateway = Depends(get_gateway),
):
    client_ip = get_client_ip(request)
    if not instance_limiter.check(client_ip):
        logger.warning(f"Instance creation rate limit hit: ip={client_ip}")
        raise RateLimitException(
            "Too many creation attempts. Please try again later.",
            retry_after=instance_limiter.retry_after(client_ip),
        )

    await enforce_body_limit(request, settings.create_instance_max_body_bytes)

    username, password = await run_in_threadpool(
        instance_service.create_admin_instance, gateway, client_ip
    )

    # The plaintext password is in this body; no intermediary may keep it.
    response.headers["Cache-Control"] = "no-store"
    return InstanceCreatedResponse(
        credentials=InstanceCredentials(username=username, password=password)
    )
