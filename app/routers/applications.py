"""
Applications router: public recruiting form endpoint.

POST /api/applications
  Rate limit → size limit → JSON → validation → duplicate check → store.
  Any other method on this path is answered with 405.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.core.dependencies import read_json_body, validate_payload
from app.core.exceptions import RateLimitException
from app.core.rate_limiter import application_limiter, get_client_ip
from app.database import MongoGateway, get_gateway
from app.schemas.application import ApplicationCreatedResponse, ApplicationRequest
from app.services import application_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ApplicationCreatedResponse, status_code=201)
async def submit_application(
    request: Request,
    gateway: MongoGateway = Depends(get_gateway),
):
    """
    Accept one recruiting application.
    Every request counts toward the per-IP window, valid or not.
    """
    client_ip = get_client_ip(request)
    if not application_limiter.check(client_ip):
        logger.warning(f"Application rate limit hit: ip={client_ip}")
        raise RateLimitException(retry_after=application_limiter.retry_after(client_ip))

    payload = await read_json_body(request, settings.application_max_body_bytes)
    data = validate_payload(ApplicationRequest, payload)

    # bcrypt + pymongo are blocking; keep them off the event loop
    application_id = await run_in_threadpool(
        application_service.submit_application, gateway, data, client_ip
    )
    return ApplicationCreatedResponse(application_id=application_id)
