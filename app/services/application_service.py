"""
Application service: accepts a validated recruiting submission and stores it.
"""
import logging

from pymongo.errors import DuplicateKeyError

from app.config import settings
from app.core.exceptions import ConflictException, UnknownException
from app.core.security import hash_phone, mask_phone
from app.database import MongoGateway
from app.models.application import ApplicationDocument
from app.schemas.application import ApplicationRequest

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An application with this email already exists"


def submit_application(gateway: MongoGateway, data: ApplicationRequest, client_ip: str) -> str:
    """
    Stores one application and returns its inserted id as a string.

    The email has already been lowercased by the schema, so the duplicate
    check is case-insensitive. Check-then-insert is not atomic: two
    simultaneous submissions with the same email can both pass the check.
    A unique index on `email` closes that gap and is reported as 409 too.
    """
    collection = settings.mongo_applications_collection

    if gateway.find_one(collection, {"email": data.email}):
        logger.warning(f"Duplicate application rejected from {client_ip}")
        raise ConflictException(DUPLICATE_EMAIL_MESSAGE)

    document = ApplicationDocument(
        name=data.name,
        email=data.email,
        phone_hash=hash_phone(data.phone),
        phone_display=mask_phone(data.phone),
        submitted_from=client_ip,
    )

    try:
        result = gateway.insert_one(collection, document.to_document())
    except DuplicateKeyError:
        logger.warning(f"Duplicate application rejected by index from {client_ip}")
        raise ConflictException(DUPLICATE_EMAIL_MESSAGE)

    if not result.acknowledged:
        logger.error("Application insert was not acknowledged")
        raise UnknownException()

    logger.info(f"Application accepted: id={result.inserted_id}, phone={document.phone_display}")
    return str(result.inserted_id)
