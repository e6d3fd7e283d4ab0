"""
Admin instance service: one-shot creation of the deployment's admin credentials.

Security design decisions:
  1. Credentials come from the `secrets` CSPRNG (see core.security).
  2. Only the bcrypt hash is stored; the plaintext is returned to the caller once.
  3. The singleton rule is a count-then-insert check, not a transaction.
     Two simultaneous first calls can both succeed; a unique index on
     `type` turns the loser into a 409.
"""
import logging

from pymongo.errors import DuplicateKeyError

from app.config import settings
from app.core.exceptions import ConflictException, UnknownException
from app.core.security import generate_credentials, hash_password
from app.database import MongoGateway
from app.models.admin_instance import AdminInstanceDocument

logger = logging.getLogger(__name__)

INSTANCE_EXISTS_MESSAGE = "An admin instance is already created"


def create_admin_instance(gateway: MongoGateway, client_ip: str) -> tuple[str, str]:
    """Returns (username, plaintext_password). Raises ConflictException if one exists."""
    collection = settings.mongo_collection

    if gateway.count_documents(collection) > 0:
        logger.warning(f"Admin instance creation refused for {client_ip}: already exists")
        raise ConflictException(INSTANCE_EXISTS_MESSAGE)

    username, password = generate_credentials()
    document = AdminInstanceDocument(
        username=username,
        password_hash=hash_password(password),
        created_from=client_ip,
    )

    try:
        result = gateway.insert_one(collection, document.to_document())
    except DuplicateKeyError:
        logger.warning(f"Admin instance creation refused by index for {client_ip}")
        raise ConflictException(INSTANCE_EXISTS_MESSAGE)

    if not result.acknowledged:
        logger.error("Admin instance insert was not acknowledged")
        raise UnknownException()

    logger.info(f"Admin instance created: username={username}")
    return username, password
