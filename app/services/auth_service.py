"""
Auth service: credential checks against the admin instance store.
Keeps routers thin. Routers only handle HTTP, services handle logic.
"""
import logging
from typing import Optional

from app.config import settings
from app.core.security import verify_against_dummy, verify_password
from app.database import MongoGateway
from app.models.admin_instance import InstanceStatus

logger = logging.getLogger(__name__)


def authenticate(gateway: MongoGateway, username: str, password: str) -> Optional[dict]:
    """
    Returns the matching admin instance record, or None.

    Security: a bcrypt comparison runs whether or not the username exists.
    When it doesn't, the password is checked against a dummy hash, so the
    "no such user" and "wrong password" paths cost the same.
    """
    record = gateway.find_one(
        settings.mongo_collection,
        {"username": username, "status": InstanceStatus.ACTIVE.value},
    )
    password_ok = (
        verify_password(password, record["password"]) if record else verify_against_dummy(password)
    )

    if not record or not password_ok:
        return None
    return record
