# models/__init__.py
# Document shapes for the MongoDB collections. These are plain pydantic
# models; the gateway in app/database.py does the actual reads and writes.

from app.models.application import ApplicationDocument, ApplicationStatus
from app.models.admin_instance import AdminInstanceDocument, InstanceStatus, InstanceType

__all__ = [
    "ApplicationDocument",
    "ApplicationStatus",
    "AdminInstanceDocument",
    "InstanceStatus",
    "InstanceType",
]
