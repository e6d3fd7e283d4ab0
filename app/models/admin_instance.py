from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InstanceType(str, Enum):
    ADMIN = "admin"


class InstanceStatus(str, Enum):
    ACTIVE = "active"


class AdminInstanceDocument(BaseModel):
    """
    The deployment's admin credential record. At most one exists; creation
    is refused once the collection holds any document.

    `password` holds the bcrypt hash only. The plaintext is handed to the
    creator once and is not recoverable afterwards.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    username: str
    password_hash: str = Field(alias="password")
    type: InstanceType = InstanceType.ADMIN
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
    )
    created_from: str = Field(alias="createdFrom")
    status: InstanceStatus = InstanceStatus.ACTIVE

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
