from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    PENDING = "pending"


class ApplicationDocument(BaseModel):
    """
    One recruiting submission, as stored in the applications collection.

    Security notes:
    - The plaintext phone number is NEVER stored, only its bcrypt hash
      (`phone`) and a masked display form (`phoneDisplay`).
    - `email` is already trimmed and lowercased; it is the uniqueness key.
    - Records are write-once; nothing in this service updates or deletes them.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    name: str
    email: str
    phone_hash: str = Field(alias="phone")
    phone_display: str = Field(alias="phoneDisplay")
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="submittedAt",
    )
    submitted_from: str = Field(alias="submittedFrom")  # best-effort client IP
    status: ApplicationStatus = ApplicationStatus.PENDING

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
