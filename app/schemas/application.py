"""
Application schemas: the public recruiting form submission and its response.

Values are validated and stored raw apart from whitespace/case normalisation;
no HTML is stripped here. Anything rendering these fields must escape them.
"""
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.security import PHONE_SEPARATORS

FIELD_MAX_LENGTH = {"name": 100, "email": 100, "phone": 20}

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Checked against the number with separators removed
PHONE_PATTERN = re.compile(r"^\+?[1-9][0-9]{0,15}$")
PHONE_DISALLOWED = re.compile(r"[^0-9+\-\s()]")


class ApplicationRequest(BaseModel):
    name: str
    email: str
    phone: str

    @model_validator(mode="before")
    @classmethod
    def check_shape(cls, data: Any) -> Any:
        """
        Structural checks, in order: object, required, types, lengths.
        The first one that fails is the one reported.
        """
        if not isinstance(data, dict):
            raise ValueError("Invalid input data")
        if any(not data.get(field) for field in FIELD_MAX_LENGTH):
            raise ValueError("All fields are required")
        if any(not isinstance(data[field], str) for field in FIELD_MAX_LENGTH):
            raise ValueError("Invalid field types")
        if any(len(data[field]) > limit for field, limit in FIELD_MAX_LENGTH.items()):
            raise ValueError("Field length exceeds maximum allowed")
        return data

    @field_validator("name")
    @classmethod
    def name_trimmed(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("All fields are required")
        return v

    @field_validator("email")
    @classmethod
    def email_valid(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        v = PHONE_DISALLOWED.sub("", v.strip())
        if not PHONE_PATTERN.match(PHONE_SEPARATORS.sub("", v)):
            raise ValueError("Invalid phone number format")
        return v


class ApplicationCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Application submitted successfully"
    application_id: str = Field(alias="applicationId")
