"""
Auth schemas: login request body and the login/logout responses.
"""
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


class LoginRequest(BaseModel):
    username: str
    password: str

    @model_validator(mode="before")
    @classmethod
    def check_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("Invalid input data")
        username, password = data.get("username"), data.get("password")
        if not username or not password:
            raise ValueError("Username and password are required")
        if not isinstance(username, str) or not isinstance(password, str):
            raise ValueError("Invalid field types")
        if len(username) > USERNAME_MAX_LENGTH or len(password) > PASSWORD_MAX_LENGTH:
            raise ValueError("Field length exceeds maximum allowed")
        if len(username) < USERNAME_MIN_LENGTH or len(password) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                "Username must be at least 3 characters and password at least 6 characters"
            )
        return data

    # Password is compared byte-for-byte, so only the username is normalised.
    @field_validator("username")
    @classmethod
    def username_normalised(cls, v: str) -> str:
        return v.strip().lower()


class LoginUser(BaseModel):
    username: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    user: LoginUser


class MessageResponse(BaseModel):
    message: str
