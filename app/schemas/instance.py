"""
Admin instance schemas. The plaintext password appears here exactly once:
in the creation response. It is never stored or returned again.
"""
from pydantic import BaseModel


class InstanceCredentials(BaseModel):
    username: str
    password: str


class InstanceCreatedResponse(BaseModel):
    success: bool = True
    credentials: InstanceCredentials
