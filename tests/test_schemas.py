"""
tests/test_schemas.py: Input validation and normalisation
"""
import pytest

from app.core.dependencies import validate_payload
from app.core.exceptions import ValidationException
from app.schemas.application import ApplicationRequest
from app.schemas.auth import LoginRequest

VALID_APPLICATION = {"name": "Ada Lovelace", "email": "ada@example.com", "phone": "+15551234567"}


def _message(schema, payload) -> str:
    with pytest.raises(ValidationException) as exc_info:
        validate_payload(schema, payload)
    return exc_info.value.detail


def test_application_is_normalised():
    data = validate_payload(ApplicationRequest, {
        "name": "  Ada Lovelace  ",
        "email": "  Ada@Example.COM ",
        "phone": " +1 (555) 123-4567 ",
    })
    assert data.name == "Ada Lovelace"
    assert data.email == "ada@example.com"
    assert data.phone == "+1 (555) 123-4567"


def test_application_phone_strips_disallowed_characters():
    data = validate_payload(ApplicationRequest, {**VALID_APPLICATION, "phone": "555#123*4567"})
    assert data.phone == "5551234567"


def test_application_keeps_markup_in_name():
    """Names are stored raw; escaping happens wherever they are rendered."""
    data = validate_payload(ApplicationRequest, {**VALID_APPLICATION, "name": "<b>Ada</b>"})
    assert data.name == "<b>Ada</b>"


@pytest.mark.parametrize("payload, message", [
    (["not", "an", "object"], "Invalid input data"),
    ("just a string", "Invalid input data"),
    (None, "Invalid input data"),
    ({"name": "Ada", "email": "ada@example.com"}, "All fields are required"),
    ({**VALID_APPLICATION, "phone": ""}, "All fields are required"),
    ({**VALID_APPLICATION, "name": "   "}, "All fields are required"),
    ({**VALID_APPLICATION, "phone": 5551234567}, "Invalid field types"),
    ({**VALID_APPLICATION, "name": "x" * 101}, "Field length exceeds maximum allowed"),
    ({**VALID_APPLICATION, "email": "a" * 95 + "@x.com"}, "Field length exceeds maximum allowed"),
    ({**VALID_APPLICATION, "phone": "1" * 21}, "Field length exceeds maximum allowed"),
    ({**VALID_APPLICATION, "email": "not-an-email"}, "Invalid email format"),
    ({**VALID_APPLICATION, "email": "ada@example"}, "Invalid email format"),
    ({**VALID_APPLICATION, "phone": "0123456"}, "Invalid phone number format"),
    ({**VALID_APPLICATION, "phone": "abc"}, "Invalid phone number format"),
    ({**VALID_APPLICATION, "phone": "12345678901234567"}, "Invalid phone number format"),
])
def test_application_rejections(payload, message):
    assert _message(ApplicationRequest, payload) == message


def test_application_first_failing_check_wins():
    # Missing email is reported even though name also has the wrong type
    payload = {"name": 42, "email": "", "phone": "+15551234567"}
    assert _message(ApplicationRequest, payload) == "All fields are required"


def test_login_username_is_trimmed_and_lowercased():
    data = validate_payload(LoginRequest, {"username": "  AdminUser ", "password": "Secret1234"})
    assert data.username == "adminuser"
    assert data.password == "Secret1234"


def test_login_password_is_not_trimmed():
    data = validate_payload(LoginRequest, {"username": "admin", "password": " secret "})
    assert data.password == " secret "


@pytest.mark.parametrize("payload, message", [
    (42, "Invalid input data"),
    ({"username": "admin"}, "Username and password are required"),
    ({"username": "", "password": "secret1"}, "Username and password are required"),
    ({"username": ["admin"], "password": "secret1"}, "Invalid field types"),
    ({"username": "a" * 51, "password": "secret1"}, "Field length exceeds maximum allowed"),
    ({"username": "admin", "password": "p" * 101}, "Field length exceeds maximum allowed"),
    ({"username": "ab", "password": "secret1"},
     "Username must be at least 3 characters and password at least 6 characters"),
    ({"username": "admin", "password": "12345"},
     "Username must be at least 3 characters and password at least 6 characters"),
])
def test_login_rejections(payload, message):
    assert _message(LoginRequest, payload) == message
