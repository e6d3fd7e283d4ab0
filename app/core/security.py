"""
Security utilities: password/phone hashing, dummy verification for timing
safety, admin credential generation and session sentinel checks.
"""
import re
import secrets
import string
from typing import Optional

from passlib.context import CryptContext

from app.config import settings

# ── Hashing ───────────────────────────────────────────────────────────────────
# bcrypt is the industry standard for password hashing.
# deprecated="auto" means passlib will auto-upgrade old hashes on next login.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)

# Phone numbers are not secrets we ever verify interactively, so a cheaper cost is fine.
phone_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.phone_hash_rounds,
)

# Real hash, computed once at import. Only ever compared against when the
# username doesn't exist, so the no-user branch pays the same bcrypt cost.
_DUMMY_HASH: str = pwd_context.hash("__dummy_timing_prevention__")

PASSWORD_ALPHABET = string.ascii_letters + string.digits
PASSWORD_LENGTH = 10
USERNAME_DIGITS = 10

PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def verify_against_dummy(plain_password: str) -> bool:
    """Burn one full bcrypt comparison. Always False."""
    pwd_context.verify(plain_password, _DUMMY_HASH)
    return False


def hash_phone(phone: str) -> str:
    return phone_context.hash(phone)


def mask_phone(phone: str) -> str:
    """
    Display form for a phone number: first 3 and last 2 characters of the
    separator-free number, e.g. "+15551234567" -> "+15***67".

    Numbers of 5 characters or fewer keep at most their last half, so at
    least one digit is always hidden: "12345" -> "***45", "7" -> "***".
    """
    compact = PHONE_SEPARATORS.sub("", phone)
    if len(compact) > 5:
        return compact[:3] + "***" + compact[-2:]
    tail = min(2, len(compact) // 2)
    return "***" + compact[len(compact) - tail:]


def generate_credentials() -> tuple[str, str]:
    """
    Admin instance credentials from the `secrets` CSPRNG.
    Username: 10 digits, never starts with 0.
    Password: 10 characters from [A-Za-z0-9].
    """
    low = 10 ** (USERNAME_DIGITS - 1)
    username = str(low + secrets.randbelow(9 * low))
    password = "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(PASSWORD_LENGTH))
    return username, password


def is_valid_session(cookie_value: Optional[str]) -> bool:
    """Constant-time check of a session cookie against the configured sentinel."""
    if not cookie_value:
        return False
    return secrets.compare_digest(
        cookie_value.encode("utf-8"),
        settings.session_cookie_value.encode("utf-8"),
    )
