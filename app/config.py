from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────
    # Optional at start-up: a missing value is reported per request as a
    # ConfigException (500) by the persistence gateway.
    mongo_login: Optional[str] = None
    mongo_database: Optional[str] = None
    mongo_collection: Optional[str] = None          # admin instances + login store
    mongo_applications_collection: str = "applications"
    mongo_timeout_ms: int = 5000

    # ── Rate limiting ─────────────────────────────────────────
    # Strings use the `limits` notation, e.g. "5/15minutes", "3/hour".
    rate_limit_storage_uri: str = "memory://"
    global_rate_limit: str = "200/minute"
    application_rate_limit: str = "5/15minutes"
    login_rate_limit: str = "5/15minutes"
    create_instance_rate_limit: str = "3/hour"

    # ── Request size ceilings (bytes) ─────────────────────────
    application_max_body_bytes: int = 1024
    login_max_body_bytes: int = 512
    create_instance_max_body_bytes: int = 256

    # ── Credentials ───────────────────────────────────────────
    password_hash_rounds: int = 12
    phone_hash_rounds: int = 10
    login_min_response_seconds: float = 0.5

    # ── Session ───────────────────────────────────────────────
    session_cookie_name: str = "session"
    session_cookie_value: str = "authenticated"
    session_max_age_seconds: int = 3600
    protected_path_prefixes: str = "/admin-home,/general-setup,/targeting-setup"

    # ── App ───────────────────────────────────────────────────
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Split comma-separated origins into a list, stripping whitespace."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def protected_prefixes_list(self) -> list[str]:
        return [
            prefix.strip().rstrip("/")
            for prefix in self.protected_path_prefixes.split(",")
            if prefix.strip().rstrip("/")
        ]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    class Config:
        env_file = ".env"
        # Case-insensitive so MONGO_LOGIN and mongo_login both work
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings loader: reads .env once and reuses.
    Use this everywhere instead of instantiating Settings() directly.
    """
    return Settings()


# Module-level singleton for convenience imports
settings = get_settings()
