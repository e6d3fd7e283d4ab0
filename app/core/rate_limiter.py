"""
Rate limiting.

Two layers share the same `limits` machinery that slowapi is built on:

1. `limiter`: slowapi Limiter registered with SlowAPIMiddleware in main.py.
   Applies GLOBAL_RATE_LIMIT to every route as a coarse per-IP ceiling.

2. PurposeRateLimiter: fixed-window counters keyed by (purpose, client IP)
   for the three API endpoints. Login counts every attempt up front and gives
   the slot back unless the credentials were wrong, which a route decorator
   can't express.

Storage is picked by RATE_LIMIT_STORAGE_URI: "memory://" keeps counters in
process (single instance only); a shared store such as "redis://host:6379"
is required once more than one instance serves traffic.
"""
import math
import time

from fastapi import Request
from limits import parse
from limits.storage import Storage, storage_from_string
from limits.strategies import FixedWindowRateLimiter
from slowapi import Limiter

from app.config import settings


def get_client_ip(request: Request) -> str:
    """
    Best-effort client address. Proxy headers are trusted as-is, so this is
    only as honest as the reverse proxy in front of the app.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[settings.global_rate_limit],
    storage_uri=settings.rate_limit_storage_uri,
)


class PurposeRateLimiter:
    """
    Fixed-window counter for one purpose ("application", "login", "create").

    The first hit for a client opens a window of the configured length.
    Once the window has expired the next hit starts a fresh one; nothing has
    to sweep old windows for the decision to be correct. Per-key locking is
    handled by the storage, so concurrent worker threads can't lose counts.
    """

    def __init__(self, purpose: str, limit: str, storage: Storage):
        self.purpose = purpose
        self.item = parse(limit)
        self.storage = storage
        self._strategy = FixedWindowRateLimiter(storage)

    def check(self, client_ip: str) -> bool:
        """Count this request and report whether it is within the limit."""
        return self._strategy.hit(self.item, self.purpose, client_ip)

    def release(self, client_ip: str) -> None:
        """
        Give back one request counted by check(). A no-op once the window
        has expired, so a late release can't push the next window below zero.
        """
        key = self.item.key_for(self.purpose, client_ip)
        if self.storage.get(key) > 0:
            self.storage.incr(key, self.item.get_expiry(), amount=-1)

    def remaining(self, client_ip: str) -> int:
        return self._strategy.get_window_stats(self.item, self.purpose, client_ip).remaining

    def retry_after(self, client_ip: str) -> int:
        """Whole seconds until the client's current window resets."""
        reset_time = self._strategy.get_window_stats(self.item, self.purpose, client_ip).reset_time
        return max(0, math.ceil(reset_time - time.time()))

    def reset(self) -> None:
        self.storage.reset()


# One storage shared by all purposes; keys are namespaced by purpose.
_storage = storage_from_string(settings.rate_limit_storage_uri)

application_limiter = PurposeRateLimiter("application", settings.application_rate_limit, _storage)
login_limiter = PurposeRateLimiter("login", settings.login_rate_limit, _storage)
instance_limiter = PurposeRateLimiter("create", settings.create_instance_rate_limit, _storage)
