"""
Rate Limiting Middleware

Throttles login attempts per client address using Redis.
The dashboard has a single shared password, so the login endpoint is the
one place worth protecting against guessing.

ARCHITECTURE: token bucket stored in Redis, one bucket per client address.
If Redis is unreachable the limiter fails open and logs a warning.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import redis
import time
import logging

from stable_admin.config import Settings
from stable_admin.utils.logging import log_security_event

logger = logging.getLogger(__name__)

# Paths that consume tokens
THROTTLED_PATHS = (
    "/auth/login",
)


class TokenBucket:
    """
    Token bucket kept in Redis.

    - Bucket holds at most `burst` tokens
    - Tokens refill at `rate_per_minute`
    - Each request consumes one token
    """

    def __init__(self, client, rate_per_minute: int, burst: int):
        self.client = client
        self.rate_per_minute = rate_per_minute
        self.burst = burst

    def consume(self, identifier: str, now: float = None) -> tuple[bool, int]:
        """
        Take one token for identifier.

        Returns: (allowed: bool, retry_after: int)
        """
        key = f"rate_limit:{identifier}"
        key_timestamp = f"{key}:timestamp"
        now = time.time() if now is None else now

        current_tokens = self.client.get(key)
        last_update = self.client.get(key_timestamp)

        if current_tokens is None:
            # First request - initialize bucket
            self.client.setex(key, 60, self.burst - 1)
            self.client.setex(key_timestamp, 60, now)
            return True, 0

        current_tokens = float(current_tokens)
        last_update = float(last_update) if last_update else now

        # Refill based on elapsed time
        elapsed = now - last_update
        tokens_to_add = elapsed * (self.rate_per_minute / 60.0)
        new_tokens = min(self.burst, current_tokens + tokens_to_add)

        if new_tokens >= 1:
            new_tokens -= 1
            self.client.setex(key, 60, new_tokens)
            self.client.setex(key_timestamp, 60, now)
            return True, 0

        tokens_needed = 1 - new_tokens
        retry_after = int((tokens_needed / (self.rate_per_minute / 60.0)) + 1)
        return False, retry_after


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket rate limiter for login attempts."""

    def __init__(self, app, settings: Settings, redis_client=None):
        super().__init__(app)
        self.settings = settings

        if redis_client is not None:
            self.redis_client = redis_client
            self.redis_available = True
        else:
            try:
                self.redis_client = redis.from_url(
                    settings.REDIS_URL,
                    decode_responses=True,
                    socket_connect_timeout=5
                )
                self.redis_client.ping()
                self.redis_available = True
                logger.info("Redis connection established for rate limiting")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.error(f"Redis connection failed: {e}")
                self.redis_available = False

        self.bucket = TokenBucket(
            self.redis_client,
            settings.RATE_LIMIT_PER_MINUTE,
            settings.RATE_LIMIT_BURST
        ) if self.redis_available else None

    async def dispatch(self, request: Request, call_next):
        """Apply rate limiting to throttled paths."""
        if not any(request.url.path.startswith(path) for path in THROTTLED_PATHS):
            return await call_next(request)

        # Graceful degradation: availability over strict limiting
        if not self.redis_available:
            logger.warning("Rate limiting disabled - Redis unavailable")
            return await call_next(request)

        client = request.client.host if request.client else "unknown"

        try:
            allowed, retry_after = self.bucket.consume(client)
        except redis.RedisError as e:
            logger.error(f"Redis error in rate limiting: {e}")
            return await call_next(request)

        if not allowed:
            log_security_event(logger, "rate_limit_exceeded", client=client, path=request.url.path)
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "message": "Rate limit exceeded. Please try again later.",
                    "errors": [f"Retry after {retry_after} seconds"],
                    "type": "rate_limit_exceeded"
                },
                headers={"Retry-After": str(retry_after)}
            )

        return await call_next(request)
