"""Unit tests for the login rate limiter."""
from fastapi import FastAPI
from fastapi.testclient import TestClient

from stable_admin.config import Settings
from stable_admin.middleware.rate_limit import RateLimitMiddleware, TokenBucket


class FakeRedis:
    """Minimal in-memory stand-in for the two Redis calls the bucket makes."""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = str(value)

    def ping(self):
        return True


class TestTokenBucket:
    """Tests for TokenBucket.consume."""

    def test_burst_then_reject(self):
        bucket = TokenBucket(FakeRedis(), rate_per_minute=60, burst=3)

        results = [bucket.consume("1.2.3.4", now=1000.0) for _ in range(4)]

        assert [allowed for allowed, _ in results] == [True, True, True, False]

    def test_retry_after_reflects_refill_rate(self):
        bucket = TokenBucket(FakeRedis(), rate_per_minute=60, burst=1)
        bucket.consume("client", now=1000.0)

        allowed, retry_after = bucket.consume("client", now=1000.0)

        assert allowed is False
        assert retry_after == 2

    def test_tokens_refill_over_time(self):
        bucket = TokenBucket(FakeRedis(), rate_per_minute=60, burst=1)
        bucket.consume("client", now=1000.0)

        allowed, _ = bucket.consume("client", now=1001.0)

        assert allowed is True

    def test_clients_have_separate_buckets(self):
        bucket = TokenBucket(FakeRedis(), rate_per_minute=60, burst=1)
        bucket.consume("a", now=1000.0)

        assert bucket.consume("b", now=1000.0) == (True, 0)


class TestRateLimitMiddleware:
    """Tests for the middleware wiring."""

    def make_client(self) -> TestClient:
        settings = Settings(RATE_LIMIT_PER_MINUTE=1, RATE_LIMIT_BURST=1)
        app = FastAPI()
        app.add_middleware(RateLimitMiddleware, settings=settings, redis_client=FakeRedis())

        @app.post("/auth/login")
        async def login():
            return {"success": True}

        @app.get("/health")
        async def health():
            return {"status": "healthy"}

        return TestClient(app)

    def test_login_throttled(self):
        client = self.make_client()

        assert client.post("/auth/login").status_code == 200
        response = client.post("/auth/login")

        assert response.status_code == 429
        assert response.json()["type"] == "rate_limit_exceeded"
        assert response.json()["success"] is False
        assert int(response.headers["Retry-After"]) > 0

    def test_other_paths_not_throttled(self):
        client = self.make_client()

        for _ in range(3):
            assert client.get("/health").status_code == 200
