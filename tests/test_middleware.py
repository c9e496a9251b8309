"""
Tests for rate limiting, security headers, CORS and body size limits.
"""

import json

from conftest import make_settings, user_messages
from fastapi.testclient import TestClient

from oked_assistant.api.app import create_app
from oked_assistant.api.middleware import FixedWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_rate_limiter_fixed_window():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(window_seconds=900, max_requests=2, clock=clock)

    assert limiter.hit("10.0.0.1")
    assert limiter.hit("10.0.0.1")
    assert not limiter.hit("10.0.0.1")
    # Other clients have their own window
    assert limiter.hit("10.0.0.2")

    clock.now = 900
    assert limiter.hit("10.0.0.1")


def test_rate_limiter_forgets_expired_clients():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(window_seconds=900, max_requests=2, clock=clock)

    for i in range(10_000):
        limiter.hit(f"10.{i // 65536}.{i // 256 % 256}.{i % 256}")
    assert limiter.tracked_clients == 10_000

    clock.now = 900
    assert limiter.hit("192.168.0.1")
    assert limiter.tracked_clients == 1


def test_rate_limiter_sweep_keeps_live_windows():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(window_seconds=900, max_requests=2, clock=clock)

    limiter.hit("10.0.0.1")
    clock.now = 600
    limiter.hit("10.0.0.2")
    limiter.hit("10.0.0.2")

    clock.now = 900
    assert not limiter.hit("10.0.0.2")
    assert limiter.tracked_clients == 1


def test_rate_limit_returns_429():
    app = create_app(settings=make_settings(rate_limit_max=2))
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert client.get("/health").status_code == 200
        response = client.get("/health")

    assert response.status_code == 429
    assert response.json() == {"error": "Too many requests from this IP"}


def test_rate_limit_uses_last_forwarded_hop():
    app = create_app(settings=make_settings(rate_limit_max=1))
    with TestClient(app) as client:
        first = client.get("/health", headers={"x-forwarded-for": "1.1.1.1, 10.0.0.1"})
        other = client.get("/health", headers={"x-forwarded-for": "10.0.0.2"})
        spoofed = client.get("/health", headers={"x-forwarded-for": "9.9.9.9, 10.0.0.1"})

    assert first.status_code == 200
    assert other.status_code == 200
    assert spoofed.status_code == 429


def test_security_headers(offline_client):
    response = offline_client.get("/health")
    assert "connect-src 'self' https://api.anthropic.com" in response.headers["content-security-policy"]
    assert response.headers["strict-transport-security"] == "max-age=31536000; includeSubDomains; preload"
    assert response.headers["x-content-type-options"] == "nosniff"


def test_security_headers_on_errors(offline_client):
    response = offline_client.get("/nope")
    assert response.status_code == 404
    assert "strict-transport-security" in response.headers


def test_cors_allows_known_origin(offline_client):
    response = offline_client.options(
        "/api/claude",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_allows_frontend_url():
    app = create_app(settings=make_settings(frontend_url="https://oked.example.kz"))
    with TestClient(app) as client:
        response = client.get("/health", headers={"Origin": "https://oked.example.kz"})
    assert response.headers["access-control-allow-origin"] == "https://oked.example.kz"


def test_cors_rejects_unknown_origin(offline_client):
    response = offline_client.get("/health", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in response.headers


def test_body_size_limit():
    app = create_app(settings=make_settings(max_body_bytes=64))
    with TestClient(app) as client:
        response = client.post("/api/claude", json={"messages": user_messages("x" * 200)})

    assert response.status_code == 413
    assert response.json() == {"error": "Request entity too large"}


def test_body_size_limit_applies_to_chunked_bodies():
    body = json.dumps({"messages": user_messages("x" * 200)}).encode()
    chunks = [body[i : i + 16] for i in range(0, len(body), 16)]

    app = create_app(settings=make_settings(max_body_bytes=64))
    with TestClient(app) as client:
        response = client.post(
            "/api/claude",
            content=iter(chunks),
            headers={"content-type": "application/json"},
        )

    assert response.status_code == 413
    assert response.json() == {"error": "Request entity too large"}
    assert "strict-transport-security" in response.headers


def test_body_size_limit_allows_small_chunked_bodies(offline_client):
    body = json.dumps({"messages": user_messages("Ресторан")}).encode()
    response = offline_client.post(
        "/api/claude",
        content=iter([body[:10], body[10:]]),
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 200
