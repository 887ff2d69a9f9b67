# tests/test_main.py
"""
Tests for application wiring.
"""
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import settings
from app.x402.middleware import X402V2Middleware

client = TestClient(app)


def test_read_root():
    """Health check reports status, name and version."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "name": settings.PROJECT_NAME,
        "version": settings.AGENT_VERSION,
    }


def test_v2_middleware_registered():
    """The x402 v2 middleware is installed on the app."""
    assert any(m.cls is X402V2Middleware for m in app.user_middleware)
