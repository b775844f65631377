"""Health endpoint smoke test."""

import uuid
from typing import Any

import pytest


@pytest.mark.asyncio
async def test_healthcheck_returns_ok(app_context: dict[str, Any]) -> None:
    client = app_context["client"]
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Point of Sale Pricing API"
    assert response.headers.get("x-request-id")


@pytest.mark.asyncio
async def test_security_headers_applied(app_context: dict[str, Any]) -> None:
    client = app_context["client"]
    request_id = uuid.uuid4().hex
    response = await client.get("/", headers={"X-Request-ID": request_id})
    assert response.json() == {"message": "Point of Sale Pricing API"}
    assert response.headers["x-request-id"] == request_id
    assert response.headers.get("x-content-type-options") == "nosniff"
