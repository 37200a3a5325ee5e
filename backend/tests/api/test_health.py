"""Health and service info — public endpoints."""

import logging
from datetime import datetime, timedelta, timezone

from app.main import create_app


async def test_health_reports_healthy(client):
    res = await client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "Healthy"
    assert body["version"] == "1.0.0"
    assert body["processorCount"] >= 1
    assert body["uptimeSeconds"] >= 0


async def test_api_health_alias(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "Healthy"


async def test_service_info_lists_auth_methods(client):
    res = await client.get("/")
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "User Management API"
    assert body["endpoints"]["users"] == "/api/users"
    assert "X-API-Key header" in body["authentication"]["methods"]
    assert "demo-token-for-testing" in body["authentication"]["validTokens"]


async def test_public_endpoint_is_still_logged(client, caplog):
    caplog.set_level(logging.INFO)
    await client.get("/health")
    assert any("Incoming GET request to /health" in r.getMessage() for r in caplog.records)


async def test_uptime_counts_from_app_start(test_app, client):
    test_app.state.started_at = datetime.now(timezone.utc) - timedelta(hours=1)
    res = await client.get("/health")
    assert res.json()["uptimeSeconds"] >= 3600


async def test_each_app_has_its_own_start_time(settings, repository):
    first = create_app(settings=settings, repository=repository)
    second = create_app(settings=settings, repository=repository)
    assert second.state.started_at >= first.state.started_at
