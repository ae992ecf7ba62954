"""Tests for service endpoints."""

import pytest

from storefront.middleware.correlation import REQUEST_ID_HEADER


def test_health(test_app_client) -> None:
    response = test_app_client.get("/api/health", headers={REQUEST_ID_HEADER: "test-health"})

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "version": "0.1.0",
        "correlation_id": "test-health",
    }
    assert response.headers[REQUEST_ID_HEADER] == "test-health"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_metrics_endpoint(test_app_client) -> None:
    test_app_client.get("/api/health")

    response = test_app_client.get("/metrics")

    assert response.status_code == 200
    assert b"storefront_http_requests_total" in response.content


def test_docs_are_not_treated_as_pages(test_app_client) -> None:
    response = test_app_client.get("/openapi.json")

    assert response.status_code == 200
    assert "/api/health" in response.json()["paths"]


@pytest.mark.asyncio
async def test_health_async_client(test_app_async_client) -> None:
    response = await test_app_async_client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
