"""Tests for the security headers middleware."""

from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from storefront.middleware.security import HSTS_HEADER, SecurityHeadersMiddleware


def make_client(**options) -> TestClient:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, **options)

    @app.get("/")
    async def index() -> dict:
        return {}

    @app.get("/framed")
    async def framed() -> Response:
        return Response(headers={"X-Frame-Options": "SAMEORIGIN"})

    return TestClient(app)


def test_security_headers_are_added() -> None:
    headers = make_client(site_url="https://shop.example").get("/").headers

    assert headers["X-Content-Type-Options"] == "nosniff"
    assert headers["X-Frame-Options"] == "DENY"
    assert headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert headers[HSTS_HEADER].startswith("max-age=")


def test_endpoint_headers_win() -> None:
    client = make_client(site_url="https://shop.example")
    assert client.get("/framed").headers["X-Frame-Options"] == "SAMEORIGIN"


def test_no_hsts_over_plain_http() -> None:
    headers = make_client(site_url="http://localhost:3000").get("/").headers
    assert HSTS_HEADER not in headers


def test_extra_headers() -> None:
    client = make_client(
        site_url="https://shop.example",
        extra_headers={"Content-Security-Policy": "default-src 'self'"},
    )
    assert client.get("/").headers["Content-Security-Policy"] == "default-src 'self'"
