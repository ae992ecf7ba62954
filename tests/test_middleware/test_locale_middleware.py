"""Tests for the locale middleware."""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from storefront.middleware.locale import LANG_CODE_HEADER, LOCALE_HEADER, LocaleMiddleware


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(LocaleMiddleware, api_prefix="/api")

    @app.get("/api/health")
    async def health(request: Request) -> dict:
        return {"locale": getattr(request.state, "locale", None)}

    @app.get("/{path:path}")
    async def page(request: Request, path: str) -> dict:
        return {"locale": request.state.locale, "lang_code": request.state.lang_code}

    return TestClient(app)


@pytest.mark.parametrize(
    "path, locale, lang_code",
    [
        ("/", "sv-se", "sv"),
        ("/om-oss", "sv-se", "sv"),
        ("/en-us", "en-us", "en"),
        ("/da-dk/om-os", "da-dk", "da"),
        ("/de-de/page", "sv-se", "sv"),
    ],
)
def test_locale_is_resolved_from_path(client: TestClient, path, locale, lang_code) -> None:
    response = client.get(path)

    assert response.json() == {"locale": locale, "lang_code": lang_code}
    assert response.headers[LOCALE_HEADER] == locale
    assert response.headers[LANG_CODE_HEADER] == lang_code


def test_api_paths_pass_through(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.json() == {"locale": None}
    assert LOCALE_HEADER not in response.headers


@pytest.mark.parametrize(
    "path", ["/.well-known/appspecific/com.chrome.devtools.json", "/devtools/page"]
)
def test_tooling_paths_get_empty_not_found(client: TestClient, path) -> None:
    response = client.get(path)

    assert response.status_code == 404
    assert response.content == b""
