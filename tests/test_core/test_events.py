"""Tests for application startup wiring."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.cms.client import CMSClient
from storefront.core.config import settings
from storefront.core.events import (
    AppState,
    build_app_state,
    create_lifespan,
    create_start_app_handler,
    create_stop_app_handler,
)
from storefront.main import create_app
from storefront.payments.gateway import StripeGateway


def test_build_app_state_wires_shared_client() -> None:
    client = httpx.AsyncClient()
    state = build_app_state(settings, http_client=client)

    assert isinstance(state.cms, CMSClient)
    assert state.cms.http_client is client
    assert state.contact_mailer.mailer.http_client is client
    assert state.cms.api_url == settings.cms_api_url
    assert isinstance(state.payments, StripeGateway)
    assert state.catalog.gateway is state.payments
    assert state.checkout.gateway is state.payments
    assert state.hreflang.cms is state.cms
    assert state.hreflang.site_url == "https://shop.example"


def test_build_app_state_uses_given_gateway(fake_gateway) -> None:
    state = build_app_state(settings, http_client=httpx.AsyncClient(), payments=fake_gateway)
    assert state.payments is fake_gateway
    assert state.catalog.gateway is fake_gateway


@pytest.mark.asyncio
async def test_startup_builds_state_once() -> None:
    app = FastAPI()
    start = create_start_app_handler(app)

    await start()
    state = app.state.services
    assert isinstance(state, AppState)

    await start()
    assert app.state.services is state

    await create_stop_app_handler(app)()
    assert state.http_client.is_closed


@pytest.mark.asyncio
async def test_startup_keeps_preset_state(fake_gateway) -> None:
    app = FastAPI()
    preset = build_app_state(settings, http_client=httpx.AsyncClient(), payments=fake_gateway)
    app.state.services = preset

    await create_start_app_handler(app)()

    assert app.state.services is preset


@pytest.mark.asyncio
async def test_shutdown_without_state() -> None:
    app = FastAPI()
    await create_stop_app_handler(app)()


@pytest.mark.asyncio
async def test_lifespan_builds_state_from_given_config() -> None:
    config = settings.model_copy(update={"SITE_URL": "https://custom.example"})
    app = FastAPI()

    async with create_lifespan(config)(app):
        state = app.state.services
        assert state.checkout.site_url == "https://custom.example"
        assert state.hreflang.site_url == "https://custom.example"

    assert state.http_client.is_closed


def test_create_app_uses_its_config() -> None:
    config = settings.model_copy(update={"SITE_URL": "https://custom.example"})
    app = create_app(config)

    with TestClient(app):
        state = app.state.services
        assert state.checkout.site_url == "https://custom.example"

    assert state.http_client.is_closed
