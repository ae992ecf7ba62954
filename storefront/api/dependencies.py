"""FastAPI dependencies exposing the application's collaborators."""

from typing import cast

from fastapi import Depends, Request

from storefront.cms.client import CMSClient
from storefront.core.events import AppState
from storefront.mail.contact import ContactMailer
from storefront.payments.checkout import CheckoutService
from storefront.payments.products import ProductCatalog
from storefront.seo.hreflang import HreflangGenerator


def get_app_state(request: Request) -> AppState:
    return cast(AppState, request.app.state.services)


def get_cms(state: AppState = Depends(get_app_state)) -> CMSClient:
    return state.cms


def get_hreflang(state: AppState = Depends(get_app_state)) -> HreflangGenerator:
    return state.hreflang


def get_catalog(state: AppState = Depends(get_app_state)) -> ProductCatalog:
    return state.catalog


def get_checkout(state: AppState = Depends(get_app_state)) -> CheckoutService:
    return state.checkout


def get_contact_mailer(state: AppState = Depends(get_app_state)) -> ContactMailer:
    return state.contact_mailer
