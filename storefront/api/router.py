"""JSON API router."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from storefront.api.contact.router import router as contact_router
from storefront.api.stripe.router import router as stripe_router
from storefront.core.config import settings

router = APIRouter(default_response_class=JSONResponse)


@router.get("/health", tags=["health"])
async def health_check(request: Request) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Health status information including correlation ID
    """
    return {
        "status": "healthy",
        "version": settings.version,
        "correlation_id": getattr(request.state, "correlation_id", None),
    }


router.include_router(contact_router)
router.include_router(stripe_router)
