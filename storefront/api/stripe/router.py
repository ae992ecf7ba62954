"""Payment endpoints: product lookups and checkout sessions."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from storefront.api.dependencies import get_catalog, get_checkout
from storefront.api.stripe.models import (
    BatchProductsRequest,
    BatchProductsResponse,
    CheckoutRequest,
    CheckoutResponse,
)
from storefront.core.errors import APIError, ConfigurationError
from storefront.core.logging import get_logger
from storefront.payments.checkout import CheckoutItem, CheckoutService
from storefront.payments.gateway import PaymentError, ProductNotFoundError
from storefront.payments.products import (
    DEFAULT_PRODUCT_LOCALE,
    NO_ACTIVE_PRICES_MESSAGE,
    PRODUCT_LOOKUP_FAILED_MESSAGE,
    PRODUCT_NOT_FOUND_MESSAGE,
    NoActivePriceError,
    ProductCatalog,
    ProductInfo,
)

router = APIRouter(prefix="/stripe", tags=["stripe"])
logger = get_logger(__name__)

CHECKOUT_FAILED_MESSAGE = "Failed to create checkout session"


@router.get("/product/{product_id}", response_model=ProductInfo)
async def get_product(
    product_id: str,
    locale: Optional[str] = Query(
        None, description="Locale used to format the price, e.g. sv-se"
    ),
    catalog: ProductCatalog = Depends(get_catalog),
) -> ProductInfo:
    """
    Get a product and its default price.

    The default price is the first active price. Amounts are returned in
    currency units and as a formatted string without decimals.
    """
    try:
        return await catalog.get_product(product_id, locale or DEFAULT_PRODUCT_LOCALE)
    except NoActivePriceError:
        raise APIError(HTTP_404_NOT_FOUND, NO_ACTIVE_PRICES_MESSAGE)
    except ProductNotFoundError:
        raise APIError(HTTP_404_NOT_FOUND, PRODUCT_NOT_FOUND_MESSAGE)
    except (PaymentError, ConfigurationError) as e:
        logger.error("product_lookup_failed", product_id=product_id, error=str(e))
        raise APIError(HTTP_500_INTERNAL_SERVER_ERROR, PRODUCT_LOOKUP_FAILED_MESSAGE) from e


@router.post(
    "/products/batch",
    response_model=BatchProductsResponse,
    response_model_exclude_unset=True,
    response_model_by_alias=True,
)
async def get_products_batch(
    body: BatchProductsRequest,
    catalog: ProductCatalog = Depends(get_catalog),
) -> BatchProductsResponse:
    """
    Look up several products at once.

    Always answers 200 once the body is valid; products that could not be
    fetched are listed under ``errors``.
    """
    if not isinstance(body.product_ids, list):
        raise APIError(HTTP_400_BAD_REQUEST, "productIds must be an array")
    if not body.product_ids:
        return BatchProductsResponse(products=[])

    result = await catalog.get_products(
        [str(product_id) for product_id in body.product_ids],
        body.locale or DEFAULT_PRODUCT_LOCALE,
    )
    if result.errors:
        return BatchProductsResponse(products=result.products, errors=result.errors)
    return BatchProductsResponse(products=result.products)


def resolve_checkout_items(body: CheckoutRequest) -> list[CheckoutItem]:
    """Normalize a checkout request to a list of items.

    Raises:
        APIError: Neither a single product nor any items were given
    """
    if body.items is not None:
        items = body.items
    else:
        if not body.product_id or not body.price_id:
            raise APIError(HTTP_400_BAD_REQUEST, "Product ID and Price ID are required")
        items = [
            CheckoutItem(
                product_id=body.product_id,
                price_id=body.price_id,
                quantity=body.quantity,
                metadata=body.metadata,
            )
        ]
    if not items:
        raise APIError(HTTP_400_BAD_REQUEST, "No items provided")
    return items


@router.post("/checkout", response_model=CheckoutResponse, response_model_by_alias=True)
async def create_checkout_session(
    request: Request,
    body: CheckoutRequest,
    checkout: CheckoutService = Depends(get_checkout),
) -> CheckoutResponse:
    """
    Create a hosted checkout session.

    Prices and product details are read from the payment processor; only
    ids and quantities are taken from the request.
    """
    items = resolve_checkout_items(body)
    try:
        session = await checkout.create_session(
            items,
            origin=request.headers.get("origin"),
            requested_cancel_url=body.cancel_url,
        )
    except (PaymentError, ConfigurationError) as e:
        logger.error(
            "checkout_session_failed",
            error_type=e.__class__.__name__,
            error=str(e),
            items_count=len(items),
        )
        raise APIError(HTTP_500_INTERNAL_SERVER_ERROR, CHECKOUT_FAILED_MESSAGE) from e

    return CheckoutResponse(session_id=session.id, url=session.url)
