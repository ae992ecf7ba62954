"""Service layer for page resolution."""

import asyncio
from collections.abc import Sequence
from typing import Any, Optional

from storefront.api.pages.models import LayoutData, PageResponse
from storefront.cms.client import CMSClient, DocumentNotFoundError
from storefront.cms.models import ContentItem, SingletonDocument
from storefront.core.locales import (
    get_language_code,
    get_locale_from_slug,
    get_uid_from_slug,
)
from storefront.core.logging import get_logger
from storefront.rendering.slice_zone import render_slices
from storefront.routing.url_validator import extract_actual_uid, validate_url_structure
from storefront.seo.breadcrumbs import build_breadcrumbs
from storefront.seo.hreflang import HreflangGenerator
from storefront.seo.metadata import build_not_found_metadata, build_page_metadata

logger = get_logger(__name__)

LAYOUT_DOCUMENT_TYPES = ("navbar", "footer", "cookie_banner")


def _document_dump(document: Optional[SingletonDocument]) -> Optional[dict[str, Any]]:
    return document.model_dump(mode="json") if document is not None else None


def page_context(page: ContentItem, locale: str) -> dict[str, Any]:
    """Page-level values handed to every slice."""
    return {
        "stripe_product_id": page.data.stripe_product_id,
        "sizes": page.data.sizes,
        "previous_price": page.data.previous_price,
        "locale": locale,
    }


class PageService:
    """Resolves a URL to a fully assembled page."""

    def __init__(self, cms: CMSClient, hreflang: HreflangGenerator) -> None:
        self.cms = cms
        self.hreflang = hreflang

    async def get_layout(self, locale: str) -> LayoutData:
        navbar, footer, cookie_banner = await asyncio.gather(
            *(self.cms.get_cms_data(doc_type, locale) for doc_type in LAYOUT_DOCUMENT_TYPES)
        )
        return LayoutData(
            navbar=_document_dump(navbar),
            footer=_document_dump(footer),
            cookie_banner=_document_dump(cookie_banner),
        )

    async def not_found(
        self, locale: str, uid: str, lang_code: Optional[str] = None
    ) -> PageResponse:
        metadata, layout = await asyncio.gather(
            build_not_found_metadata(self.cms, locale), self.get_layout(locale)
        )
        return PageResponse(
            locale=locale,
            lang_code=lang_code or get_language_code(locale),
            uid=uid,
            not_found=True,
            metadata=metadata,
            layout=layout,
        )

    async def resolve(
        self,
        slug: Sequence[str],
        locale: Optional[str] = None,
        lang_code: Optional[str] = None,
    ) -> PageResponse:
        """Resolve URL path segments to a page.

        ``locale`` and ``lang_code`` are taken from the locale middleware when
        it already resolved them. Unknown pages and pages requested under a
        non-canonical URL come back with ``not_found`` set.

        Raises:
            CMSError: The CMS could not be queried
        """
        segments = list(slug)
        locale = locale or get_locale_from_slug(segments)
        lang_code = lang_code or get_language_code(locale)
        actual_uid = extract_actual_uid(get_uid_from_slug(segments), segments)

        try:
            page = await self.cms.get_by_uid("page", actual_uid, locale)
        except DocumentNotFoundError:
            logger.debug("page_not_found", uid=actual_uid, locale=locale)
            return await self.not_found(locale, actual_uid, lang_code)

        if not validate_url_structure(page, segments, locale):
            logger.debug("page_url_rejected", uid=actual_uid, path="/".join(segments))
            return await self.not_found(locale, actual_uid, lang_code)

        home_page, hreflang, layout = await asyncio.gather(
            self.cms.get_home_page(locale),
            self.hreflang.generate(page, locale),
            self.get_layout(locale),
        )

        return PageResponse(
            locale=locale,
            lang_code=lang_code,
            uid=page.uid,
            metadata=build_page_metadata(page, locale, hreflang),
            breadcrumbs=build_breadcrumbs(page, home_page, locale),
            slices=render_slices(page.data.slices, page_context(page, locale)),
            layout=layout,
        )
