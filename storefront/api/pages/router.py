"""Site pages: sitemap and the catch-all page route."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK, HTTP_404_NOT_FOUND

from storefront.api.dependencies import get_cms, get_hreflang
from storefront.api.pages.models import PageResponse
from storefront.api.pages.services import PageService
from storefront.cms.client import CMSClient
from storefront.core.locales import split_path
from storefront.seo.hreflang import HreflangGenerator
from storefront.seo.sitemap import SitemapBuilder, render_sitemap

router = APIRouter(tags=["pages"])


def get_page_service(
    cms: CMSClient = Depends(get_cms),
    hreflang: HreflangGenerator = Depends(get_hreflang),
) -> PageService:
    return PageService(cms, hreflang)


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap(
    cms: CMSClient = Depends(get_cms),
    hreflang: HreflangGenerator = Depends(get_hreflang),
) -> Response:
    """Sitemap of every page in every locale."""
    entries = await SitemapBuilder(cms, hreflang).build()
    return Response(content=render_sitemap(entries), media_type="application/xml")


@router.get("/", response_model=PageResponse)
@router.get("/{slug:path}", response_model=PageResponse)
async def get_page(
    request: Request,
    slug: str = "",
    service: PageService = Depends(get_page_service),
) -> JSONResponse:
    """
    Resolve a site URL to its page.

    The first path segment selects the locale when it is a supported locale
    code. Pages that don't exist, or that are requested under the wrong
    parent, answer 404 with the not-found page's metadata.
    """
    page = await service.resolve(
        split_path(slug),
        locale=getattr(request.state, "locale", None),
        lang_code=getattr(request.state, "lang_code", None),
    )
    return JSONResponse(
        status_code=HTTP_404_NOT_FOUND if page.not_found else HTTP_200_OK,
        content=page.model_dump(mode="json"),
    )
