"""Page metadata (title, description, Open Graph, alternates)."""

from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, Field

from storefront.cms.client import CMSClient
from storefront.cms.models import ContentItem
from storefront.seo.hreflang import HreflangEntry

NOT_FOUND_TITLE = "404 - Page Not Found"
NOT_FOUND_DESCRIPTION = "The page you are looking for could not be found."


class OpenGraph(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    images: list[dict[str, str]] = Field(default_factory=list)


class Alternates(BaseModel):
    canonical: str = "/"
    languages: dict[str, str] = Field(default_factory=dict)


class PageMetadata(BaseModel):
    """Document head metadata for a rendered page."""

    title: Optional[str] = None
    description: Optional[str] = None
    open_graph: OpenGraph = Field(default_factory=OpenGraph)
    alternates: Optional[Alternates] = None


def build_page_metadata(
    page: ContentItem, locale: str, hreflang: Sequence[HreflangEntry]
) -> PageMetadata:
    """Build metadata for a resolved page.

    The canonical URL is the hreflang entry of the current locale.
    """
    canonical = next((entry.url for entry in hreflang if entry.lang == locale), "/")
    return PageMetadata(
        title=page.data.meta_title,
        description=page.data.meta_description,
        open_graph=OpenGraph(
            title=page.data.meta_title,
            images=[{"url": page.data.meta_image.url or ""}],
        ),
        alternates=Alternates(
            canonical=canonical,
            languages={entry.lang: entry.url for entry in hreflang},
        ),
    )


def fallback_not_found_metadata() -> PageMetadata:
    return PageMetadata(
        title=NOT_FOUND_TITLE,
        description=NOT_FOUND_DESCRIPTION,
        open_graph=OpenGraph(title=NOT_FOUND_TITLE, description=NOT_FOUND_DESCRIPTION),
    )


async def build_not_found_metadata(cms: CMSClient, locale: str) -> PageMetadata:
    """Metadata for the not-found page, from the CMS when it defines one."""
    document = await cms.get_cms_data("four_oh_four", locale)

    if document is None:
        return fallback_not_found_metadata()

    title = document.data.get("meta_title") or NOT_FOUND_TITLE
    description = document.data.get("meta_description") or NOT_FOUND_DESCRIPTION
    image = document.data.get("meta_image") or {}
    image_url = image.get("url") if isinstance(image, dict) else None
    return PageMetadata(
        title=title,
        description=description,
        open_graph=OpenGraph(
            title=title,
            description=description,
            images=[{"url": image_url}] if image_url else [],
        ),
    )
