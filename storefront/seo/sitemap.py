"""XML sitemap covering every page in every published locale."""

import xml.etree.ElementTree as ElementTree
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from storefront.cms.client import CMSClient, CMSError
from storefront.cms.models import ContentItem
from storefront.core.config import settings
from storefront.core.locales import HOME_UID, default_locale, supported_locales
from storefront.core.logging import get_logger
from storefront.seo.hreflang import X_DEFAULT, HreflangGenerator

logger = get_logger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


class SitemapEntry(BaseModel):
    url: str
    last_modified: Optional[datetime] = None
    change_frequency: str
    priority: float


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SitemapBuilder:
    """Collects sitemap entries from the CMS."""

    def __init__(
        self,
        cms: CMSClient,
        hreflang: HreflangGenerator,
        site_url: str | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.cms = cms
        self.hreflang = hreflang
        self.site_url = (site_url or settings.SITE_URL).rstrip("/")
        self._now = now

    def home_entries(self) -> list[SitemapEntry]:
        """Root URL plus one home URL per non-default locale."""
        now = self._now()
        entries = [
            SitemapEntry(
                url=f"{self.site_url}/",
                last_modified=now,
                change_frequency="daily",
                priority=1.0,
            )
        ]
        entries.extend(
            SitemapEntry(
                url=f"{self.site_url}/{locale}",
                last_modified=now,
                change_frequency="daily",
                priority=1.0,
            )
            for locale in supported_locales()
            if locale != default_locale()
        )
        return entries

    async def _last_modified(self, page: ContentItem, lang: str) -> Optional[datetime]:
        """Publication date of the ``lang`` version of ``page``.

        Falls back to the page's own date when the alternate can't be fetched.
        """
        if lang == page.lang:
            return page.published_at
        alternate = next(
            (alt for alt in page.alternate_languages if alt.lang == lang), None
        )
        if alternate is None or not alternate.uid:
            return page.published_at
        try:
            alt_page = await self.cms.get_by_uid("page", alternate.uid, lang)
        except CMSError as e:
            logger.warning(
                "sitemap_alternate_failed", uid=alternate.uid, lang=lang, error=str(e)
            )
            return page.published_at
        return alt_page.published_at

    async def page_entries(self, page: ContentItem) -> list[SitemapEntry]:
        entries = []
        for entry in await self.hreflang.generate(page, page.lang):
            if entry.lang == X_DEFAULT:
                continue
            entries.append(
                SitemapEntry(
                    url=entry.url,
                    last_modified=await self._last_modified(page, entry.lang),
                    change_frequency="weekly",
                    priority=0.8,
                )
            )
        return entries

    async def build(self) -> list[SitemapEntry]:
        """Build all sitemap entries."""
        entries = self.home_entries()
        pages = await self.cms.get_all_by_type("page", lang=default_locale())
        for page in pages:
            if page.uid == HOME_UID:
                continue
            entries.extend(await self.page_entries(page))
        return entries


def render_sitemap(entries: Sequence[SitemapEntry]) -> bytes:
    """Serialize entries as a sitemaps.org ``urlset`` document."""
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = entry.url
        if entry.last_modified is not None:
            ElementTree.SubElement(url, "lastmod").text = entry.last_modified.isoformat()
        ElementTree.SubElement(url, "changefreq").text = entry.change_frequency
        ElementTree.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    return bytes(ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True))
