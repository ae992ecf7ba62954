"""Hreflang alternate URL generation.

Every page is published under one URL per locale. Search engines are told
about the siblings through ``<link rel="alternate" hreflang="...">`` entries,
plus an ``x-default`` entry pointing at the default-locale version.
"""

import asyncio
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, ConfigDict

from storefront.cms.client import CMSClient
from storefront.cms.models import ContentItem, ContentLink
from storefront.core.cache import TTLCache
from storefront.core.config import settings
from storefront.core.locales import HOME_UID, locale_prefix, supported_locales
from storefront.core.logging import get_logger

logger = get_logger(__name__)

X_DEFAULT = "x-default"

HreflangKey = tuple[str, str, Optional[str]]


class HreflangEntry(BaseModel):
    """One alternate URL for a locale (or ``x-default``)."""

    model_config = ConfigDict(frozen=True)

    lang: str
    url: str


def build_page_path(
    uid: str, parent: Optional[ContentLink], max_depth: int
) -> list[str]:
    """Return the path segments from the root ancestor down to ``uid``.

    The parent chain is followed until a link without its own parent. A
    chain longer than ``max_depth`` or one that revisits a uid is treated as
    having no parent at all.
    """
    ancestors: list[str] = []
    seen = {uid}
    current = parent
    while current is not None and current.uid:
        if current.uid in seen or len(ancestors) >= max_depth:
            logger.warning(
                "parent_chain_rejected",
                uid=uid,
                ancestor=current.uid,
                depth=len(ancestors),
            )
            return [uid]
        seen.add(current.uid)
        ancestors.insert(0, current.uid)
        current = current.parent
    return [*ancestors, uid]


def build_page_url(
    site_url: str,
    locale: str,
    uid: str,
    parent: Optional[ContentLink],
    max_depth: int,
) -> str:
    """Absolute URL of a page in a locale."""
    prefix = locale_prefix(locale)
    if uid == HOME_UID:
        return f"{site_url}{prefix}" if prefix else f"{site_url}/"
    path = "/".join(build_page_path(uid, parent, max_depth))
    return f"{site_url}{prefix}/{path}"


class HreflangGenerator:
    """Builds and caches hreflang entries for pages."""

    def __init__(
        self,
        cms: CMSClient,
        site_url: str | None = None,
        cache: TTLCache[tuple[HreflangEntry, ...]] | None = None,
        max_parent_depth: int | None = None,
    ) -> None:
        self.cms = cms
        self.site_url = (site_url or settings.SITE_URL).rstrip("/")
        self.cache = cache or TTLCache(
            "hreflang",
            ttl=settings.HREFLANG_CACHE_TTL,
            maxsize=settings.HREFLANG_CACHE_SIZE,
        )
        self.max_parent_depth = max_parent_depth or settings.MAX_PARENT_DEPTH

    @staticmethod
    def cache_key(page: ContentItem, current_locale: str) -> HreflangKey:
        return (page.uid, current_locale, page.last_publication_date)

    def page_url(self, page: ContentItem, locale: str) -> str:
        return build_page_url(
            self.site_url, locale, page.uid, page.parent, self.max_parent_depth
        )

    async def _alternate_url(self, uid: str, lang: str) -> HreflangEntry:
        alt_page = await self.cms.get_by_uid("page", uid, lang)
        return HreflangEntry(lang=lang, url=self.page_url(alt_page, lang))

    async def generate(
        self, page: ContentItem, current_locale: str
    ) -> list[HreflangEntry]:
        """Return hreflang entries for ``page`` viewed in ``current_locale``.

        Alternate locales whose document cannot be fetched are left out; the
        result is still returned (and cached) without them.
        """
        key = self.cache_key(page, current_locale)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("hreflang_cache_hit", uid=page.uid, locale=current_locale)
            return list(cached)

        entries = [HreflangEntry(lang=current_locale, url=self.page_url(page, current_locale))]

        alternates = [
            alternate
            for alternate in page.alternate_languages
            if alternate.lang and alternate.uid
        ]
        results = await asyncio.gather(
            *(
                self._alternate_url(str(alternate.uid), str(alternate.lang))
                for alternate in alternates
            ),
            return_exceptions=True,
        )
        for alternate, result in zip(alternates, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "hreflang_alternate_failed",
                    uid=alternate.uid,
                    lang=alternate.lang,
                    error=str(result),
                )
                continue
            entries.append(result)

        if page.uid == HOME_UID and not page.alternate_languages:
            entries.extend(self._home_alternates(current_locale))

        default_entry = next(
            (entry for entry in entries if entry.lang == settings.DEFAULT_LOCALE), None
        )
        if default_entry is not None:
            entries.append(HreflangEntry(lang=X_DEFAULT, url=default_entry.url))

        self.cache.set(key, tuple(entries))
        return entries

    def _home_alternates(self, current_locale: str) -> Sequence[HreflangEntry]:
        return [
            HreflangEntry(
                lang=locale,
                url=build_page_url(
                    self.site_url, locale, HOME_UID, None, self.max_parent_depth
                ),
            )
            for locale in supported_locales()
            if locale != current_locale
        ]
