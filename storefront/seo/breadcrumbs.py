"""Breadcrumb trail for nested pages."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from storefront.cms.models import ContentItem, ContentLink
from storefront.core.config import settings
from storefront.core.locales import HOME_UID
from storefront.seo.structured_data import breadcrumb_list

UNKNOWN_TITLE = "Unknown"
HOME_TITLE = "Home"


class BreadcrumbItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    uid: str


class Breadcrumbs(BaseModel):
    """Visible trail plus the matching ``BreadcrumbList`` JSON-LD."""

    items: list[BreadcrumbItem]
    current_title: str
    current_url: str
    structured_data: dict[str, Any]


def _link_item(link: ContentLink) -> BreadcrumbItem:
    return BreadcrumbItem(
        title=link.title or UNKNOWN_TITLE,
        url=link.url or "/",
        uid=link.uid or "unknown",
    )


def build_breadcrumbs(
    current_page: ContentItem,
    home_page: Optional[ContentItem],
    locale: str,
    site_url: str | None = None,
) -> Optional[Breadcrumbs]:
    """Build breadcrumbs for ``current_page``; None on the home page.

    The trail holds at most home, grandparent and parent, which is as deep as
    the CMS graph query fetches.
    """
    if current_page.uid == HOME_UID:
        return None

    items: list[BreadcrumbItem] = []

    if home_page is not None:
        home_url = "/" if locale == settings.DEFAULT_LOCALE else home_page.url
        items.append(
            BreadcrumbItem(
                title=home_page.title or HOME_TITLE,
                url=home_url or "/",
                uid=HOME_UID,
            )
        )

    parent = current_page.parent
    if parent is not None:
        grandparent = parent.parent
        if grandparent is not None:
            items.append(_link_item(grandparent))
        items.append(_link_item(parent))

    current_title = current_page.title or UNKNOWN_TITLE
    current_url = current_page.url or "/"
    return Breadcrumbs(
        items=items,
        current_title=current_title,
        current_url=current_url,
        structured_data=breadcrumb_list(
            items,
            current_title,
            current_url,
            (site_url or settings.SITE_URL).rstrip("/"),
        ),
    )
