"""URL structure checks for resolved pages."""

from collections.abc import Collection, Sequence

from storefront.cms.models import ContentItem
from storefront.core.config import settings
from storefront.core.locales import HOME_UID


def extract_actual_uid(uid: str, slug: Sequence[str] | None) -> str:
    """Return the uid of the document a (possibly nested) URL addresses.

    ``/om-oss/var-historia`` addresses ``var-historia``; the parent segment
    is checked separately by :func:`validate_url_structure`.
    """
    if uid == HOME_UID:
        return HOME_UID
    if slug:
        return slug[-1]
    return uid


def validate_url_structure(
    page: ContentItem,
    slug: Sequence[str] | None,
    locale: str | None = None,
    localized_uids: Collection[str] | None = None,
) -> bool:
    """Check that a URL is the canonical address of ``page``.

    A page that declares a parent must be requested with the parent's uid as
    the second-to-last segment. Under a non-default locale, uids that carry
    a localized slug (configured, or flagged ``localized_slug`` in the CMS)
    must not be reachable by their untranslated uid.

    Returns False when the caller should render its not-found page.
    """
    segments = list(slug or [])

    parent = page.parent
    if parent is not None:
        if len(segments) < 2 or segments[-2] != parent.uid:
            return False

    if locale and locale != settings.DEFAULT_LOCALE and segments:
        must_be_localized = (
            settings.LOCALIZED_UIDS if localized_uids is None else localized_uids
        )
        last_segment = segments[-1]
        if last_segment in must_be_localized:
            return False
        if page.data.localized_slug and last_segment == page.uid:
            return False

    return True
