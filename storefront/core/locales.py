"""Locale table and slug parsing.

The locale table is the closed set of locale codes the site is published in,
one of which is the default (master) locale. URLs for the default locale carry
no locale segment; every other locale is addressed as ``/<locale>/...``.
"""

from collections.abc import Sequence

from storefront.core.config import settings

HOME_UID = "home"


def supported_locales() -> list[str]:
    """Return the supported locale codes in configured order."""
    return list(settings.SUPPORTED_LOCALES)


def default_locale() -> str:
    """Return the default locale code."""
    return settings.DEFAULT_LOCALE


def is_valid_locale(locale: str | None) -> bool:
    """Check whether a string is a member of the locale table."""
    return bool(locale) and locale in settings.SUPPORTED_LOCALES


def get_locale_from_slug(slug: Sequence[str] | None) -> str:
    """Get the locale from URL slug segments."""
    if slug and is_valid_locale(slug[0]):
        return slug[0]
    return settings.DEFAULT_LOCALE


def parse_slug_params(slug: Sequence[str] | None) -> tuple[str, str]:
    """Resolve ``(locale, uid)`` from URL path segments.

    The first segment is only treated as a locale when it is in the locale
    table. A bare locale (or an empty path) addresses the home page.
    """
    return get_locale_from_slug(slug), get_uid_from_slug(slug)


def get_uid_from_slug(slug: Sequence[str] | None) -> str:
    """Get the uid from URL slug segments, skipping a leading locale."""
    if not slug:
        return HOME_UID
    if is_valid_locale(slug[0]):
        return slug[1] if len(slug) > 1 and slug[1] else HOME_UID
    return slug[0]


def split_path(path: str) -> list[str]:
    """Split a request path into non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def get_language_code(locale: str) -> str:
    """Extract the language code from a locale (``sv-se`` -> ``sv``)."""
    return locale.split("-")[0]


def get_language_name(locale: str) -> str:
    """Get the display name for a locale."""
    return settings.LANGUAGE_NAMES.get(locale, locale)


def to_bcp47(locale: str) -> str:
    """Convert ``sv-se`` style codes to ``sv-SE`` for formatting APIs."""
    return "-".join(
        part.lower() if index == 0 else part.upper()
        for index, part in enumerate(locale.split("-"))
    )


def locale_prefix(locale: str) -> str:
    """URL prefix for a locale; empty for the default locale."""
    if locale == settings.DEFAULT_LOCALE:
        return ""
    return f"/{locale}"
