"""Locale-aware price formatting."""

import copy
import logging
from decimal import ROUND_HALF_UP, Decimal

from babel import Locale, UnknownLocaleError
from babel.numbers import format_currency

from storefront.core.locales import to_bcp47

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en-US"


def _parse_locale(locale: str) -> Locale:
    try:
        return Locale.parse(to_bcp47(locale), sep="-")
    except (UnknownLocaleError, ValueError):
        logger.debug(f"Unknown locale {locale!r}, formatting with {FALLBACK_LOCALE}")
        return Locale.parse(FALLBACK_LOCALE, sep="-")


def format_price(
    price: Decimal | float | int, currency: str, locale: str = "en-us"
) -> str:
    """Format a price given in currency units (not cents).

    Prices are shown without decimals, e.g. ``199`` USD in ``en-us`` is
    ``$199``.
    """
    babel_locale = _parse_locale(locale)
    pattern = copy.copy(babel_locale.currency_formats["standard"])
    pattern.frac_prec = (0, 0)
    amount = Decimal(str(price)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return format_currency(
        amount,
        currency.upper(),
        format=pattern,
        locale=babel_locale,
        currency_digits=False,
    )


def minor_to_major(unit_amount: int | None) -> Decimal:
    """Convert a payment API amount in minor units (cents) to currency units."""
    return Decimal(unit_amount or 0) / Decimal(100)
