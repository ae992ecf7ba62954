"""Cookie consent preferences and Google consent-mode signals."""

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from storefront.cart.storage import Storage

logger = logging.getLogger(__name__)

CONSENT_STORAGE_KEY = "cookie-consent"
CONSENT_DATE_STORAGE_KEY = "cookie-consent-date"
CONSENT_UPDATE_EVENT = "cookie_consent_update"

GRANTED = "granted"
DENIED = "denied"


class ConsentPreferences(BaseModel):
    necessary: bool = True
    analytics_storage: bool = False
    ad_storage: bool = False


ALL_COOKIES = ConsentPreferences(necessary=True, analytics_storage=True, ad_storage=True)
NECESSARY_ONLY = ConsentPreferences(necessary=True, analytics_storage=False, ad_storage=False)


def _flag(value: bool) -> str:
    return GRANTED if value else DENIED


def default_consent() -> dict[str, str]:
    """Consent-mode defaults applied before the visitor has chosen."""
    return {
        "ad_storage": DENIED,
        "ad_user_data": DENIED,
        "ad_personalization": DENIED,
        "analytics_storage": DENIED,
    }


def consent_update(prefs: ConsentPreferences) -> tuple[dict[str, str], dict[str, Any]]:
    """Return the consent-mode update and the matching data-layer event.

    Ad user data and ad personalization follow the ad storage choice.
    """
    update = {
        "analytics_storage": _flag(prefs.analytics_storage),
        "ad_storage": _flag(prefs.ad_storage),
        "ad_user_data": _flag(prefs.ad_storage),
        "ad_personalization": _flag(prefs.ad_storage),
    }
    event = {
        "event": CONSENT_UPDATE_EVENT,
        "consent_analytics": prefs.analytics_storage,
        "consent_advertising": prefs.ad_storage,
        "consent_necessary": prefs.necessary,
    }
    return update, event


class ConsentStore:
    """Reads and writes the visitor's consent choice."""

    def __init__(
        self,
        storage: Storage,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.storage = storage
        self._clock = clock

    def load(self) -> Optional[ConsentPreferences]:
        """Saved preferences, or None when the visitor hasn't chosen yet."""
        raw = self.storage.get_item(CONSENT_STORAGE_KEY)
        if not raw:
            return None
        try:
            return ConsentPreferences.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable cookie consent: {e}")
            return None

    def save(self, prefs: ConsentPreferences) -> tuple[dict[str, str], dict[str, Any]]:
        self.storage.set_item(CONSENT_STORAGE_KEY, json.dumps(prefs.model_dump()))
        self.storage.set_item(CONSENT_DATE_STORAGE_KEY, self._clock().isoformat())
        return consent_update(prefs)

    def accept_all(self) -> tuple[dict[str, str], dict[str, Any]]:
        return self.save(ALL_COOKIES)

    def accept_necessary(self) -> tuple[dict[str, str], dict[str, Any]]:
        return self.save(NECESSARY_ONLY)

    def banner_required(self) -> bool:
        return self.load() is None


class BannerVisibility:
    """Whether the cookie banner is shown."""

    def __init__(self, visible: bool = False) -> None:
        self.visible = visible

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def toggle(self) -> None:
        self.visible = not self.visible
