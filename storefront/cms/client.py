"""Headless CMS API client.

Talks to a Prismic-style REST document API: the repository endpoint returns
the current master ref, and documents are queried through
``/documents/search`` with predicate strings.
"""

import json
import logging
import re
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from storefront.cms.models import ContentItem, SingletonDocument
from storefront.cms.retry import with_http_retry
from storefront.core.cache import TTLCache
from storefront.core.errors import StorefrontError
from storefront.core.locales import HOME_UID

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

NO_DOCUMENTS_MESSAGE = "No documents were returned"

# Fetch up to three ancestor levels with their titles so breadcrumbs and
# hreflang paths can be built without extra round trips.
PAGE_GRAPH_QUERY = """{
  page {
    ...pageFields
    parent {
      ...on page {
        page_title
        parent {
          ...on page {
            page_title
            parent {
              ...on page {
                page_title
              }
            }
          }
        }
      }
    }
  }
}"""

# Route resolvers so the API fills in ``url`` for documents and links.
ROUTES = [
    {"type": "page", "uid": HOME_UID, "path": "/:lang?"},
    {
        "type": "page",
        "path": "/:lang?/:grandparent?/:parent?/:uid",
        "resolvers": {"parent": "parent", "grandparent": "parent.parent"},
    },
]

SINGLETON_TYPES = frozenset({"navbar", "footer", "cookie_banner", "four_oh_four"})

# Uids are slugs; anything else can never match and must not reach a
# predicate string.
UID_PATTERN = re.compile(r"[\w-]+")


class CMSError(StorefrontError):
    """Raised when the CMS cannot be reached or returns an unusable answer."""


class DocumentNotFoundError(CMSError):
    """Raised when a query matches no documents."""

    def __init__(self, message: str = NO_DOCUMENTS_MESSAGE) -> None:
        super().__init__(message)


class CMSClient:
    """Read-only client for the CMS document API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str,
        access_token: str | None = None,
        max_retries: int = 2,
        ref_ttl: float = 5.0,
    ) -> None:
        """
        Initialize the CMS client.

        Args:
            http_client: Shared async HTTP client
            api_url: Repository API endpoint (``https://<repo>.cdn.prismic.io/api/v2``)
            access_token: Optional access token for private repositories
            max_retries: Retries for transient failures
            ref_ttl: Seconds the master ref is reused before being refreshed
        """
        self.http_client = http_client
        self.api_url = api_url.rstrip("/")
        self.access_token = access_token
        self._ref_cache: TTLCache[str] = TTLCache("cms_ref", ttl=ref_ttl, maxsize=1)
        self._get_json = with_http_retry(max_retries=max_retries)(self._get_json_once)

    async def _get_json_once(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self.http_client.get(url, params=params)
        response.raise_for_status()
        return dict(response.json())

    def _auth_params(self) -> dict[str, Any]:
        return {"access_token": self.access_token} if self.access_token else {}

    async def get_master_ref(self) -> str:
        """Return the ref of the currently published content release."""
        cached = self._ref_cache.get("master")
        if cached is not None:
            return cached
        try:
            payload = await self._get_json(self.api_url, self._auth_params())
        except httpx.HTTPError as e:
            raise CMSError(f"Failed to fetch CMS master ref: {e}") from e

        for ref in payload.get("refs", []):
            if ref.get("isMasterRef"):
                self._ref_cache.set("master", ref["ref"])
                return str(ref["ref"])
        raise CMSError("CMS repository did not report a master ref")

    async def query(
        self,
        predicates: list[str],
        lang: str | None = None,
        page: int = 1,
        page_size: int = 100,
        graph_query: str | None = None,
    ) -> dict[str, Any]:
        """Run a document search and return the raw response page."""
        params: dict[str, Any] = {
            **self._auth_params(),
            "ref": await self.get_master_ref(),
            "q": "[" + "".join(predicates) + "]",
            "page": page,
            "pageSize": page_size,
            "routes": json.dumps(ROUTES),
        }
        if lang:
            params["lang"] = lang
        if graph_query:
            params["graphQuery"] = graph_query

        try:
            return await self._get_json(f"{self.api_url}/documents/search", params)
        except httpx.HTTPError as e:
            raise CMSError(f"CMS query failed: {e}") from e

    async def _first(
        self,
        model: type[ModelT],
        predicates: list[str],
        lang: str | None,
        graph_query: str | None = None,
    ) -> ModelT:
        payload = await self.query(predicates, lang=lang, page_size=1, graph_query=graph_query)
        results = payload.get("results") or []
        if not results:
            raise DocumentNotFoundError()
        try:
            return model.model_validate(results[0])
        except ValidationError as e:
            raise CMSError(f"Unexpected CMS document shape: {e}") from e

    async def get_by_uid(self, doc_type: str, uid: str, lang: str) -> ContentItem:
        """Fetch one document by its uid in a locale.

        Raises:
            DocumentNotFoundError: No document with that uid exists in the locale
            CMSError: The CMS could not be queried
        """
        if not UID_PATTERN.fullmatch(uid):
            raise DocumentNotFoundError(f"Invalid uid: {uid!r}")
        return await self._first(
            ContentItem,
            [
                f'[at(document.type,"{doc_type}")]',
                f'[at(my.{doc_type}.uid,"{uid}")]',
            ],
            lang=lang,
            graph_query=PAGE_GRAPH_QUERY if doc_type == "page" else None,
        )

    async def get_single(self, doc_type: str, lang: str) -> SingletonDocument:
        """Fetch a single-instance document (navbar, footer, ...)."""
        return await self._first(
            SingletonDocument, [f'[at(document.type,"{doc_type}")]'], lang=lang
        )

    async def get_all_by_type(self, doc_type: str, lang: str = "*") -> list[ContentItem]:
        """Fetch every document of a type across all pages of results."""
        documents: list[ContentItem] = []
        page = 1
        while True:
            payload = await self.query(
                [f'[at(document.type,"{doc_type}")]'],
                lang=lang,
                page=page,
                graph_query=PAGE_GRAPH_QUERY if doc_type == "page" else None,
            )
            for result in payload.get("results") or []:
                try:
                    documents.append(ContentItem.model_validate(result))
                except ValidationError as e:
                    logger.warning(f"Skipping malformed {doc_type} document: {e}")
            if page >= int(payload.get("total_pages") or 1):
                return documents
            page += 1

    async def get_cms_data(
        self, doc_type: str, locale: str
    ) -> Optional[SingletonDocument]:
        """Fetch a singleton document, returning None when it is unavailable.

        A missing document is expected (not every locale defines every
        singleton) and is not logged; other failures are logged.
        """
        if doc_type not in SINGLETON_TYPES:
            raise ValueError(f"Unsupported document type: {doc_type}")
        try:
            return await self.get_single(doc_type, locale)
        except DocumentNotFoundError:
            return None
        except CMSError as e:
            logger.error(f"Failed to fetch {doc_type} data: {e}")
            return None

    async def get_home_page(self, locale: str) -> Optional[ContentItem]:
        """Fetch the home page for a locale, or None when unavailable."""
        try:
            return await self.get_by_uid("page", HOME_UID, locale)
        except DocumentNotFoundError:
            return None
        except CMSError as e:
            logger.error(f"Failed to fetch home page data: {e}")
            return None
