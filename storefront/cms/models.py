"""Pydantic models for CMS documents."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentLinkData(BaseModel):
    """Fields fetched along with a linked document."""

    model_config = ConfigDict(extra="allow")

    page_title: Optional[str] = None
    parent: Optional["ContentLink"] = None


class ContentLink(BaseModel):
    """Reference from one document to another (e.g. a page's parent)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    link_type: str = "Document"
    id: Optional[str] = None
    uid: Optional[str] = None
    type: Optional[str] = None
    lang: Optional[str] = None
    url: Optional[str] = None
    is_broken: bool = Field(default=False, alias="isBroken")
    data: Optional[ContentLinkData] = None

    @property
    def is_filled(self) -> bool:
        """True when the link points at an existing document."""
        return self.link_type == "Document" and bool(self.id) and not self.is_broken

    @property
    def parent(self) -> Optional["ContentLink"]:
        if self.data is None or self.data.parent is None:
            return None
        return self.data.parent if self.data.parent.is_filled else None

    @property
    def title(self) -> Optional[str]:
        return self.data.page_title if self.data else None


class AlternateLanguage(BaseModel):
    """Sibling of a document in another locale."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    uid: Optional[str] = None
    type: Optional[str] = None
    lang: Optional[str] = None


class Slice(BaseModel):
    """Typed content block inside a page."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    slice_type: str
    variation: str = "default"
    version: Optional[str] = None
    primary: dict[str, Any] = Field(default_factory=dict)
    items: list[dict[str, Any]] = Field(default_factory=list)


class ImageField(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: Optional[str] = None
    alt: Optional[str] = None


class PageData(BaseModel):
    """Custom fields of a ``page`` document."""

    model_config = ConfigDict(extra="allow")

    page_title: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_image: ImageField = Field(default_factory=ImageField)
    parent: Optional[ContentLink] = None
    slices: list[Slice] = Field(default_factory=list)
    stripe_product_id: Optional[str] = None
    sizes: Optional[Any] = None
    previous_price: Optional[Any] = None
    localized_slug: bool = False


class ContentItem(BaseModel):
    """A CMS page document. Read-only; fetched per request."""

    model_config = ConfigDict(extra="allow")

    id: str
    uid: str
    type: str = "page"
    lang: str
    url: Optional[str] = None
    last_publication_date: Optional[str] = None
    alternate_languages: list[AlternateLanguage] = Field(default_factory=list)
    data: PageData = Field(default_factory=PageData)

    @property
    def parent(self) -> Optional[ContentLink]:
        """Declared parent link, if it points at a document with a uid."""
        parent = self.data.parent
        if parent is None or not parent.is_filled or not parent.uid:
            return None
        return parent

    @property
    def title(self) -> Optional[str]:
        return self.data.page_title

    @property
    def published_at(self) -> Optional[datetime]:
        """Last publication date as a datetime, if the CMS supplied one."""
        if not self.last_publication_date:
            return None
        try:
            return datetime.strptime(self.last_publication_date, "%Y-%m-%dT%H:%M:%S%z")
        except ValueError:
            return datetime.fromisoformat(self.last_publication_date)


class SingletonDocument(BaseModel):
    """A single-instance CMS document (navbar, footer, cookie banner, 404)."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    lang: str
    data: dict[str, Any] = Field(default_factory=dict)


ContentLinkData.model_rebuild()
