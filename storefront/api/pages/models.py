"""Response models for page resolution."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from storefront.seo.breadcrumbs import Breadcrumbs
from storefront.seo.metadata import PageMetadata


class LayoutData(BaseModel):
    """Site-wide singleton documents; any of them may be missing."""

    navbar: Optional[dict[str, Any]] = None
    footer: Optional[dict[str, Any]] = None
    cookie_banner: Optional[dict[str, Any]] = None


class PageResponse(BaseModel):
    locale: str
    lang_code: str
    uid: str
    not_found: bool = False
    metadata: PageMetadata
    breadcrumbs: Optional[Breadcrumbs] = None
    slices: list[dict[str, Any]] = Field(default_factory=list)
    layout: LayoutData = Field(default_factory=LayoutData)
