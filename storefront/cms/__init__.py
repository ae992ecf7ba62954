"""Headless CMS client and document models."""

from storefront.cms.client import CMSClient, CMSError, DocumentNotFoundError
from storefront.cms.models import ContentItem, ContentLink, SingletonDocument, Slice

__all__ = [
    "CMSClient",
    "CMSError",
    "DocumentNotFoundError",
    "ContentItem",
    "ContentLink",
    "SingletonDocument",
    "Slice",
]
