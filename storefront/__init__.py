"""Headless CMS storefront service."""

__version__ = "0.1.0"
