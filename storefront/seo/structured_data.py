"""JSON-LD structured data builders."""

from collections.abc import Sequence
from typing import Any, Optional, Protocol

SCHEMA_CONTEXT = "https://schema.org"


class Crumb(Protocol):
    title: str
    url: str


def breadcrumb_list(
    items: Sequence[Crumb],
    current_title: str,
    current_url: str,
    site_url: str,
) -> dict[str, Any]:
    """Build a ``BreadcrumbList`` ending in the current page.

    Positions are 1-based; ``item`` is the absolute URL of each crumb.
    """
    elements: list[dict[str, Any]] = [
        {
            "@type": "ListItem",
            "position": index + 1,
            "name": item.title,
            "item": f"{site_url}{item.url}",
        }
        for index, item in enumerate(items)
    ]
    elements.append(
        {
            "@type": "ListItem",
            "position": len(items) + 1,
            "name": current_title,
            "item": f"{site_url}{current_url}",
        }
    )
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": elements,
    }


def faq_page(items: Sequence[tuple[str, str]]) -> Optional[dict[str, Any]]:
    """Build an ``FAQPage`` from (question, answer) pairs, or None if empty."""
    if not items:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
            for question, answer in items
        ],
    }
