"""Render CMS slices into a serializable component tree."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from storefront.cms.models import Slice
from storefront.core.logging import get_logger
from storefront.seo.structured_data import faq_page

logger = get_logger(__name__)

# CMS slice type -> front-end component name
SLICE_COMPONENTS: dict[str, str] = {
    "carousel_gallery": "CarouselGallery",
    "centered_hero": "CenteredHero",
    "contact_details_with_map": "ContactDetailsWithMap",
    "contact_info_with_hours": "ContactInfoWithHours",
    "contact_split": "ContactSplit",
    "cta_card": "CtaCard",
    "faq_split_layout": "FaqSplitLayout",
    "feature_grid": "FeatureGrid",
    "feature_grid2": "FeatureGrid2",
    "feature_grid3": "FeatureGrid3",
    "feature_grid_showcase": "FeatureGridShowcase",
    "feature_with_image_grid": "FeatureWithImageGrid",
    "headline_image_cta": "HeadlineImageCta",
    "headline_stats": "HeadlineStats",
    "hero_basic": "HeroBasic",
    "hero_with_media": "HeroWithMedia",
    "image_card_feature": "ImageCardFeature",
    "infinite_text_marquee": "InfiniteTextMarquee",
    "logo_showcase": "LogoShowcase",
    "media_box_hero": "MediaBoxHero",
    "media_feature": "MediaFeature",
    "media_gallery": "MediaGallery",
    "mega_cards": "MegaCards",
    "pricing_table": "PricingTable",
    "product_hero": "ProductHero",
    "products_grid": "ProductsGrid",
    "related_content_grid": "RelatedContentGrid",
    "rich_text": "RichText",
    "story_and_columns": "StoryAndColumns",
    "testimonial_carousel": "TestimonialCarousel",
    "testimonial_detail": "TestimonialDetail",
    "two_column_story": "TwoColumnStory",
}

FAQ_SLICE_TYPES = frozenset({"faq_split_layout"})


def rich_text_as_text(field: Any) -> str:
    """Flatten a CMS rich text field (a list of blocks) to plain text."""
    if isinstance(field, str):
        return field
    if not isinstance(field, list):
        return ""
    return " ".join(
        block["text"]
        for block in field
        if isinstance(block, dict) and block.get("text")
    )


def faq_items(slice_: Slice) -> list[tuple[str, str]]:
    """Question/answer pairs of an FAQ slice; half-filled entries are dropped."""
    faqs = slice_.primary.get("faqs") or slice_.items
    pairs = []
    for faq in faqs:
        if not isinstance(faq, dict):
            continue
        question = rich_text_as_text(faq.get("question"))
        answer = rich_text_as_text(faq.get("answer"))
        if question and answer:
            pairs.append((question, answer))
    return pairs


def render_slice(
    slice_: Slice, index: int, context: Mapping[str, Any]
) -> Optional[dict[str, Any]]:
    """Render one slice, or None if no component handles its type."""
    component = SLICE_COMPONENTS.get(slice_.slice_type)
    if component is None:
        logger.debug("slice_type_unknown", slice_type=slice_.slice_type, index=index)
        return None

    node: dict[str, Any] = {
        "component": component,
        "slice_type": slice_.slice_type,
        "variation": slice_.variation,
        "id": slice_.id,
        "index": index,
        "primary": slice_.primary,
        "items": slice_.items,
        "context": {"slice_index": index, **context},
    }
    if slice_.slice_type in FAQ_SLICE_TYPES:
        node["schema"] = faq_page(faq_items(slice_))
    return node


def render_slices(
    slices: Sequence[Slice], context: Mapping[str, Any] | None = None
) -> list[dict[str, Any]]:
    """Render slices in order, skipping unknown types.

    ``index`` keeps the slice's position in the original list, so it stays
    stable when unknown slices are skipped.
    """
    rendered: Iterable[Optional[dict[str, Any]]] = (
        render_slice(slice_, index, context or {})
        for index, slice_ in enumerate(slices)
    )
    return [node for node in rendered if node is not None]
