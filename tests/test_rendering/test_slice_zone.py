"""Tests for slice rendering."""

from storefront.cms.models import Slice
from storefront.rendering.slice_zone import (
    SLICE_COMPONENTS,
    faq_items,
    render_slice,
    render_slices,
    rich_text_as_text,
)


def make_slice(slice_type: str, **kwargs) -> Slice:
    return Slice.model_validate({"slice_type": slice_type, **kwargs})


def test_every_component_name_is_unique() -> None:
    assert len(set(SLICE_COMPONENTS.values())) == len(SLICE_COMPONENTS)


def test_render_slice_node() -> None:
    slice_ = make_slice(
        "hero_basic",
        id="hero$1",
        variation="withImage",
        primary={"title": "Welcome"},
    )

    node = render_slice(slice_, 0, {"locale": "sv-se"})

    assert node == {
        "component": "HeroBasic",
        "slice_type": "hero_basic",
        "variation": "withImage",
        "id": "hero$1",
        "index": 0,
        "primary": {"title": "Welcome"},
        "items": [],
        "context": {"slice_index": 0, "locale": "sv-se"},
    }


def test_unknown_slices_are_skipped_and_indexes_kept() -> None:
    slices = [
        make_slice("hero_basic"),
        make_slice("newsletter_signup"),
        make_slice("products_grid"),
    ]

    nodes = render_slices(slices, {"stripe_product_id": "prod_tee"})

    assert [(node["component"], node["index"]) for node in nodes] == [
        ("HeroBasic", 0),
        ("ProductsGrid", 2),
    ]
    assert nodes[1]["context"] == {"slice_index": 2, "stripe_product_id": "prod_tee"}


def test_render_slices_without_context() -> None:
    nodes = render_slices([make_slice("rich_text")])
    assert nodes[0]["context"] == {"slice_index": 0}


def test_rich_text_as_text() -> None:
    blocks = [
        {"type": "paragraph", "text": "Free shipping"},
        {"type": "paragraph", "text": ""},
        {"type": "paragraph", "text": "over 500 kr."},
    ]
    assert rich_text_as_text(blocks) == "Free shipping over 500 kr."
    assert rich_text_as_text("plain") == "plain"
    assert rich_text_as_text(None) == ""


def test_faq_items_from_group_field() -> None:
    slice_ = make_slice(
        "faq_split_layout",
        primary={
            "faqs": [
                {
                    "question": [{"type": "heading3", "text": "Returns?"}],
                    "answer": [{"type": "paragraph", "text": "Within 30 days."}],
                },
                {"question": [{"type": "heading3", "text": "Unanswered"}], "answer": []},
            ]
        },
    )
    assert faq_items(slice_) == [("Returns?", "Within 30 days.")]


def test_faq_items_from_repeatable_items() -> None:
    slice_ = make_slice(
        "faq_split_layout",
        items=[{"question": "Sizes?", "answer": "S to XL."}],
    )
    assert faq_items(slice_) == [("Sizes?", "S to XL.")]


def test_faq_slice_carries_schema() -> None:
    slice_ = make_slice("faq_split_layout", items=[{"question": "Q", "answer": "A"}])

    node = render_slice(slice_, 3, {})

    assert node is not None
    assert node["schema"]["@type"] == "FAQPage"
    assert node["schema"]["mainEntity"][0]["name"] == "Q"


def test_empty_faq_slice_has_no_schema() -> None:
    node = render_slice(make_slice("faq_split_layout"), 0, {})
    assert node is not None
    assert node["schema"] is None
