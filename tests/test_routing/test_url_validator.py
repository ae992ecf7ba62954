"""Tests for URL structure validation."""

import pytest

from storefront.routing.url_validator import extract_actual_uid, validate_url_structure
from tests.fixtures.cms import link, make_page


@pytest.mark.parametrize(
    "uid, slug, expected",
    [
        ("home", [], "home"),
        ("home", ["en-us"], "home"),
        ("om-oss", ["om-oss"], "om-oss"),
        ("om-oss", ["om-oss", "var-historia"], "var-historia"),
        ("about", ["en-us", "about", "story"], "story"),
        ("about", None, "about"),
    ],
)
def test_extract_actual_uid(uid, slug, expected) -> None:
    assert extract_actual_uid(uid, slug) == expected


def test_page_without_parent_is_valid_at_top_level() -> None:
    page = make_page("kontakt")
    assert validate_url_structure(page, ["kontakt"], "sv-se")


def test_child_page_requires_parent_segment() -> None:
    page = make_page("child-uid", parent=link("parent-uid"))

    assert validate_url_structure(page, ["parent-uid", "child-uid"], "sv-se")
    assert not validate_url_structure(page, ["child-uid"], "sv-se")
    assert not validate_url_structure(page, ["other-parent", "child-uid"], "sv-se")


def test_child_page_under_locale_prefix() -> None:
    page = make_page("child-uid", lang="en-us", parent=link("parent-uid", lang="en-us"))

    assert validate_url_structure(page, ["en-us", "parent-uid", "child-uid"], "en-us")
    assert not validate_url_structure(page, ["en-us", "child-uid"], "en-us")


def test_unfilled_parent_is_ignored() -> None:
    page = make_page("child-uid", parent={"link_type": "Document", "isBroken": True})
    assert validate_url_structure(page, ["child-uid"], "sv-se")


def test_localized_uid_is_rejected_under_other_locale() -> None:
    page = make_page("var-historia", lang="en-us")

    assert not validate_url_structure(page, ["en-us", "var-historia"], "en-us")
    assert validate_url_structure(page, ["var-historia"], "sv-se")


def test_custom_localized_uid_list() -> None:
    page = make_page("story", lang="en-us")

    assert not validate_url_structure(
        page, ["en-us", "story"], "en-us", localized_uids={"story"}
    )
    assert validate_url_structure(page, ["en-us", "story"], "en-us", localized_uids=())


def test_localized_slug_flag_from_cms() -> None:
    page = make_page("om-oss", lang="en-us", localized_slug=True)

    assert not validate_url_structure(page, ["en-us", "om-oss"], "en-us", localized_uids=())
    assert validate_url_structure(page, ["om-oss"], "sv-se", localized_uids=())
