"""Tests for preview URL extraction"""

import pytest

from src.shared.utils.url_extraction import extract_first_url, strip_markup


def test_returns_first_plain_url():
    text = "look at https://example.com/page and https://second.example"

    assert extract_first_url(text) == "https://example.com/page"


def test_markdown_image_is_never_previewed():
    text = "![cat](https://img.example/cat.png) see https://example.com/article"

    assert extract_first_url(text) == "https://example.com/article"


def test_markdown_link_contributes_its_target():
    text = "![cat](https://img.example/cat.png)\n[the docs](https://docs.example.com/guide)"

    assert extract_first_url(text) == "https://docs.example.com/guide"


@pytest.mark.parametrize("text", ["", None, "no links here", "ftp://files.example/x"])
def test_no_url_returns_empty(text):
    assert extract_first_url(text) == ""


def test_code_is_ignored():
    text = (
        "`https://inline.example` then\n"
        "```\nhttps://block.example/snippet\n```\n"
        "finally http://real.example/x"
    )

    assert extract_first_url(text) == "http://real.example/x"


@pytest.mark.parametrize(
    "tag",
    [
        '<img src="https://img.example/x.png">',
        '<social href="https://social.example/u/1">someone</social>',
        '<emojipack src="https://emoji.example/pack.json"/>',
    ],
)
def test_custom_tags_are_ignored(tag):
    assert extract_first_url(f"{tag} https://real.example/page") == "https://real.example/page"


def test_anchor_keeps_attribute_text():
    text = '<a href="https://anchor.example/page">click here</a>'

    assert strip_markup(text) == ' href="https://anchor.example/page"'
    assert extract_first_url(text) == "https://anchor.example/page"


def test_url_stops_at_characters_outside_the_class():
    assert extract_first_url("(https://example.com/a?b=1&c=2#top)") == "https://example.com/a?b=1&c=2#top"


def test_url_stops_at_non_ascii_text():
    assert extract_first_url("https://example.com/path日本語") == "https://example.com/path"
