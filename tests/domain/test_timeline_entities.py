"""Tests for display entity serialization"""

from src.domain.entities import DisplayEntry, LinkPreview


def test_link_preview_leaves_out_missing_fields():
    preview = LinkPreview(url="https://example.com/a", title="A")

    assert preview.to_dict() == {"url": "https://example.com/a", "title": "A"}


def test_entry_key_order_with_preview():
    entry = DisplayEntry(
        name="alice",
        avatar="",
        message="hi",
        timestamp="たった今",
        link_preview=LinkPreview(url="https://example.com/a", thumbnail="https://img.example/t.png"),
    )

    data = entry.to_dict()

    assert list(data) == ["name", "avatar", "message", "medias", "timestamp", "reactions", "url"]
    assert data["url"] == {"url": "https://example.com/a", "thumbnail": "https://img.example/t.png"}


def test_entry_without_preview_has_no_url_key():
    entry = DisplayEntry(name="alice", avatar="", message="hi", timestamp="たった今")

    assert "url" not in entry.to_dict()
