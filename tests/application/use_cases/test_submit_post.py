"""Tests for post submission"""

import pytest

from src.application.interfaces import MediaItem, ProfileOverride
from src.application.use_cases.timelines import (PostService, PostSubmission,
                                                 TimelineResolver)
from src.domain.exceptions import (CrossOriginPostException,
                                   InvalidAssetReferenceException,
                                   TimelineNotFoundException)
from src.domain.value_objects import TimelineRef
from tests.factories import make_client

ASSET_HOST = "https://assets.example/"
LOCAL = TimelineRef(id="t1", host="home.example")
FOREIGN = TimelineRef(id="t9", host="elsewhere.example")


def _service(client):
    return PostService(client, TimelineResolver(client), ASSET_HOST)


def _submission(**kwargs):
    values = {"username": "guest", "icon_reference": "resdb:///abc123.webp", "message": "hi"}
    values.update(kwargs)
    return PostSubmission(**values)


@pytest.mark.asyncio
async def test_markdown_post_carries_profile_override():
    client = make_client()

    await _service(client).submit_post(LOCAL, _submission())

    client.create_markdown_message.assert_awaited_once_with(
        "hi",
        [LOCAL],
        ProfileOverride(username="guest", avatar="https://assets.example/abc123"),
    )
    client.create_media_message.assert_not_called()


@pytest.mark.asyncio
async def test_media_post_attaches_images():
    client = make_client()

    await _service(client).submit_post(
        LOCAL, _submission(medias=["https://cdn.example/1.png", "https://cdn.example/2.png"])
    )

    args = client.create_media_message.await_args.args
    assert args[0] == "hi"
    assert args[3] == [
        MediaItem(url="https://cdn.example/1.png", media_type="image"),
        MediaItem(url="https://cdn.example/2.png", media_type="image"),
    ]
    client.create_markdown_message.assert_not_called()


@pytest.mark.asyncio
async def test_cross_origin_post_is_rejected():
    """
    GIVEN a timeline hosted on another server
    WHEN a post is submitted
    THEN nothing is sent upstream.
    """
    client = make_client()

    with pytest.raises(CrossOriginPostException):
        await _service(client).submit_post(FOREIGN, _submission())

    client.create_markdown_message.assert_not_called()


@pytest.mark.asyncio
async def test_missing_timeline():
    client = make_client()
    client.get_timeline.side_effect = None
    client.get_timeline.return_value = None

    with pytest.raises(TimelineNotFoundException):
        await _service(client).submit_post(LOCAL, _submission())


@pytest.mark.asyncio
async def test_malformed_icon_reference():
    client = make_client()

    with pytest.raises(InvalidAssetReferenceException):
        await _service(client).submit_post(LOCAL, _submission(icon_reference="not-a-reference"))

    client.create_markdown_message.assert_not_called()
