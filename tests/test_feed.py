"""Tests for feed module."""

import tempfile
import time
from pathlib import Path

import pytest

from pinged.config import get_recent_posts
from pinged.feed import create_post, format_time_ago, load_feed


@pytest.fixture
def temp_db():
    """Use a temporary database for tests."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp) / "test.db"


def test_create_post_scans_content(temp_db):
    create_post("alice", "clutch round https://www.twitch.tv/videos/123456789 gg", db_path=temp_db)
    post = get_recent_posts(1, temp_db)[0]
    assert post["media_url"] == "https://www.twitch.tv/videos/123456789"


def test_create_post_explicit_media_url(temp_db):
    create_post("alice", "watch this", media_url=" https://youtu.be/dQw4w9WgXcQ ", game_tag="CS2", db_path=temp_db)
    post = get_recent_posts(1, temp_db)[0]
    assert post["media_url"] == "https://youtu.be/dQw4w9WgXcQ"
    assert post["game_tag"] == "CS2"


def test_create_post_without_media(temp_db):
    create_post("alice", "looking for a duo tonight", game_tag="  ", db_path=temp_db)
    post = get_recent_posts(1, temp_db)[0]
    assert post["media_url"] is None
    assert post["game_tag"] is None


def test_create_post_rejects_unsupported_media(temp_db):
    with pytest.raises(ValueError):
        create_post("alice", "hi", media_url="https://vimeo.com/123", db_path=temp_db)
    assert get_recent_posts(10, temp_db) == []


def test_create_post_rejects_blank_content(temp_db):
    with pytest.raises(ValueError):
        create_post("alice", "   ", db_path=temp_db)
    with pytest.raises(ValueError):
        create_post("", "hello", db_path=temp_db)


def test_load_feed_embeds(temp_db):
    create_post("alice", "https://www.youtube.com/shorts/abc123XYZ", db_path=temp_db)
    create_post("bob", "no media", db_path=temp_db)

    feed = load_feed(parent="pinged.gg", db_path=temp_db, now=time.time() + 120)
    assert [p["user_id"] for p in feed] == ["bob", "alice"]
    assert feed[0]["embed"] is None
    assert feed[1]["embed"].aspect_ratio == "9/16"
    assert feed[1]["time_ago"] == "2m ago"


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "Just now"), (59, "Just now"), (60, "1m ago"), (3599, "59m ago"), (7200, "2h ago"), (86400 * 3, "3d ago")],
)
def test_format_time_ago(seconds, expected):
    assert format_time_ago(seconds) == expected
