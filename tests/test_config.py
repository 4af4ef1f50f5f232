"""Tests for config module."""

import sqlite3
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pinged.config import (
    AppConfig,
    add_post,
    get_recent_posts,
    load_config,
    load_theme,
    save_config,
    save_theme,
)


@pytest.fixture
def temp_db():
    """Use a temporary database for tests."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp) / "test.db"


def test_load_config_defaults(temp_db):
    """Empty DB returns default config."""
    config = load_config(temp_db)
    assert config.web_port == 8080
    assert config.debug_mode is False
    assert config.embed_parent == "localhost"
    assert config.theme == "orange"


def test_save_and_load_config(temp_db):
    """Config round-trip."""
    config = AppConfig(web_port=9000, debug_mode=True, embed_parent="pinged.gg", theme="green")
    save_config(config, temp_db)
    loaded = load_config(temp_db)
    assert loaded == config


def test_save_theme(temp_db):
    save_theme("pink", temp_db)
    theme = load_theme(temp_db)
    assert theme.value == "pink"
    assert theme.name == "Neon Pink"
    assert theme.primary == "#EC4899"


def test_save_unknown_theme_rejected(temp_db):
    with pytest.raises(ValueError):
        save_theme("rainbow", temp_db)
    assert load_theme(temp_db).value == "orange"


def test_unknown_stored_theme_falls_back(temp_db):
    """A bad value written outside the app still loads the default."""
    save_config(AppConfig.defaults(), temp_db)
    conn = sqlite3.connect(temp_db)
    conn.execute("UPDATE config SET value = 'rainbow' WHERE key = 'theme'")
    conn.commit()
    conn.close()
    assert load_config(temp_db).theme == "orange"


def test_add_and_get_recent_posts(temp_db):
    """Recent posts newest first."""
    first = add_post("alice", "hello", None, None, temp_db)
    second = add_post("bob", "clip", "https://clips.twitch.tv/X", "Valorant", temp_db)
    assert second > first

    recent = get_recent_posts(10, temp_db)
    assert [p["id"] for p in recent] == [second, first]
    assert recent[0]["media_url"] == "https://clips.twitch.tv/X"
    assert recent[0]["game_tag"] == "Valorant"
    assert len(get_recent_posts(1, temp_db)) == 1


def test_connection_closed_when_query_fails(temp_db):
    """A failing statement still closes the connection."""
    conn = MagicMock()
    conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
    with patch("pinged.config.sqlite3.connect", return_value=conn):
        with pytest.raises(sqlite3.OperationalError):
            get_recent_posts(10, temp_db)
    conn.close.assert_called_once()
