"""Tests for embeds module."""

from pinged.embeds import build_embed, find_media_url, twitch_embed_options, youtube_embed_url
from pinged.media_url import TwitchInfo


def test_youtube_inline_url():
    assert youtube_embed_url("dQw4w9WgXcQ") == (
        "https://www.youtube.com/embed/dQw4w9WgXcQ?modestbranding=1&rel=0&showinfo=0"
    )


def test_youtube_fullscreen_url():
    url = youtube_embed_url("dQw4w9WgXcQ", fullscreen=True, muted=True)
    assert url.startswith("https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1&controls=0")
    assert "iv_load_policy=3" in url
    assert url.endswith("&mute=1")
    assert "mute" not in youtube_embed_url("dQw4w9WgXcQ", fullscreen=True)


def test_twitch_options():
    options = twitch_embed_options(TwitchInfo(type="clip", id="FunnyClipName"), "pinged.gg")
    assert options["clip"] == "FunnyClipName"
    assert options["parent"] == ["pinged.gg"]
    assert options["layout"] == "video"
    assert options["autoplay"] is False
    assert "channel" not in options


def test_build_embed_youtube_shorts_is_vertical():
    embed = build_embed("https://www.youtube.com/shorts/abc123XYZ", "localhost")
    assert embed.platform == "youtube"
    assert embed.aspect_ratio == "9/16"
    assert embed.src.startswith("https://www.youtube.com/embed/abc123XYZ?")


def test_build_embed_twitch_channel():
    embed = build_embed("https://www.twitch.tv/someStreamer", "localhost")
    assert embed.src is None
    assert embed.aspect_ratio == "16/9"
    assert embed.options["channel"] == "someStreamer"


def test_build_embed_placeholder():
    assert build_embed(None, "localhost") is None
    assert build_embed("https://vimeo.com/123", "localhost") is None


def test_find_media_url_in_text():
    text = "Check my ace (https://clips.twitch.tv/FunnyClipName)! gg"
    assert find_media_url(text) == "https://clips.twitch.tv/FunnyClipName"


def test_find_media_url_first_supported_link():
    text = "https://example.com then https://youtu.be/dQw4w9WgXcQ and https://twitch.tv/someone"
    assert find_media_url(text) == "https://youtu.be/dQw4w9WgXcQ"


def test_find_media_url_none():
    assert find_media_url("no links here") is None
    assert find_media_url("") is None
    assert find_media_url(None) is None
