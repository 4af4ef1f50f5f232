"""Embed descriptors for recognized media, and media link detection in post text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote, urlencode

from .media_url import TWITCH, YOUTUBE, MediaReference, TwitchInfo, classify_media_url

YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed/"
TWITCH_EMBED_SCRIPT = "https://embed.twitch.tv/embed/v1.js"
TWITCH_EMBED_HEIGHT = 400

_INLINE_PLAYER_PARAMS = {"modestbranding": 1, "rel": 0, "showinfo": 0}
_FULLSCREEN_PLAYER_PARAMS = {
    "autoplay": 1,
    "controls": 0,
    "modestbranding": 1,
    "rel": 0,
    "showinfo": 0,
    "fs": 0,
    "disablekb": 1,
    "iv_load_policy": 3,
}

# Characters commonly wrapped around links pasted into free text
_LINK_PUNCTUATION = "<>()[]\"',.!"


@dataclass
class Embed:
    """What the feed needs to render a media player for a post."""

    platform: str
    resource_type: str
    resource_id: str
    src: Optional[str] = None
    options: dict = field(default_factory=dict)
    aspect_ratio: str = "16/9"


def youtube_embed_url(video_id: str, fullscreen: bool = False, muted: bool = False) -> str:
    params = dict(_FULLSCREEN_PLAYER_PARAMS if fullscreen else _INLINE_PLAYER_PARAMS)
    if fullscreen and muted:
        params["mute"] = 1
    return f"{YOUTUBE_EMBED_BASE}{quote(video_id, safe='')}?{urlencode(params)}"


def twitch_embed_options(info: TwitchInfo, parent: str) -> dict:
    """Options for the Twitch embed script. Only the video is shown, no chat."""
    options = {
        "width": "100%",
        "height": TWITCH_EMBED_HEIGHT,
        "parent": [parent],
        "autoplay": False,
        "theme": "dark",
        "layout": "video",
    }
    options[info.type] = info.id
    return options


def embed_for(ref: MediaReference, parent: str) -> Embed:
    if ref.platform == YOUTUBE:
        return Embed(
            platform=ref.platform,
            resource_type=ref.resource_type,
            resource_id=ref.resource_id,
            src=youtube_embed_url(ref.resource_id),
            aspect_ratio="9/16" if ref.is_shorts else "16/9",
        )
    embed = Embed(platform=ref.platform, resource_type=ref.resource_type, resource_id=ref.resource_id)
    if ref.platform == TWITCH:
        embed.options = twitch_embed_options(TwitchInfo(type=ref.resource_type, id=ref.resource_id), parent)
    return embed


def build_embed(media_url: Optional[str], parent: str) -> Optional[Embed]:
    """
    Build the embed for a stored media URL.

    Returns None when the URL cannot be embedded; the feed shows a placeholder instead.
    """
    ref = classify_media_url(media_url)
    if not ref:
        return None
    return embed_for(ref, parent)


def find_media_url(text: Optional[str]) -> Optional[str]:
    """Return the first embeddable link in free text, or None."""
    if not text or not isinstance(text, str):
        return None

    for token in text.split():
        candidate = token.strip(_LINK_PUNCTUATION)
        if classify_media_url(candidate):
            return candidate

    return None
