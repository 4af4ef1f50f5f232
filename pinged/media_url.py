"""Media URL classifier for YouTube and Twitch links. Recognizes URLs and extracts IDs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

YOUTUBE = "youtube"
TWITCH = "twitch"

_YOUTUBE_URL_RE = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/")
_TWITCH_URL_RE = re.compile(r"^(https?://)?(www\.)?(twitch\.tv|clips\.twitch\.tv)/")

# Tried in order; the first match wins
_YOUTUBE_ID_PATTERNS = (
    re.compile(r"youtube\.com/watch\?v=([^&?/]+)"),  # youtube.com/watch?v=VIDEO_ID
    re.compile(r"youtube\.com/embed/([^?/]+)"),  # youtube.com/embed/VIDEO_ID
    re.compile(r"youtube\.com/v/([^?/]+)"),  # youtube.com/v/VIDEO_ID
    re.compile(r"youtu\.be/([^?/]+)"),  # youtu.be/VIDEO_ID
    re.compile(r"youtube\.com/shorts/([^?/]+)"),  # youtube.com/shorts/VIDEO_ID
)

_TWITCH_CLIP_RE = re.compile(r"clips\.twitch\.tv/([^?/]+)")
_TWITCH_VIDEO_RE = re.compile(r"twitch\.tv/videos/([^?/]+)")
_TWITCH_CHANNEL_RE = re.compile(r"twitch\.tv/([^?/]+)\Z")


@dataclass(frozen=True)
class MediaReference:
    """Embeddable resource recognized from a URL."""

    platform: str
    resource_type: str
    resource_id: str

    @property
    def is_shorts(self) -> bool:
        return self.resource_type == "shorts"


@dataclass(frozen=True)
class TwitchInfo:
    """Twitch resource: a clip slug, a numeric video id or a channel login."""

    type: str
    id: str


def _text(url: object) -> Optional[str]:
    return url if isinstance(url, str) else None


def is_youtube_url(url: object) -> bool:
    text = _text(url)
    return text is not None and _YOUTUBE_URL_RE.match(text) is not None


def extract_youtube_video_id(url: object) -> Optional[str]:
    """
    Return the video id of a watch, embed, v, youtu.be or shorts URL.

    The id is taken as-is, without length or charset checks.
    """
    text = _text(url)
    if not text:
        return None
    for pattern in _YOUTUBE_ID_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def is_youtube_shorts(url: object) -> bool:
    # Containment only: "shorts/abc" style strings pass even without a domain
    text = _text(url)
    if not text:
        return False
    return "/shorts/" in text or "youtube.com/shorts" in text


def is_twitch_url(url: object) -> bool:
    text = _text(url)
    return text is not None and _TWITCH_URL_RE.match(text) is not None


def extract_twitch_info(url: object) -> Optional[TwitchInfo]:
    """
    Classify a Twitch URL as a clip, a video or a channel, in that order.

    A bare "twitch.tv/videos" is not a channel.
    """
    text = _text(url)
    if not text:
        return None

    match = _TWITCH_CLIP_RE.search(text)
    if match:
        return TwitchInfo(type="clip", id=match.group(1))

    match = _TWITCH_VIDEO_RE.search(text)
    if match:
        return TwitchInfo(type="video", id=match.group(1))

    match = _TWITCH_CHANNEL_RE.search(text)
    if match and match.group(1) != "videos":
        return TwitchInfo(type="channel", id=match.group(1))

    return None


def is_twitch_clip(url: object) -> bool:
    text = _text(url)
    return bool(text) and "clips.twitch.tv" in text


def is_twitch_video(url: object) -> bool:
    text = _text(url)
    return bool(text) and "twitch.tv/videos/" in text


def is_twitch_channel(url: object) -> bool:
    info = extract_twitch_info(url)
    return info is not None and info.type == "channel"


class PlatformHandler:
    """Interface for platform-specific URL classifiers."""

    def can_handle(self, url: str) -> bool:
        """Return True if this handler recognizes the URL's domain."""
        raise NotImplementedError

    def parse(self, url: str) -> Optional[MediaReference]:
        """Parse URL and return MediaReference, or None if nothing embeddable."""
        raise NotImplementedError


class YouTubeHandler(PlatformHandler):
    def can_handle(self, url: str) -> bool:
        return is_youtube_url(url)

    def parse(self, url: str) -> Optional[MediaReference]:
        video_id = extract_youtube_video_id(url)
        if not video_id:
            return None
        return MediaReference(
            platform=YOUTUBE,
            resource_type="shorts" if is_youtube_shorts(url) else "video",
            resource_id=video_id,
        )


class TwitchHandler(PlatformHandler):
    def can_handle(self, url: str) -> bool:
        return is_twitch_url(url)

    def parse(self, url: str) -> Optional[MediaReference]:
        info = extract_twitch_info(url)
        if not info:
            return None
        return MediaReference(platform=TWITCH, resource_type=info.type, resource_id=info.id)


# Platform handlers, tried in order
_PLATFORM_HANDLERS: tuple[PlatformHandler, ...] = (YouTubeHandler(), TwitchHandler())


def classify_media_url(url: object) -> Optional[MediaReference]:
    """
    Classify a URL and return a MediaReference if it can be embedded.

    Returns None for unsupported or malformed URLs; never raises.
    """
    if not url or not isinstance(url, str):
        return None

    for handler in _PLATFORM_HANDLERS:
        if handler.can_handle(url):
            result = handler.parse(url)
            if result:
                return result

    return None
