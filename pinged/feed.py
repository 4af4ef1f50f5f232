"""Post composition and feed rendering on top of the media classifier."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from .config import DEFAULT_EMBED_PARENT, add_post, get_recent_posts
from .embeds import build_embed, find_media_url
from .media_url import classify_media_url

logger = logging.getLogger(__name__)

FEED_LIMIT = 20


def format_time_ago(seconds: float) -> str:
    """Short relative age of a post, e.g. "5m ago"."""
    seconds = int(seconds)
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def create_post(
    user_id: str,
    content: str,
    media_url: Optional[str] = None,
    game_tag: Optional[str] = None,
    db_path: Optional[Path] = None,
) -> int:
    """
    Validate and persist a post. Returns the new post id.

    An explicit media URL must be embeddable. Without one, the content is
    scanned for the first YouTube or Twitch link.
    """
    if not user_id or not content or not content.strip():
        raise ValueError("Post needs a user and some content")

    media_url = media_url.strip() if media_url else None
    if media_url:
        if not classify_media_url(media_url):
            raise ValueError(f"Unsupported media URL: {media_url[:80]}")
    else:
        media_url = find_media_url(content)

    post_id = add_post(user_id, content.strip(), media_url, (game_tag or "").strip() or None, db_path)
    logger.info("Post %d created by %s (media: %s)", post_id, user_id, media_url or "none")
    return post_id


def load_feed(
    limit: int = FEED_LIMIT,
    parent: str = DEFAULT_EMBED_PARENT,
    db_path: Optional[Path] = None,
    now: Optional[float] = None,
) -> list[dict]:
    """Newest posts, each with its embed (or None for a placeholder) and age."""
    now = now if now is not None else time.time()
    posts = get_recent_posts(limit, db_path)
    for post in posts:
        post["embed"] = build_embed(post["media_url"], parent)
        if post["media_url"] and post["embed"] is None:
            logger.debug("Post %d has media that cannot be embedded: %s", post["id"], post["media_url"][:80])
        post["time_ago"] = format_time_ago(now - post["created_at"])
    return posts
