"""Flask web interface: feed, post composer, settings and media lookup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, redirect, render_template_string, request, url_for

from ..config import (
    THEMES,
    AppConfig,
    get_db_path,
    load_config,
    save_config,
)
from ..embeds import TWITCH_EMBED_SCRIPT, embed_for, youtube_embed_url
from ..feed import create_post, load_feed
from ..media_url import classify_media_url

logger = logging.getLogger(__name__)

FEED_TEMPLATE = """
<!DOCTYPE html>
<html lang="en" data-theme="{{ theme.value }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Pinged.gg - Home</title>
    <style>
        :root { --primary: {{ theme.primary }}; --secondary: {{ theme.secondary }}; }
        body { font-family: system-ui, sans-serif; max-width: 680px; margin: 2rem auto; padding: 0 1rem;
            background: #111; color: #eee; }
        h1 { font-size: 1.5rem; color: var(--primary); }
        .card { background: #1f1f1f; padding: 1rem; border-radius: 8px; margin: 1rem 0; }
        .meta { font-size: 0.8rem; color: #999; }
        .tag { background: var(--secondary); padding: 0.1rem 0.5rem; border-radius: 999px; }
        .player { position: relative; width: 100%; }
        .player iframe { width: 100%; height: 100%; border: 0; border-radius: 8px; }
        .placeholder { background: #333; padding: 1rem; text-align: center; border-radius: 8px; color: #999; }
        .btn { display: inline-block; padding: 0.5rem 1rem; background: var(--primary); color: #111;
            border: none; text-decoration: none; border-radius: 4px; cursor: pointer; }
        .error { color: #f66; }
        textarea, input { width: 100%; padding: 0.5rem; box-sizing: border-box; margin-bottom: 0.5rem; }
    </style>
    <script src="{{ twitch_script }}"></script>
</head>
<body>
    <h1>Pinged.gg</h1>
    <div class="card">
        {% if request.args.get('error') %}
        <p class="error">Could not create post. Check the content and media link.</p>
        {% endif %}
        <form method="post" action="{{ url_for('post') }}">
            <input type="text" name="user_id" placeholder="Gamer tag" required>
            <textarea name="content" rows="3" placeholder="What's happening in your games?" required></textarea>
            <input type="text" name="media_url" placeholder="YouTube or Twitch link (optional)">
            <input type="text" name="game_tag" placeholder="Game (optional)">
            <button type="submit" class="btn">Post</button>
        </form>
        <a href="{{ url_for('settings') }}" class="meta">Settings</a>
    </div>
    {% for post in posts %}
    <div class="card">
        <p class="meta">
            <strong>{{ post.user_id }}</strong> &middot; {{ post.time_ago }}
            {% if post.game_tag %}<span class="tag">{{ post.game_tag }}</span>{% endif %}
        </p>
        <p>{{ post.content }}</p>
        {% if post.embed and post.embed.src %}
        <div class="player" style="aspect-ratio: {{ post.embed.aspect_ratio }};">
            <iframe src="{{ post.embed.src }}" title="YouTube video"
                allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture; web-share"
                allowfullscreen></iframe>
        </div>
        <a href="{{ url_for('watch', video_id=post.embed.resource_id) }}" class="meta">Fullscreen</a>
        {% elif post.embed %}
        <div class="player" id="twitch-embed-{{ post.id }}" style="aspect-ratio: {{ post.embed.aspect_ratio }};"></div>
        <script>new Twitch.Embed("twitch-embed-{{ post.id }}", {{ post.embed.options | tojson }});</script>
        {% elif post.media_url %}
        <div class="placeholder">Media content</div>
        {% endif %}
    </div>
    {% else %}
    <div class="card">
        <p>Welcome to your feed! Start posting to see clips here.</p>
    </div>
    {% endfor %}
</body>
</html>
"""

WATCH_TEMPLATE = """
<!DOCTYPE html>
<html lang="en" data-theme="{{ theme.value }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Pinged.gg - Watch</title>
    <style>
        html, body { margin: 0; height: 100%; background: #000; }
        iframe { position: fixed; inset: 0; width: 100%; height: 100%; border: 0; }
        .controls { position: fixed; top: 1rem; right: 1rem; display: flex; gap: 0.5rem; z-index: 1; }
        .controls a { padding: 0.5rem 1rem; background: {{ theme.primary }}; color: #111;
            text-decoration: none; border-radius: 4px; font-family: system-ui, sans-serif; }
    </style>
</head>
<body>
    <iframe src="{{ src }}" title="YouTube video" allow="autoplay; encrypted-media"></iframe>
    <div class="controls">
        <a href="{{ url_for('watch', video_id=video_id, muted=0 if muted else 1) }}">{{ 'Unmute' if muted else 'Mute' }}</a>
        <a href="{{ url_for('feed') }}">Close</a>
    </div>
</body>
</html>
"""

SETTINGS_TEMPLATE = """
<!DOCTYPE html>
<html lang="en" data-theme="{{ config.theme }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Pinged.gg - Settings</title>
    <style>
        body { font-family: system-ui, sans-serif; max-width: 500px; margin: 2rem auto; padding: 0 1rem;
            background: #111; color: #eee; }
        h1 { font-size: 1.5rem; }
        form { display: flex; flex-direction: column; gap: 1rem; }
        label { font-weight: 500; }
        input, select { padding: 0.5rem; font-size: 1rem; }
        .swatch { display: inline-block; width: 1rem; height: 1rem; border-radius: 50%; }
        .btn { padding: 0.5rem 1rem; background: #333; color: white; border: none;
            border-radius: 4px; cursor: pointer; font-size: 1rem; }
        .back { display: inline-block; margin-top: 1rem; color: #999; }
    </style>
</head>
<body>
    <h1>Settings</h1>
    <form method="post">
        <label>Choose Theme</label>
        {% for t in themes.values() %}
        <label>
            <input type="radio" name="theme" value="{{ t.value }}" {{ 'checked' if config.theme == t.value else '' }}>
            <span class="swatch" style="background: {{ t.primary }};"></span>
            <span class="swatch" style="background: {{ t.secondary }};"></span>
            {{ t.name }}
        </label>
        {% endfor %}
        <label for="embed_parent">Twitch embed parent domain</label>
        <input type="text" id="embed_parent" name="embed_parent" value="{{ config.embed_parent }}" required>
        <label for="web_port">Web interface port</label>
        <input type="number" id="web_port" name="web_port" value="{{ config.web_port }}" min="1024" max="65535">
        <label>
            <input type="checkbox" name="debug_mode" value="1" {{ 'checked' if config.debug_mode else '' }}>
            Debug mode
        </label>
        <button type="submit" class="btn">Save</button>
    </form>
    <a href="{{ url_for('feed') }}" class="back">← Back to Feed</a>
</body>
</html>
"""


def create_app(config_path: Optional[Path] = None) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)

    @app.route("/")
    def feed():
        config = load_config(config_path)
        posts = load_feed(parent=config.embed_parent, db_path=config_path)
        return render_template_string(
            FEED_TEMPLATE,
            theme=THEMES[config.theme],
            posts=posts,
            twitch_script=TWITCH_EMBED_SCRIPT,
        )

    @app.route("/post", methods=["POST"])
    def post():
        """Create a post from the composer form."""
        try:
            create_post(
                user_id=request.form.get("user_id", "").strip(),
                content=request.form.get("content", ""),
                media_url=request.form.get("media_url"),
                game_tag=request.form.get("game_tag"),
                db_path=config_path,
            )
        except (ValueError, TypeError) as e:
            logger.warning("Rejected post: %s", e)
            return redirect(url_for("feed", error=1))
        return redirect(url_for("feed"))

    @app.route("/settings", methods=["GET", "POST"])
    def settings():
        config = load_config(config_path)
        if request.method == "POST":
            try:
                config = AppConfig(
                    web_port=int(request.form.get("web_port", config.web_port)),
                    debug_mode=request.form.get("debug_mode") == "1",
                    embed_parent=request.form.get("embed_parent", "").strip() or config.embed_parent,
                    theme=request.form.get("theme", config.theme),
                )
                save_config(config, config_path)
                return redirect(url_for("feed"))
            except (ValueError, TypeError) as e:
                logger.warning("Invalid settings: %s", e)
                config = load_config(config_path)
        return render_template_string(SETTINGS_TEMPLATE, config=config, themes=THEMES)

    @app.route("/watch/<video_id>")
    def watch(video_id: str):
        """Fullscreen autoplaying YouTube player, muted with ?muted=1."""
        config = load_config(config_path)
        muted = request.args.get("muted") == "1"
        return render_template_string(
            WATCH_TEMPLATE,
            theme=THEMES[config.theme],
            src=youtube_embed_url(video_id, fullscreen=True, muted=muted),
            video_id=video_id,
            muted=muted,
        )

    @app.route("/api/media")
    def media():
        """Classify a media URL. Unsupported input is a normal, negative answer."""
        url = request.args.get("url", "")
        ref = classify_media_url(url)
        if not ref:
            return jsonify(supported=False)
        embed = embed_for(ref, load_config(config_path).embed_parent)
        return jsonify(
            supported=True,
            platform=ref.platform,
            resource_type=ref.resource_type,
            resource_id=ref.resource_id,
            embed={"src": embed.src, "options": embed.options, "aspect_ratio": embed.aspect_ratio},
        )

    return app


def run_web_server(
    host: str = "0.0.0.0",
    port: Optional[int] = None,
    db_path: Optional[Path] = None,
) -> None:
    """Run the Flask development server."""
    path = db_path or get_db_path()
    config = load_config(path)
    port = port or config.web_port
    app = create_app(config_path=path)
    app.run(host=host, port=port, threaded=True, use_reloader=False, debug=config.debug_mode)
