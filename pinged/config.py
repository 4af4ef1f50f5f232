"""SQLite settings store and post persistence."""

from __future__ import annotations

import sqlite3
import time
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_DB_PATH = DEFAULT_DATA_DIR / "pinged.db"


@dataclass(frozen=True)
class Theme:
    value: str
    name: str
    primary: str
    secondary: str


THEMES: dict[str, Theme] = {
    t.value: t
    for t in (
        Theme("orange", "Gaming Orange", "#FF9C00", "#AC3601"),
        Theme("blue", "Electric Blue", "#3B82F6", "#1E40AF"),
        Theme("pink", "Neon Pink", "#EC4899", "#BE185D"),
        Theme("purple", "Cyber Purple", "#8B5CF6", "#6D28D9"),
        Theme("green", "Matrix Green", "#10B981", "#047857"),
    )
}

# Default config values
DEFAULT_THEME = "orange"
DEFAULT_WEB_PORT = 8080
DEFAULT_DEBUG_MODE = False
DEFAULT_EMBED_PARENT = "localhost"


@dataclass
class AppConfig:
    """Application configuration."""

    web_port: int
    debug_mode: bool
    embed_parent: str
    theme: str

    @classmethod
    def defaults(cls) -> AppConfig:
        return cls(
            web_port=DEFAULT_WEB_PORT,
            debug_mode=DEFAULT_DEBUG_MODE,
            embed_parent=DEFAULT_EMBED_PARENT,
            theme=DEFAULT_THEME,
        )


def _ensure_data_dir(db_path: Path) -> None:
    """Create the data directory if it doesn't exist."""
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _init_schema(conn: sqlite3.Connection) -> None:
    """Create tables if they don't exist."""
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS config (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
        CREATE TABLE IF NOT EXISTS posts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            content TEXT NOT NULL,
            media_url TEXT,
            game_tag TEXT,
            created_at REAL NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_posts_created_at
            ON posts(created_at);
    """)


def _connect(db_path: Optional[Path]) -> sqlite3.Connection:
    path = db_path or get_db_path()
    _ensure_data_dir(path)
    conn = sqlite3.connect(path)
    try:
        conn.row_factory = sqlite3.Row
        _init_schema(conn)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def _config_to_dict(config: AppConfig) -> dict[str, str]:
    return {
        "web_port": str(config.web_port),
        "debug_mode": "true" if config.debug_mode else "false",
        "embed_parent": config.embed_parent,
        "theme": config.theme,
    }


def _dict_to_config(d: dict[str, str]) -> AppConfig:
    theme = d.get("theme", DEFAULT_THEME)
    return AppConfig(
        web_port=int(d.get("web_port", DEFAULT_WEB_PORT)),
        debug_mode=d.get("debug_mode", "false").lower() in ("true", "1", "yes"),
        embed_parent=d.get("embed_parent") or DEFAULT_EMBED_PARENT,
        theme=theme if theme in THEMES else DEFAULT_THEME,
    )


def get_db_path() -> Path:
    """Return the database path, ensuring the directory exists."""
    _ensure_data_dir(DEFAULT_DB_PATH)
    return DEFAULT_DB_PATH


def load_config(db_path: Optional[Path] = None) -> AppConfig:
    """Load config from SQLite. Returns defaults if no config exists."""
    with closing(_connect(db_path)) as conn:
        rows = conn.execute("SELECT key, value FROM config").fetchall()

    if not rows:
        return AppConfig.defaults()

    d = {row["key"]: row["value"] for row in rows}
    return _dict_to_config(d)


def save_config(config: AppConfig, db_path: Optional[Path] = None) -> None:
    """Save config to SQLite. Raises ValueError for an unknown theme."""
    if config.theme not in THEMES:
        raise ValueError(f"Unknown theme: {config.theme!r}")

    with closing(_connect(db_path)) as conn:
        for key, value in _config_to_dict(config).items():
            conn.execute(
                "INSERT OR REPLACE INTO config (key, value) VALUES (?, ?)",
                (key, value),
            )
        conn.commit()


def load_theme(db_path: Optional[Path] = None) -> Theme:
    """Return the selected theme, falling back to the default for unknown values."""
    return THEMES[load_config(db_path).theme]


def save_theme(theme: str, db_path: Optional[Path] = None) -> None:
    config = load_config(db_path)
    config.theme = theme
    save_config(config, db_path)


def add_post(
    user_id: str,
    content: str,
    media_url: Optional[str],
    game_tag: Optional[str],
    db_path: Optional[Path] = None,
) -> int:
    """Insert a post and return its id."""
    with closing(_connect(db_path)) as conn:
        cur = conn.execute(
            "INSERT INTO posts (user_id, content, media_url, game_tag, created_at) VALUES (?, ?, ?, ?, ?)",
            (user_id, content, media_url, game_tag, time.time()),
        )
        conn.commit()
        return cur.lastrowid


def get_recent_posts(limit: int = 20, db_path: Optional[Path] = None) -> list[dict]:
    """Get the newest posts for the feed."""
    with closing(_connect(db_path)) as conn:
        rows = conn.execute(
            """
            SELECT id, user_id, content, media_url, game_tag, created_at
            FROM posts
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()
    return [dict(r) for r in rows]
