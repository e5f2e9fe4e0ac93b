"""Persisted user preferences: language and bookmarks."""
import json
import logging

from catechism_tutor.config import DEFAULT_LANGUAGE, LANGUAGES
from catechism_tutor.catalog import check_language
from catechism_tutor.db import get_connection

log = logging.getLogger(__name__)

LANGUAGE_KEY = "language"
BOOKMARKS_KEY = "bookmarks"


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_language(db_path: str) -> str:
    saved = get_setting(db_path, LANGUAGE_KEY, DEFAULT_LANGUAGE)
    return saved if saved in LANGUAGES else DEFAULT_LANGUAGE


def set_language(db_path: str, language: str) -> None:
    set_setting(db_path, LANGUAGE_KEY, check_language(language))


def toggle_language(db_path: str) -> str:
    """Switch between English and Chinese; returns the new language."""
    language = "zh" if get_language(db_path) == "en" else "en"
    set_language(db_path, language)
    return language


def get_bookmarks(db_path: str) -> list[int]:
    raw = get_setting(db_path, BOOKMARKS_KEY)
    if not raw:
        return []
    try:
        ids = json.loads(raw)
    except json.JSONDecodeError:
        log.warning("Ignoring malformed bookmarks setting: %r", raw)
        return []
    if not isinstance(ids, list):
        return []
    return [i for i in ids if isinstance(i, int)]


def is_bookmarked(db_path: str, item_id: int) -> bool:
    return item_id in get_bookmarks(db_path)


def toggle_bookmark(db_path: str, item_id: int) -> bool:
    """Add or remove a bookmark; returns True when the item is now bookmarked."""
    bookmarks = get_bookmarks(db_path)
    if item_id in bookmarks:
        bookmarks.remove(item_id)
        bookmarked = False
    else:
        bookmarks.append(item_id)
        bookmarked = True
    set_setting(db_path, BOOKMARKS_KEY, json.dumps(bookmarks))
    return bookmarked
