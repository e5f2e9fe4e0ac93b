"""Seed the database with the bundled catechism in each language."""
import json
import logging

from catechism_tutor.catalog import replace_catalog
from catechism_tutor.config import CONTENT_DIR, LANGUAGES
from catechism_tutor.db import get_connection

log = logging.getLogger(__name__)


def is_seeded(db_path: str) -> bool:
    """Check whether any catechism items have been loaded."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM catechism_items").fetchone()[0]
    conn.close()
    return count > 0


def load_bundled_items(language: str) -> list:
    """Raw ``Q/A/S`` entries from ``content/wcs.<language>.json``."""
    data = json.loads((CONTENT_DIR / f"wcs.{language}.json").read_text(encoding="utf-8"))
    return data["items"]


def seed_language(db_path: str, language: str) -> int:
    """Load the bundled catechism for one language; returns the item count."""
    count = replace_catalog(db_path, language, load_bundled_items(language))
    log.info("Seeded %d %s items", count, language)
    return count


def seed_all(db_path: str) -> None:
    """Run all seed functions in order."""
    if is_seeded(db_path):
        return
    for language in LANGUAGES:
        seed_language(db_path, language)
