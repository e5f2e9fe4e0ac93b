"""Catechism content lookups, one ordered catalog per language."""
import json

from catechism_tutor.config import LANGUAGES
from catechism_tutor.db import get_connection
from catechism_tutor.models import ContentItem


def check_language(language: str) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")
    return language


def _row_to_item(row) -> ContentItem:
    return ContentItem.from_dict(
        row["item_number"],
        {"Q": row["question"], "A": row["answer"], "S": json.loads(row["footnotes"])},
    )


def get_catalog(db_path: str, language: str) -> list[ContentItem]:
    check_language(language)
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT * FROM catechism_items WHERE language = ? ORDER BY item_number",
        (language,),
    ).fetchall()
    conn.close()
    return [_row_to_item(row) for row in rows]


def get_item(db_path: str, language: str, item_id: int) -> ContentItem | None:
    check_language(language)
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT * FROM catechism_items WHERE language = ? AND item_number = ?",
        (language, item_id),
    ).fetchone()
    conn.close()
    return _row_to_item(row) if row else None


def get_catalog_size(db_path: str, language: str) -> int:
    check_language(language)
    conn = get_connection(db_path)
    count = conn.execute(
        "SELECT COUNT(*) FROM catechism_items WHERE language = ?", (language,)
    ).fetchone()[0]
    conn.close()
    return count


def replace_catalog(db_path: str, language: str, entries: list) -> int:
    """Replace a language's catalog with ``entries`` (``Q/A/S`` dicts), numbered from 1."""
    check_language(language)
    items = [ContentItem.from_dict(number, entry) for number, entry in enumerate(entries, 1)]
    conn = get_connection(db_path)
    conn.execute("DELETE FROM catechism_items WHERE language = ?", (language,))
    for item in items:
        payload = item.to_dict()
        conn.execute(
            """INSERT INTO catechism_items (language, item_number, question, answer, footnotes)
            VALUES (?, ?, ?, ?, ?)""",
            (language, item.id, item.question, item.answer,
             json.dumps(payload["S"], ensure_ascii=False)),
        )
    conn.commit()
    conn.close()
    return len(items)
