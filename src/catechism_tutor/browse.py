"""Search and bookmark filtering over a catalog."""
from typing import Iterable

from catechism_tutor.models import ContentItem


def matches_query(item: ContentItem, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    return q in item.question.lower() or q in item.answer.lower() or str(item.id) == q


def filter_items(
    items: Iterable[ContentItem],
    query: str = "",
    bookmarks: Iterable[int] = (),
    bookmarked_only: bool = False,
) -> list[ContentItem]:
    """Items matching ``query``, optionally restricted to bookmarked ids, in catalog order."""
    result = list(items)
    if bookmarked_only:
        saved = set(bookmarks)
        result = [item for item in result if item.id in saved]
    return [item for item in result if matches_query(item, query)]
