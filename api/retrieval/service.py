"""
Keyword search over the comic catalog.
"""

from __future__ import annotations

import logging

from comics.repository import CatalogStore
from comics.schemas import Comic
from core.errors import NotFoundError

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS = ("title", "author", "publisher", "genre", "description")


def matches_keyword(comic: Comic, keyword: str) -> bool:
    needle = keyword.lower()
    return any(needle in str(getattr(comic, name)).lower() for name in SEARCHABLE_FIELDS)


def search_comics(store: CatalogStore, keyword: str) -> list[Comic]:
    """
    Return comics whose text fields contain `keyword` (case-insensitive).

    Raises NotFoundError when nothing matches.
    """
    results = [comic for comic in store.list_all() if matches_keyword(comic, keyword)]
    logger.debug("keyword_search keyword=%r matches=%s", keyword, len(results))
    if not results:
        raise NotFoundError(f"No comics found matching keyword: {keyword}")
    return results
