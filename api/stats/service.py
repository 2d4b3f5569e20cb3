"""
Aggregate statistics over the comic catalog.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from comics.repository import CatalogStore
from comics.schemas import Comic


@dataclass(frozen=True)
class CatalogStats:
    total_comics: int
    publisher_counts: dict[str, int]
    author_counts: dict[str, int]
    genre_counts: dict[str, int]
    oldest_comic: Comic | None
    newest_comic: Comic | None

    def to_dict(self) -> dict:
        return {
            "totalComics": self.total_comics,
            "uniquePublishers": len(self.publisher_counts),
            "uniqueAuthors": len(self.author_counts),
            "uniqueGenres": len(self.genre_counts),
            "publisherCounts": self.publisher_counts,
            "authorCounts": self.author_counts,
            "genreCounts": self.genre_counts,
            "oldestComic": self.oldest_comic,
            "newestComic": self.newest_comic,
        }


def _oldest(comics: list[Comic]) -> Comic | None:
    # min()/max() keep the first of equal keys, so ties go to catalog order.
    return min(comics, key=lambda comic: comic.year, default=None)


def _newest(comics: list[Comic]) -> Comic | None:
    return max(comics, key=lambda comic: comic.year, default=None)


def catalog_stats(store: CatalogStore) -> CatalogStats:
    """
    Summarize the catalog. An empty catalog yields zero counts and no
    oldest/newest comic.
    """
    comics = store.list_all()
    return CatalogStats(
        total_comics=len(comics),
        publisher_counts=dict(Counter(comic.publisher for comic in comics)),
        author_counts=dict(Counter(comic.author for comic in comics)),
        genre_counts=dict(Counter(comic.genre for comic in comics)),
        oldest_comic=_oldest(comics),
        newest_comic=_newest(comics),
    )
