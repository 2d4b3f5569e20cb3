"""
In-memory comic storage.

`CatalogStore` owns the ordered record sequence. The process-wide instance
is created by `init_store()` on startup and dropped by `close_store()` on
shutdown (see `api/main.py`); request handlers receive it through the
`get_store` dependency.

Identifier policy: the next id is always max(existing ids, 0) + 1, so
deleting the newest record frees its id for the next insert.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from core import settings

from .schemas import Comic

logger = logging.getLogger(__name__)

SEED_COMICS: tuple[Comic, ...] = (
    Comic(
        id=1,
        title="Batman: The Dark Knight Returns",
        author="Frank Miller",
        year=1986,
        publisher="DC Comics",
        genre="Superhero",
        description="Set in a dystopian future, an aged Bruce Wayne dons the Batman costume once again.",
    ),
    Comic(
        id=2,
        title="Watchmen",
        author="Alan Moore",
        year=1986,
        publisher="DC Comics",
        genre="Superhero",
        description=(
            "Deconstruction of the superhero concept, features complex characters "
            "and alternating storylines."
        ),
    ),
    Comic(
        id=3,
        title="Maus",
        author="Art Spiegelman",
        year=1991,
        publisher="Pantheon Books",
        genre="Biography",
        description="A survivor's tale, portraying Jews as mice and Nazis as cats during the Holocaust.",
    ),
)


class CatalogStore:
    def __init__(self, comics: list[Comic] | tuple[Comic, ...] = ()) -> None:
        self._lock = threading.Lock()
        self._comics: list[Comic] = list(comics)

    def __len__(self) -> int:
        return len(self._comics)

    def list_all(self) -> list[Comic]:
        with self._lock:
            return list(self._comics)

    def find(self, comic_id: int) -> Comic | None:
        with self._lock:
            index = self._index_of(comic_id)
            return self._comics[index] if index is not None else None

    def next_id(self) -> int:
        with self._lock:
            return self._next_id()

    def insert(self, build: Callable[[int], Comic]) -> Comic:
        """
        Append the record returned by `build(next_id)` and return it.

        The id is assigned and the record appended under one lock hold.
        """
        with self._lock:
            comic = build(self._next_id())
            self._comics.append(comic)
            return comic

    def replace(self, comic_id: int, update: Callable[[Comic], Comic]) -> Comic | None:
        with self._lock:
            index = self._index_of(comic_id)
            if index is None:
                return None
            updated = update(self._comics[index])
            self._comics[index] = updated
            return updated

    def remove(self, comic_id: int) -> Comic | None:
        with self._lock:
            index = self._index_of(comic_id)
            if index is None:
                return None
            return self._comics.pop(index)

    def reset(self, comics: list[Comic] | tuple[Comic, ...] = ()) -> None:
        with self._lock:
            self._comics = list(comics)

    def _next_id(self) -> int:
        return max((comic.id for comic in self._comics), default=0) + 1

    def _index_of(self, comic_id: int) -> int | None:
        for index, comic in enumerate(self._comics):
            if comic.id == comic_id:
                return index
        return None


_store: CatalogStore | None = None


def _initial_comics() -> tuple[Comic, ...]:
    return SEED_COMICS if settings.seed_comics() else ()


def init_store() -> None:
    global _store
    if _store is not None:
        return None
    _store = CatalogStore(_initial_comics())
    logger.info("store_initialized comics=%s", len(_store))


def close_store() -> None:
    global _store
    _store = None


def reset_store() -> CatalogStore:
    """
    Put the process store back into its startup state (used by tests).
    """
    if _store is None:
        init_store()
    current = store()
    current.reset(_initial_comics())
    return current


def store() -> CatalogStore:
    if _store is None:
        raise RuntimeError("Comic store is not initialized. Call init_store() on startup.")
    return _store


def get_store() -> CatalogStore:
    return store()
