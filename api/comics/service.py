"""
Comic catalog business logic.

Scope:
- list with filters and pagination
- single create / read / update / delete
- bulk create and bulk delete with per-item outcomes

Functions take the `CatalogStore` explicitly and raise `core.errors`
exceptions; the router layer only translates HTTP inputs and outputs.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from core.errors import NotFoundError, ValidationError

from .repository import CatalogStore
from .schemas import (
    DEFAULT_DESCRIPTION,
    DEFAULT_GENRE,
    DEFAULT_PUBLISHER,
    Comic,
    ComicFilters,
    ComicInput,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

REQUIRED_FIELDS_MESSAGE = "Title, author, and year are required fields"
BULK_CREATE_BODY_MESSAGE = "Request body must be a non-empty array of comics"
BULK_DELETE_BODY_MESSAGE = "Request body must contain a non-empty array of ids"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> int | None:
    """
    Coerce `value` to an int the lenient way query strings need.

    Text is read up to its first non-digit ("12abc" -> 12, "2.5" -> 2).
    Integral floats pass through; booleans and anything else give None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


@dataclass(frozen=True)
class ComicPage:
    data: list[Comic]
    total_items: int
    total_pages: int
    current_page: int


@dataclass
class BulkCreateResult:
    added: list[Comic] = field(default_factory=list)
    failed: list[dict[str, Any]] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Successfully added {len(self.added)} comics, "
            f"failed to add {len(self.failed)} comics"
        )


@dataclass
class BulkDeleteResult:
    deleted: list[Comic] = field(default_factory=list)
    not_found: list[Any] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Successfully deleted {len(self.deleted)} comics, "
            f"could not find {len(self.not_found)} comics"
        )


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def filter_comics(comics: list[Comic], filters: ComicFilters) -> list[Comic]:
    """
    Apply every non-empty filter (AND), keeping the original order.
    """
    result = comics
    if filters.author:
        result = [c for c in result if _contains(c.author, filters.author)]
    if filters.genre:
        result = [c for c in result if _contains(c.genre, filters.genre)]
    if filters.publisher:
        result = [c for c in result if _contains(c.publisher, filters.publisher)]
    if filters.year:
        year = parse_int(filters.year)
        result = [c for c in result if year is not None and c.year == year]
    return result


def list_comics(
    store: CatalogStore,
    filters: ComicFilters,
    *,
    page: str | None = None,
    limit: str | None = None,
) -> ComicPage:
    # Zero and unparsable values fall back to the defaults; negatives follow slice arithmetic.
    current_page = parse_int(page) or DEFAULT_PAGE
    page_size = parse_int(limit) or DEFAULT_LIMIT

    matched = filter_comics(store.list_all(), filters)
    start = (current_page - 1) * page_size
    end = current_page * page_size

    return ComicPage(
        data=matched[start:end],
        total_items=len(matched),
        total_pages=math.ceil(len(matched) / page_size),
        current_page=current_page,
    )


def _not_found(raw_id: Any, comic_id: int | None) -> NotFoundError:
    shown = comic_id if comic_id is not None else raw_id
    return NotFoundError(f"Comic with ID {shown} not found")


def get_comic(store: CatalogStore, raw_id: str) -> Comic:
    comic_id = parse_int(raw_id)
    comic = store.find(comic_id) if comic_id is not None else None
    if comic is None:
        raise _not_found(raw_id, comic_id)
    return comic


def _missing_required(payload: ComicInput) -> bool:
    return not payload.title or not payload.author or not payload.year


def _coerce_year(year: int | str) -> int:
    value = parse_int(year)
    if value is None:
        raise ValidationError(f"Year must be an integer, got {year!r}")
    return value


def _build_comic(payload: ComicInput, comic_id: int, year: int) -> Comic:
    return Comic(
        id=comic_id,
        title=payload.title or "",
        author=payload.author or "",
        year=year,
        publisher=payload.publisher or DEFAULT_PUBLISHER,
        genre=payload.genre or DEFAULT_GENRE,
        description=payload.description or DEFAULT_DESCRIPTION,
    )


def _insert(store: CatalogStore, payload: ComicInput) -> Comic:
    if _missing_required(payload):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    year = _coerce_year(payload.year)  # type: ignore[arg-type]
    return store.insert(lambda comic_id: _build_comic(payload, comic_id, year))


def create_comic(store: CatalogStore, payload: ComicInput) -> Comic:
    comic = _insert(store, payload)
    logger.info("comic_created id=%s title=%r", comic.id, comic.title)
    return comic


def update_comic(store: CatalogStore, raw_id: str, payload: ComicInput) -> Comic:
    comic_id = parse_int(raw_id)
    if comic_id is None or store.find(comic_id) is None:
        raise _not_found(raw_id, comic_id)

    changes = payload.model_dump(exclude_none=True)
    if "year" in changes:
        changes["year"] = _coerce_year(changes["year"])

    updated = store.replace(comic_id, lambda current: current.model_copy(update=changes))
    if updated is None:
        raise _not_found(raw_id, comic_id)

    logger.info("comic_updated id=%s fields=%s", updated.id, sorted(changes))
    return updated


def delete_comic(store: CatalogStore, raw_id: str) -> Comic:
    comic_id = parse_int(raw_id)
    deleted = store.remove(comic_id) if comic_id is not None else None
    if deleted is None:
        raise _not_found(raw_id, comic_id)

    logger.info("comic_deleted id=%s", deleted.id)
    return deleted


def _failure_reason(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "comic"
    return f"Invalid value for {loc}: {first.get('msg', 'invalid')}"


def bulk_create(store: CatalogStore, items: Any) -> BulkCreateResult:
    """
    Insert each item independently; bad items are reported, not fatal.

    Only a body that is not a non-empty list fails the whole call.
    """
    if not isinstance(items, list) or not items:
        raise ValidationError(BULK_CREATE_BODY_MESSAGE)

    result = BulkCreateResult()
    for item in items:
        if not isinstance(item, dict):
            result.failed.append({"comic": item, "reason": "Each comic must be a JSON object"})
            continue

        try:
            payload = ComicInput.model_validate(item)
        except PydanticValidationError as exc:
            result.failed.append({"comic": item, "reason": _failure_reason(exc)})
            continue

        try:
            comic = _insert(store, payload)
        except ValidationError as exc:
            result.failed.append({"comic": item, "reason": exc.message})
            continue
        result.added.append(comic)

    logger.info("comics_bulk_created added=%s failed=%s", len(result.added), len(result.failed))
    return result


def bulk_delete(store: CatalogStore, ids: Any) -> BulkDeleteResult:
    """
    Delete each id in order. Ids that match nothing (including repeats of an
    id already deleted in this batch) are echoed back in `not_found`.
    """
    if not isinstance(ids, list) or not ids:
        raise ValidationError(BULK_DELETE_BODY_MESSAGE)

    result = BulkDeleteResult()
    for raw_id in ids:
        comic_id = parse_int(raw_id)
        deleted = store.remove(comic_id) if comic_id is not None else None
        if deleted is None:
            result.not_found.append(raw_id)
            continue
        result.deleted.append(deleted)

    logger.info(
        "comics_bulk_deleted deleted=%s not_found=%s",
        len(result.deleted),
        len(result.not_found),
    )
    return result
