"""
FastAPI router for comic CRUD and bulk endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from core.errors import ValidationError, reported_as

from . import repository, service
from .schemas import BulkDeleteRequest, ComicFilters, ComicInput

router = APIRouter()


@router.get("/comics")
async def list_comics(
    author: str | None = Query(default=None),
    genre: str | None = Query(default=None),
    publisher: str | None = Query(default=None),
    year: str | None = Query(default=None),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    """
    List comics, optionally filtered by author/genre/publisher (substring,
    case-insensitive) and year (exact), one page at a time.
    """
    with reported_as("fetching comics"):
        filters = ComicFilters(author=author, genre=genre, publisher=publisher, year=year)
        result = service.list_comics(store, filters, page=page, limit=limit)
    return {
        "data": result.data,
        "totalItems": result.total_items,
        "totalPages": result.total_pages,
        "currentPage": result.current_page,
    }


# Bulk routes are declared before "/comics/{comic_id}" so "bulk" is never read as an id.
@router.post("/comics/bulk", status_code=status.HTTP_201_CREATED)
async def bulk_create_comics(
    items: Any = Body(default=None),
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("adding comics in bulk"):
        result = service.bulk_create(store, items)
    return {
        "message": result.message,
        "addedComics": result.added,
        "failedComics": result.failed,
    }


@router.delete("/comics/bulk")
async def bulk_delete_comics(
    body: Any = Body(default=None),
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("deleting comics in bulk"):
        if not isinstance(body, dict):
            raise ValidationError(service.BULK_DELETE_BODY_MESSAGE)
        request = BulkDeleteRequest.model_validate(body)
        result = service.bulk_delete(store, request.ids)
    return {
        "message": result.message,
        "deletedComics": result.deleted,
        "notFoundIds": result.not_found,
    }


@router.get("/comics/{comic_id}")
async def get_comic(
    comic_id: str,
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("fetching the comic"):
        comic = service.get_comic(store, comic_id)
    return {"data": comic}


@router.post("/comics", status_code=status.HTTP_201_CREATED)
async def create_comic(
    payload: ComicInput | None = None,
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("adding the comic"):
        comic = service.create_comic(store, payload or ComicInput())
    return {"message": "Comic added successfully", "data": comic}


@router.put("/comics/{comic_id}")
async def update_comic(
    comic_id: str,
    payload: ComicInput | None = None,
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("updating the comic"):
        comic = service.update_comic(store, comic_id, payload or ComicInput())
    return {"message": "Comic updated successfully", "data": comic}


@router.delete("/comics/{comic_id}")
async def delete_comic(
    comic_id: str,
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("deleting the comic"):
        comic = service.delete_comic(store, comic_id)
    return {"message": "Comic deleted successfully", "data": comic}
