"""
Retrieval API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from comics import repository
from core.errors import reported_as

from . import service

router = APIRouter()


@router.get("/search/comics/{keyword}")
async def search_comics(
    keyword: str,
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("searching comics"):
        results = service.search_comics(store, keyword)
    return {
        "message": f"Found {len(results)} comics matching keyword: {keyword}",
        "data": results,
    }
