"""
Catalog statistics endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from comics import repository
from core.errors import reported_as

from . import service

router = APIRouter()


@router.get("/stats/comics")
async def get_comic_stats(
    store: repository.CatalogStore = Depends(repository.get_store),
) -> dict:
    with reported_as("fetching statistics"):
        stats = service.catalog_stats(store)
    return stats.to_dict()
