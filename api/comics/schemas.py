"""
Pydantic schemas for comic records and request bodies.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PUBLISHER = "Unknown"
DEFAULT_GENRE = "Unspecified"
DEFAULT_DESCRIPTION = ""


class Comic(BaseModel):
    """
    One catalog entry. Instances are never mutated; updates replace them.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    author: str
    year: int
    publisher: str = DEFAULT_PUBLISHER
    genre: str = DEFAULT_GENRE
    description: str = DEFAULT_DESCRIPTION


class ComicInput(BaseModel):
    # Every field is optional here; creation enforces title/author/year itself.
    title: str | None = None
    author: str | None = None
    year: int | str | None = None
    publisher: str | None = None
    genre: str | None = None
    description: str | None = None


class BulkDeleteRequest(BaseModel):
    ids: Any = Field(default=None)


class ComicFilters(BaseModel):
    author: str | None = None
    genre: str | None = None
    publisher: str | None = None
    year: str | None = None
