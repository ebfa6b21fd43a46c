from __future__ import annotations

from pydantic import BaseModel

from receitas.search.results import SearchResult


class HealthResponse(BaseModel):
    status: str = "ok"


class SearchResponse(BaseModel):
    items: list[SearchResult]


class ErrorResponse(BaseModel):
    error: str
