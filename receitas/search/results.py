from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, ValidationError


class SearchResult(BaseModel):
    title: str
    link: str
    displayLink: str
    image: str | None = None


class UpstreamItem(BaseModel):
    # strict: a numeric title is malformed, not something to coerce
    model_config = ConfigDict(strict=True, extra="ignore")

    title: str
    link: str
    displayLink: str
    pagemap: Any = None


class UpstreamResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: list[Any] = []


def _first_src(pagemap: dict, key: str) -> str | None:
    refs = pagemap.get(key)
    if not isinstance(refs, list) or not refs or not isinstance(refs[0], dict):
        return None
    src = refs[0].get("src")
    return src if isinstance(src, str) and src else None


def resolve_image(pagemap: Any) -> str | None:
    if not isinstance(pagemap, dict):
        return None
    return _first_src(pagemap, "cse_image") or _first_src(pagemap, "thumbnail")


def parse_item(raw: Any) -> SearchResult | None:
    """Map one provider item to a SearchResult, or None if it is malformed."""
    try:
        item = UpstreamItem.model_validate(raw)
    except ValidationError:
        return None
    return SearchResult(
        title=item.title,
        link=item.link,
        displayLink=item.displayLink,
        image=resolve_image(item.pagemap),
    )


def merge_results(raw_items: Iterable[Any]) -> list[SearchResult]:
    """Drop malformed entries and keep the first occurrence of every link."""
    seen: set[str] = set()
    out: list[SearchResult] = []
    for raw in raw_items:
        result = parse_item(raw)
        if result is None or result.link in seen:
            continue
        seen.add(result.link)
        out.append(result)
    return out
