"""Parsing and clamping of raw query-string parameters.

Malformed numbers never raise: they fall back to the caller's default, the
same way a browser URL parser would shrug off ``?page=abc``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .config import Settings


@dataclass(frozen=True)
class SearchParams:
    query: str
    page: int
    per_page: int


@dataclass(frozen=True)
class ImageParams:
    width: int
    quality: int


def parse_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if not math.isfinite(value):
        return default
    return math.floor(value)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def normalize_search_params(
    q: str | None,
    page: str | None,
    per_page: str | None,
    settings: Settings,
) -> SearchParams:
    return SearchParams(
        query=(q or "").strip(),
        page=max(1, parse_int(page, 1)),
        per_page=clamp(parse_int(per_page, settings.default_per_page), 1, settings.max_per_page),
    )


def normalize_image_params(w: str | None, q: str | None, settings: Settings) -> ImageParams:
    return ImageParams(
        width=clamp(parse_int(w, settings.image_default_width), 1, settings.image_max_width),
        quality=clamp(parse_int(q, settings.image_default_quality), 1, 100),
    )
