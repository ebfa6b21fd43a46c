from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import httpx

from receitas.common.config import Settings
from receitas.common.deadline import Deadline
from receitas.common.errors import ReceitasError
from receitas.common.params import normalize_image_params
from receitas.common.url import validate_source_url
from receitas.imaging.fetcher import ImageFetcher
from receitas.imaging.transform import OUTPUT_MEDIA_TYPE, to_webp

log = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    VALIDATING = "validating"
    FETCHING = "fetching"
    TRANSFORMING = "transforming"


@dataclass(frozen=True)
class ImageRequest:
    source_url: str
    width: int
    quality: int


@dataclass(frozen=True)
class TransformedImage:
    content: bytes
    media_type: str
    cache_control: str


class ImageProxy:
    """Fetch one remote image and re-encode it to a bounded WebP thumbnail."""

    def __init__(self, settings: Settings, client: httpx.Client):
        self.settings = settings
        self.fetcher = ImageFetcher(client, settings)

    def build_request(self, url: str | None, w: str | None, q: str | None) -> ImageRequest:
        source_url = validate_source_url(url)
        params = normalize_image_params(w, q, self.settings)
        return ImageRequest(source_url=source_url, width=params.width, quality=params.quality)

    def render(self, url: str | None, w: str | None = None, q: str | None = None) -> TransformedImage:
        stage = Stage.VALIDATING
        try:
            req = self.build_request(url, w, q)

            stage = Stage.FETCHING
            deadline = Deadline(self.settings.image_fetch_timeout_seconds)
            fetched = self.fetcher.fetch(req.source_url, deadline)

            stage = Stage.TRANSFORMING
            content = to_webp(fetched, width=req.width, quality=req.quality)
        except ReceitasError as e:
            log.info(
                "image_failed",
                extra={"url": url, "error": f"{type(e).__name__} at {stage.value}: {e.message}"},
            )
            raise

        log.info(
            "image_done",
            extra={"url": req.source_url, "width": req.width, "quality": req.quality, "size_bytes": len(content)},
        )
        return TransformedImage(
            content=content,
            media_type=OUTPUT_MEDIA_TYPE,
            cache_control=self.settings.image_cache_control,
        )
