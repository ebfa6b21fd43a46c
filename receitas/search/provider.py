from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from receitas.common.config import Settings
from receitas.common.errors import UpstreamError, UpstreamTimeout, UpstreamUnavailable
from receitas.search.batching import UpstreamBatchRequest
from receitas.search.results import UpstreamResponse

log = logging.getLogger(__name__)


class GoogleSearchProvider:
    """One batch at a time against the Custom Search JSON API."""

    def __init__(self, client: httpx.Client, api_key: str, cse_id: str, settings: Settings):
        self.client = client
        self.api_key = api_key
        self.cse_id = cse_id
        self.settings = settings

    def _params(self, query: str, batch: UpstreamBatchRequest) -> dict[str, str]:
        return {
            "key": self.api_key,
            "cx": self.cse_id,
            "q": query,
            "num": str(batch.count),
            "start": str(batch.start),
            "safe": self.settings.google_safe,
            "gl": self.settings.google_gl,
            "hl": self.settings.google_hl,
        }

    def fetch_batch(self, query: str, batch: UpstreamBatchRequest) -> list[Any]:
        try:
            resp = self.client.get(
                self.settings.google_endpoint,
                params=self._params(query, batch),
                timeout=self.settings.search_http_timeout_seconds,
            )
        except httpx.TimeoutException:
            raise UpstreamTimeout("Upstream timeout") from None
        except httpx.TransportError as e:
            log.warning("search_upstream_unreachable", extra={"error": str(e)})
            raise UpstreamUnavailable("Falha na busca.") from e

        if not resp.is_success:
            raise UpstreamError(
                f"Falha na busca. Status {resp.status_code}",
                upstream_status=resp.status_code,
                status_code=500,
            )

        try:
            data = UpstreamResponse.model_validate(resp.json())
        except (ValueError, ValidationError):
            # json.JSONDecodeError is a ValueError
            raise UpstreamError(
                "Falha na busca. Resposta inválida",
                upstream_status=resp.status_code,
                status_code=500,
            ) from None
        return data.items
