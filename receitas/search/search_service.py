from __future__ import annotations

import logging
from typing import Any

import httpx

from receitas.common.config import Settings
from receitas.common.errors import ConfigurationError
from receitas.common.params import SearchParams
from receitas.search.batching import SearchWindow, UpstreamBatchRequest, plan_batches
from receitas.search.provider import GoogleSearchProvider
from receitas.search.results import SearchResult, merge_results

log = logging.getLogger(__name__)


class SearchService:
    def __init__(self, settings: Settings, client: httpx.Client):
        self.settings = settings
        self.client = client

    def _provider(self) -> GoogleSearchProvider:
        key = self.settings.google_api_key
        cx = self.settings.google_cse_id
        if not key or not cx:
            raise ConfigurationError("Credenciais ausentes.")
        return GoogleSearchProvider(self.client, api_key=key, cse_id=cx, settings=self.settings)

    def plan(self, params: SearchParams) -> list[UpstreamBatchRequest]:
        window = SearchWindow(page=params.page, per_page=params.per_page)
        return plan_batches(
            window,
            per_call_max=self.settings.upstream_max_per_call,
            ceiling=self.settings.max_total_results,
        )

    def search(self, params: SearchParams) -> list[SearchResult]:
        if not params.query:
            return []

        provider = self._provider()
        batches = self.plan(params)

        # Sequential on purpose: an empty batch means the provider ran dry and
        # later starts would come back empty too.
        raw: list[Any] = []
        fetched = 0
        for batch in batches:
            items = provider.fetch_batch(params.query, batch)
            fetched += 1
            if not items:
                break
            raw.extend(items)

        results = merge_results(raw)
        log.info(
            "search_done",
            extra={
                "query": params.query,
                "page": params.page,
                "per_page": params.per_page,
                "batches": fetched,
                "items": len(results),
            },
        )
        return results
