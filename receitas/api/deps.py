from __future__ import annotations

from collections.abc import Generator

import httpx
from fastapi import Depends, Request

from receitas.common.config import Settings
from receitas.imaging.proxy import ImageProxy
from receitas.search.search_service import SearchService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client() -> Generator[httpx.Client, None, None]:
    client = httpx.Client()
    try:
        yield client
    finally:
        client.close()


def get_search_service(
    settings: Settings = Depends(get_settings),
    client: httpx.Client = Depends(get_http_client),
) -> SearchService:
    return SearchService(settings, client)


def get_image_proxy(
    settings: Settings = Depends(get_settings),
    client: httpx.Client = Depends(get_http_client),
) -> ImageProxy:
    return ImageProxy(settings, client)
