from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse, Response

from receitas.api.deps import get_image_proxy, get_search_service
from receitas.api.middleware import request_logging_middleware
from receitas.api.schemas import ErrorResponse, HealthResponse, SearchResponse
from receitas.common.config import Settings, settings as default_settings
from receitas.common.errors import ReceitasError
from receitas.common.params import normalize_search_params
from receitas.imaging.proxy import ImageProxy
from receitas.search.search_service import SearchService

log = logging.getLogger(__name__)

_ERRORS = {500: {"model": ErrorResponse}}


def _error(exc: ReceitasError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="Receitas Proxy", version="1.0.0")
    app.state.settings = app_settings or default_settings

    app.middleware("http")(request_logging_middleware)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    # Numeric params arrive as raw strings: garbage falls back to defaults
    # instead of becoming a 422.
    @app.get(
        "/api/search",
        response_model=SearchResponse,
        response_model_exclude_none=True,
        responses=_ERRORS,
    )
    def search(
        q: str | None = Query(None),
        page: str | None = Query(None),
        per_page: str | None = Query(None, alias="perPage"),
        svc: SearchService = Depends(get_search_service),
    ):
        params = normalize_search_params(q, page, per_page, svc.settings)
        try:
            items = svc.search(params)
        except ReceitasError as e:
            log.warning("search_failed", extra={"query": params.query, "error": e.message})
            return _error(e)
        return SearchResponse(items=items)

    @app.get(
        "/api/img",
        response_class=Response,
        responses={
            200: {"content": {"image/webp": {}}},
            400: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
            **_ERRORS,
        },
    )
    def image(
        url: str | None = Query(None),
        w: str | None = Query(None),
        q: str | None = Query(None),
        proxy: ImageProxy = Depends(get_image_proxy),
    ):
        try:
            out = proxy.render(url, w, q)
        except ReceitasError as e:
            return _error(e)
        return Response(
            content=out.content,
            media_type=out.media_type,
            headers={"Cache-Control": out.cache_control},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_, exc: Exception):
        log.exception("unhandled_exception", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "internal_server_error"})

    return app
