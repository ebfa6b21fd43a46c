from __future__ import annotations

import json
import logging

import httpx
import typer
import uvicorn

from receitas.api.main import create_app
from receitas.common.config import settings
from receitas.common.errors import ReceitasError
from receitas.common.logging import setup_logging
from receitas.common.params import normalize_search_params
from receitas.search.search_service import SearchService

app = typer.Typer(add_completion=False, help="Receitas search and image proxy CLI")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search terms"),
    page: int = typer.Option(1, help="1-based page number"),
    per_page: int = typer.Option(10, "--per-page", help="Results per page (capped at 50)"),
) -> None:
    """Run one search against the upstream provider and print the JSON result."""
    setup_logging()
    log = logging.getLogger("receitas.cli")

    params = normalize_search_params(query, str(page), str(per_page), settings)
    with httpx.Client() as client:
        try:
            items = SearchService(settings, client).search(params)
        except ReceitasError as e:
            log.error("search_failed", extra={"query": params.query, "error": e.message})
            raise typer.Exit(code=1)

    payload = {"items": [it.model_dump(exclude_none=True) for it in items]}
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    log_level: str = typer.Option("info", help="Uvicorn log level"),
) -> None:
    """Run the FastAPI service."""
    setup_logging()
    uvicorn.run(create_app(), host=host, port=port, log_level=log_level, log_config=None)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
