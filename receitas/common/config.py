from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RECEITAS_", case_sensitive=False, populate_by_name=True)

    # search provider credentials
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RECEITAS_GOOGLE_API_KEY", "GOOGLE_API_KEY"),
    )
    google_cse_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RECEITAS_GOOGLE_CSE_ID", "GOOGLE_CSE_ID"),
    )

    google_endpoint: str = "https://www.googleapis.com/customsearch/v1"
    google_safe: str = "active"
    google_gl: str = "br"
    google_hl: str = "pt-BR"
    search_http_timeout_seconds: float = 10.0

    # pagination
    upstream_max_per_call: int = 10
    max_total_results: int = 100
    max_per_page: int = 50
    default_per_page: int = 10

    # image proxy
    image_default_width: int = 240
    image_max_width: int = 800
    image_default_quality: int = 60
    image_fetch_timeout_seconds: float = 8.0
    image_user_agent: str = "BrasilReceitasBot/1.0 (+img-proxy)"
    image_max_redirects: int = 5
    max_image_bytes: int = 10_000_000  # 10MB safety cap
    image_cache_control: str = "public, max-age=86400, s-maxage=86400, stale-while-revalidate=604800"


settings = Settings()
