from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB (cache archive)
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "opengraph_cache"
    mongo_max_pool_size: int = 10

    # HTTP string fetcher
    http_timeout: float = 10.0
    http_verify_ssl: bool = True  # set False behind corporate SSL-inspection proxies
    http_user_agent: str = "OpenGraphCacheBot/1.0"

    # Cache identity used by the API
    cache_name: str = "opengraph"
    cache_group_id: Optional[str] = None

    # Diagnostics
    log_parsing: bool = False
    log_duplicate_fetches: bool = False
    coalesce_requests: bool = False

    # Logging
    log_level: str = "INFO"


settings = Settings()
