"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # Document store
    catalog_store: Literal["mongo", "memory"] = "mongo"
    mongo_url: str = "mongodb://catalog-db:27017"
    mongo_database: str = "CatalogDb"
    mongo_server_selection_timeout_ms: int = 5000
    products_collection: str = "Products"
    brands_collection: str = "Brands"
    types_collection: str = "Types"
    seed_on_startup: bool = False

    # Catalog queries
    catalog_count_scope: Literal["filtered", "all"] = "filtered"
    catalog_search_case_insensitive: bool = False
    catalog_default_page_size: int = 10
    catalog_max_page_size: int = 70

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
