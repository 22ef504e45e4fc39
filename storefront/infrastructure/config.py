"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./storefront.db"

    # Catalog import
    import_batch_size: int = 200
    import_default_category: str = "Other"
    import_default_description: str = "Lorem ipsum dolor sit amet."
    import_default_file: str = "sample-data/products.csv"

    # Random products
    random_default_count: int = 4
    random_max_count: int = 12

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
