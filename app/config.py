"""
Configuration settings for csv-email-cleaner
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from CSV_CLEANER_* environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CSV_CLEANER_")

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Uploads
    max_upload_mb: int = 20

    # Row validation fan-out; 1 keeps it sequential
    max_workers: int = 1
    parallel_min_rows: int = 5000

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()
