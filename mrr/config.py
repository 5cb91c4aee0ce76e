"""
Settings for the MRR report, read from the environment and .env.
"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MRR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Stripe
    stripe_key: str = Field(default="", validation_alias="STRIPE_KEY")
    page_size: int = 100  # Stripe list limit, 1-100
    price_lookup_retries: int = 3

    # Report
    trailing_windows: List[int] = [1, 7, 30, 90]  # days
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
