# marketplace/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed connection endpoint; not read from the environment.
MONGO_URI = "mongodb://localhost:27017/MarketPlace"
MONGO_DATABASE = "MarketPlace"
PRODUCTS_COLLECTION = "products"


class Settings(BaseSettings):
    """Runtime settings read from the process environment (or a .env file)."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 3000
    store_backend: Literal["mongo", "memory"] = "mongo"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
