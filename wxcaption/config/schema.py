"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

# Fixed for every key namespace; intentionally not part of the schema.
CACHE_TTL_SECONDS = 600


class CacheBackend(StrEnum):
    MEMORY = "memory"
    SQLITE = "sqlite"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    CHAT = "chat"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocode_base_url: str = "https://api.zippopotam.us"
    nws_base_url: str = "https://api.weather.gov"
    user_agent: str = "wxcaption/0.1.0"
    timeout: float = Field(default=30.0, gt=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    backend: CacheBackend = CacheBackend.SQLITE
    path: str = "data/cache.db"


class OutputConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_days: int = Field(default=3, ge=1, le=7)
    max_alerts: int = Field(default=5, ge=0)
    format: OutputFormat = OutputFormat.TEXT


class WxConfig(BaseModel):
    model_config = {"extra": "forbid"}

    providers: ProviderConfig = ProviderConfig()
    cache: CacheConfig = CacheConfig()
    output: OutputConfig = OutputConfig()
