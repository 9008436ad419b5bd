"""Application configuration via environment variables."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    provider: str = "memory"
    cookie_name: str = "sessionid"
    max_lifetime: int = Field(default=3600, gt=0)  # seconds
    gc_interval: int | None = Field(default=None, gt=0)  # defaults to max_lifetime
    https_only: bool = False
    same_site: Literal["lax", "strict", "none"] = "lax"
    port: int = 9090

    @property
    def effective_gc_interval(self) -> int:
        return self.gc_interval or self.max_lifetime

    model_config = {"env_prefix": "SESSION_", "case_sensitive": False}


settings: Settings | None = None


def get_settings() -> Settings:
    global settings
    if settings is None:
        settings = Settings()
    return settings


def override_settings(s: Settings | None) -> None:
    """For testing: inject a Settings instance (None resets to env)."""
    global settings
    settings = s
