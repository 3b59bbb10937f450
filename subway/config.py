from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(default="INFO", alias="LOG_LEVEL")

    # Module globs selecting the presentation layer that tagged handlers must live in.
    request_log_pointcut: list[str] = Field(default_factory=lambda: ["subway.api.*"], alias="REQUEST_LOG_POINTCUT")
    request_log_propagate_errors: bool = Field(default=False, alias="REQUEST_LOG_PROPAGATE_ERRORS")

    database_url: str = Field(default="sqlite:///./subway.db", alias="DATABASE_URL")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
