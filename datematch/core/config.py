from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Date-Match Client"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    api_base_url: str = "http://localhost:3001"
    api_timeout_seconds: float = 30.0

    messages_page_size: int = 50
    match_statuses: str = "active,confirmed,date_passed"

    trusted_contact_message: str = (
        "Your trusted contact has been notified about your confirmed plan for your safety."
    )

    log_level: str = "INFO"

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:

        return v.rstrip("/")

    def get_match_statuses(self) -> list[str]:

        return [s.strip() for s in self.match_statuses.split(",") if s.strip()]

@lru_cache
def get_settings() -> Settings:

    return Settings()
