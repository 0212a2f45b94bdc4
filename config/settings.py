"""
Centralized configuration for Booth Leads.

All settings are loaded from environment variables via .env file.
"""

from functools import lru_cache
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    # Company
    company_name: str = Field(default="our company", env="COMPANY_NAME")

    # OpenAI (optional; local insights are used without a key)
    openai_api_key: Optional[str] = Field(default=None, env="OPENAI_API_KEY")
    openai_llm_model: str = Field(default="gpt-4o-mini", env="OPENAI_LLM_MODEL")
    max_tokens: int = Field(default=500, env="MAX_TOKENS")
    temperature: float = Field(default=0.7, env="TEMPERATURE")
    llm_timeout: float = Field(default=30.0, env="LLM_TIMEOUT")

    # CRM (simulated)
    crm_platform: str = Field(default="none", env="CRM_PLATFORM")  # hubspot | salesforce | salesgent | none
    crm_api_key: Optional[str] = Field(default=None, env="CRM_API_KEY")
    crm_simulated_delay: float = Field(default=1.5, env="CRM_SIMULATED_DELAY")
    crm_failure_rate: float = Field(default=0.05, env="CRM_FAILURE_RATE")
    crm_auto_sync: bool = Field(default=False, env="CRM_AUTO_SYNC")
    crm_sync_interval: int = Field(default=15, env="CRM_SYNC_INTERVAL")

    # Storage
    storage_backend: str = Field(default="memory", env="STORAGE_BACKEND")  # memory | json
    storage_path: str = Field(default="./data/leads.json", env="STORAGE_PATH")

    # Event
    event_timezone: Optional[str] = Field(default=None, env="EVENT_TIMEZONE")

    # API
    api_host: str = Field(default="0.0.0.0", env="API_HOST")
    api_port: int = Field(default=8000, env="API_PORT")
    api_title: str = Field(default="Booth Leads API", env="API_TITLE")
    api_version: str = Field(default="1.0.0", env="API_VERSION")
    cors_origins: str = Field(default="*", env="CORS_ORIGINS")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    debug: bool = Field(default=False, env="DEBUG")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_json_storage(self) -> bool:
        return self.storage_backend.lower() == "json"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def event_tz(self) -> Optional[ZoneInfo]:
        if not self.event_timezone:
            return None
        return ZoneInfo(self.event_timezone)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
