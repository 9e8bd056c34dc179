"""Personal CRM configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class CRMSettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///personal_crm.db"
    echo_sql: bool = False
    app_title: str = "Personal CRM"
    log_level: str = "INFO"

    # Caller resolution
    account_token_header: str = "X-Account-Token"

    # List endpoints
    api_default_limit: int = 10
    api_max_limit: int = 100
    api_default_sort: str = "created_at"

    model_config = {"env_prefix": "PCRM_", "env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}


settings = CRMSettings()
