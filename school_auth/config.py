"""
School Auth Configuration
Settings loaded from environment variables and an optional .env file
"""

from typing import Optional, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict

from school_auth.exceptions import ConfigurationError
from school_auth import messages


class Settings(BaseSettings):
    # App config
    app_name: str = "School Auth Functions"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "default"
    logging_config_path: Optional[str] = None

    # Supabase project (all three are required at request time)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # CORS
    cors_allow_origin: str = "*"

    # Bulk signup limits
    bulk_signup_max_users: int = 50
    bulk_signup_max_attempts: int = 3
    bulk_signup_window_minutes: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def _missing(self, *names: str) -> list:
        return [name.upper() for name in names if not getattr(self, name)]

    def require_admin_credentials(self) -> Tuple[str, str]:
        """Return (url, service_role_key) or raise ConfigurationError"""
        missing = self._missing("supabase_url", "supabase_service_role_key")
        if missing:
            raise ConfigurationError(messages.SERVER_MISCONFIGURED, missing=missing)
        return self.supabase_url, self.supabase_service_role_key

    def require_public_credentials(self) -> Tuple[str, str]:
        """Return (url, anon_key) or raise ConfigurationError"""
        missing = self._missing("supabase_url", "supabase_anon_key")
        if missing:
            raise ConfigurationError(messages.SERVER_MISCONFIGURED, missing=missing)
        return self.supabase_url, self.supabase_anon_key


settings = Settings()
