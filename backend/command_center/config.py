from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Database (row-level-secured role)
    database_url: str

    # Supabase Auth
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: Optional[str] = None  # Only needed to provision organizers

    # Auth
    auth_cookie_max_age_seconds: int = 60 * 60 * 24 * 7
    organizer_lookup_timeout_seconds: float = 5.0

    # Email
    email_mode: str = "dev"  # dev | prod
    sendgrid_api_key: Optional[str] = None
    email_from_address: str = "hello@summeroftech.co.nz"
    email_from_name: str = "Summer of Tech"

    # App
    app_url: str = "http://localhost:3000"
    allowed_origins: Optional[str] = None
    debug: bool = False

    def auth_base_url(self) -> str:
        """Base URL of the Supabase Auth (GoTrue) REST API."""
        return f"{self.supabase_url.rstrip('/')}/auth/v1"


settings = Settings()
