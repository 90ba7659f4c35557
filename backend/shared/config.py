"""
Centralized configuration for the AmCbunq backend.

All settings are loaded from environment variables with sensible defaults.
Collaborator settings are namespaced (e.g., SUPABASE_*, MAILGUN_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BYPASS_PREFIXES = [
    "/admin",
    "/api",
    "/_next",
    "/static",
    "/images",
    "/favicon.ico",
    "/maintenance.html",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AmCbunq API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""
    supabase_timeout_seconds: float = 10.0

    # Mailgun
    mailgun_api_key: str = ""
    mailgun_domain: str = ""
    mailgun_from_email: str = ""
    mailgun_api_host: str = "https://api.mailgun.net"
    mailgun_timeout_seconds: float = 10.0

    # Branding (used in outgoing emails)
    brand_name: str = "AmCbunq"
    public_base_url: str = "https://mybunq.amccredit.com"

    # Email verification
    verification_code_ttl_minutes: int = 10
    verification_sync_auth: bool = True

    # Edge routing
    routing_mode: Literal["locale", "maintenance"] = "locale"
    supported_locales: list[str] = ["en", "fr"]
    default_locale: str = "en"
    bypass_prefixes: list[str] = DEFAULT_BYPASS_PREFIXES
    maintenance_path: str = "/maintenance.html"
    maintenance_bypass_prefixes: list[str] = [
        "/maintenance.html",
        "/_next/static",
        "/favicon.ico",
    ]
    redirect_status_code: int = 307

    @property
    def mailgun_configured(self) -> bool:
        """Whether all Mailgun credentials needed to send mail are present."""
        return bool(self.mailgun_api_key and self.mailgun_domain and self.mailgun_from_email)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
