"""
Centralized configuration for the client portal backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, SESSION_COOKIE_*).
"""

from functools import lru_cache
from typing import Literal, Optional
from urllib.parse import urlsplit

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Client Portal API"
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

    # Public site URL (used in invite links)
    site_url: str = "http://localhost:3000"

    # Route layout
    protected_prefix: str = "/dashboard"
    login_path: str = "/login"
    callback_prefix: str = "/auth/callback"
    password_setup_path: str = "/dashboard/reset-password"
    public_protected_paths: list[str] = ["/dashboard/reset-password"]

    # Callback routing
    first_sign_in_tolerance_seconds: float = 30.0

    # Session cookie
    session_cookie_name: Optional[str] = None
    session_cookie_secure: bool = False
    session_cookie_samesite: Literal["lax", "strict", "none"] = "lax"
    session_cookie_max_age: int = 400 * 24 * 60 * 60  # 400 days
    session_cookie_chunk_size: int = 3180

    @property
    def auth_cookie_name(self) -> str:
        """
        Name of the session cookie.

        Defaults to ``sb-<project-ref>-auth-token`` where the project ref is
        the first DNS label of the Supabase URL.
        """
        if self.session_cookie_name:
            return self.session_cookie_name
        host = urlsplit(self.supabase_url).hostname or ""
        project_ref = host.split(".")[0]
        if not project_ref:
            return "sb-auth-token"
        return f"sb-{project_ref}-auth-token"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
