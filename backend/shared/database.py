"""
Database client factory for Supabase.

Provides the service-role client used by the backend for operations that
bypass RLS, such as issuing and consuming verification codes.
"""

from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions

from .config import get_settings
from .exceptions import ConfigurationError

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    The PostgREST timeout is bounded by SUPABASE_TIMEOUT_SECONDS so a
    stalled store surfaces as a failure instead of hanging a request.

    Returns:
        Supabase client configured with service role key

    Raises:
        ConfigurationError: If the Supabase URL or service role key is missing
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ConfigurationError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables.",
                code="SUPABASE_NOT_CONFIGURED",
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=ClientOptions(
                postgrest_client_timeout=settings.supabase_timeout_seconds,
            ),
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
