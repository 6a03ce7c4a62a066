"""
Database client factory for Supabase.

Provides both the service-role client (for backend operations bypassing RLS)
and per-request session clients (for operations respecting RLS).
"""

from typing import Any, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as sending invitations on behalf of an admin.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )

    return _service_client


def get_supabase_session_client(storage: Any) -> Client:
    """
    Build a Supabase client whose auth session lives in ``storage``.

    The client is never cached: it captures the storage (and through it the
    request's cookie jar) at construction time, so one is built per request.

    Args:
        storage: Object with ``get_item``/``set_item``/``remove_item``,
            normally a ``CookieSessionStorage`` bound to the current request.

    Returns:
        Supabase client using the anon key and PKCE flow
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    # No auto refresh: that starts a background timer thread. Refresh happens
    # inline when the session is read.
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=ClientOptions(
            storage=storage,
            flow_type="pkce",
            auto_refresh_token=False,
            persist_session=True,
        ),
    )


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
