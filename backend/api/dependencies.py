"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The identity provider is different from the other services: it captures a
request's cookie jar when it is built, so the container holds a factory and
a fresh provider is built per request. Within one request the gatekeeper and
the route handler share the same bridge and provider through request.state.
"""

from typing import TYPE_CHECKING, Callable

from fastapi import Depends, Request

from modules.auth.cookies import SessionCookieBridge
from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IIdentityProvider
    from modules.board.interfaces import IBoardService
    from modules.team.interfaces import ITeamService

IdentityProviderFactory = Callable[[SessionCookieBridge], "IIdentityProvider"]


class ServiceContainer:
    """
    Container for service factories.

    Factories are resolved lazily on first access. Tests replace the identity
    provider factory to run the auth flows against a fake provider.
    """

    def __init__(self) -> None:
        self._identity_provider_factory: "IdentityProviderFactory | None" = None

    @property
    def identity_provider_factory(self) -> IdentityProviderFactory:
        """Get the factory that builds a per-request identity provider."""
        if self._identity_provider_factory is None:
            from modules.auth.provider import SupabaseIdentityProvider
            self._identity_provider_factory = SupabaseIdentityProvider
        return self._identity_provider_factory

    @identity_provider_factory.setter
    def identity_provider_factory(self, factory: IdentityProviderFactory) -> None:
        self._identity_provider_factory = factory

    def reset(self) -> None:
        """
        Reset all cached factories.

        This is primarily for testing.
        """
        self._identity_provider_factory = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    Primarily used for testing.
    """
    global _container
    _container = None


def create_identity_provider(bridge: SessionCookieBridge) -> "IIdentityProvider":
    """Build an identity provider bound to ``bridge``."""
    return get_container().identity_provider_factory(bridge)


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_cookie_bridge(request: Request) -> SessionCookieBridge:
    """FastAPI dependency for the request's cookie bridge."""
    bridge = getattr(request.state, "session_bridge", None)
    if bridge is None:
        bridge = SessionCookieBridge(request)
        request.state.session_bridge = bridge
    return bridge


def get_identity_provider(
    request: Request,
    bridge: SessionCookieBridge = Depends(get_cookie_bridge),
) -> "IIdentityProvider":
    """FastAPI dependency for the request's identity provider."""
    provider = getattr(request.state, "identity_provider", None)
    if provider is None:
        provider = create_identity_provider(bridge)
        request.state.identity_provider = provider
    return provider


def get_board_service(
    provider: "IIdentityProvider" = Depends(get_identity_provider),
) -> "IBoardService":
    """FastAPI dependency for the board service (runs as the caller)."""
    from modules.board.repository import TaskRepository
    from modules.board.service import BoardService
    return BoardService(TaskRepository(provider.client))


def get_team_service(
    provider: "IIdentityProvider" = Depends(get_identity_provider),
) -> "ITeamService":
    """FastAPI dependency for the team service (admin check runs as the caller)."""
    from modules.auth.repository import ProfileRepository
    from modules.team.repository import TeamRepository
    from modules.team.service import TeamService
    from shared.database import get_supabase_client
    return TeamService(
        ProfileRepository(provider.client),
        TeamRepository(get_supabase_client()),
        get_settings(),
    )
