"""Tests for the service container and request-scoped dependencies."""

from unittest.mock import MagicMock, patch

from api.dependencies import (
    ServiceContainer,
    create_identity_provider,
    get_board_service,
    get_container,
    get_cookie_bridge,
    get_identity_provider,
    get_team_service,
    reset_container,
)
from modules.auth.provider import SupabaseIdentityProvider
from modules.board.service import BoardService
from modules.team.service import TeamService

from tests.conftest import FakeAuthBackend, make_request


class TestServiceContainer:
    def test_default_factory_is_supabase(self):
        container = ServiceContainer()
        assert container.identity_provider_factory is SupabaseIdentityProvider

    def test_factory_can_be_replaced(self):
        container = ServiceContainer()
        backend = FakeAuthBackend()

        container.identity_provider_factory = backend
        assert container.identity_provider_factory is backend

        container.reset()
        assert container.identity_provider_factory is SupabaseIdentityProvider

    def test_singleton(self):
        assert get_container() is get_container()
        first = get_container()
        reset_container()
        assert get_container() is not first


class TestRequestScopedDependencies:
    def test_bridge_is_shared_within_request(self):
        request = make_request()
        assert get_cookie_bridge(request) is get_cookie_bridge(request)
        assert request.state.session_bridge is get_cookie_bridge(request)

    def test_provider_reused_from_request_state(self, auth_backend):
        request = make_request()
        bridge = get_cookie_bridge(request)

        provider = get_identity_provider(request, bridge)

        assert get_identity_provider(request, bridge) is provider
        assert request.state.identity_provider is provider

    def test_create_identity_provider_uses_container(self, auth_backend):
        request = make_request()
        provider = create_identity_provider(get_cookie_bridge(request))
        assert provider.client is auth_backend.client

    def test_board_service_runs_on_caller_client(self):
        provider = MagicMock()
        service = get_board_service(provider)

        assert isinstance(service, BoardService)
        assert service._repository._db is provider.client

    def test_team_service_splits_clients(self):
        """The admin check runs as the caller; invites use the service role."""
        provider = MagicMock()
        with patch("shared.database.get_supabase_client") as service_client:
            service = get_team_service(provider)

        assert isinstance(service, TeamService)
        assert service._profiles._db is provider.client
        assert service._team._db is service_client.return_value
