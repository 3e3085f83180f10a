"""Backend infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from courseloop.adapter.supabase import (
    FileTokenStore,
    MemoryTokenStore,
    SupabaseAuthGateway,
    SupabaseTableGateway,
    TokenStore,
    create_http_client,
)
from courseloop.config import BackendSettings
from courseloop.domain.gateway import AuthGateway, TableGateway
from courseloop.util.di.base import ProviderBase
from courseloop.util.error import ConfigurationError
from courseloop.util.observability import instrument_httpx


class BackendProvider(ProviderBase):
    """Backend component base."""

    __mock_component__ = "backend"


class ProdBackendProvider(BackendProvider):
    """Production backend provider using Supabase."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_http_client(
        self, backend_settings: BackendSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared Supabase HTTP client, closed with the container.

        Raises:
            ConfigurationError: If the anon key is not configured
        """
        if backend_settings.anon_key == "CHANGE_ME_IN_PRODUCTION":
            raise ConfigurationError("BACKEND__ANON_KEY must be configured")

        instrument_httpx()
        client = create_http_client(
            backend_settings.url,
            backend_settings.anon_key,
            timeout=backend_settings.request_timeout,
        )
        try:
            yield client
        finally:
            await client.aclose()
            logfire.info("Backend client closed")

    @provide
    def get_token_store(self, backend_settings: BackendSettings) -> TokenStore:
        """Provide session token storage (file-backed when configured)."""
        if backend_settings.session_file is not None:
            return FileTokenStore(backend_settings.session_file)
        return MemoryTokenStore()

    @provide
    def get_auth_gateway(
        self, client: httpx.AsyncClient, token_store: TokenStore
    ) -> AuthGateway:
        """Provide Supabase Auth gateway."""
        return SupabaseAuthGateway(client=client, token_store=token_store)

    @provide
    def get_table_gateway(
        self,
        client: httpx.AsyncClient,
        token_store: TokenStore,
        backend_settings: BackendSettings,
    ) -> TableGateway:
        """Provide Supabase PostgREST gateway."""
        return SupabaseTableGateway(
            client=client, token_store=token_store, anon_key=backend_settings.anon_key
        )
