"""Supabase-backed implementation of the backend gateway."""

from .auth import SupabaseAuthGateway
from .http import create_http_client
from .tables import SupabaseTableGateway
from .token_store import FileTokenStore, MemoryTokenStore, StoredSession, TokenStore

__all__ = [
    "FileTokenStore",
    "MemoryTokenStore",
    "StoredSession",
    "SupabaseAuthGateway",
    "SupabaseTableGateway",
    "TokenStore",
    "create_http_client",
]
