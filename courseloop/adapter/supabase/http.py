"""Shared HTTP plumbing for the Supabase adapters."""

from contextlib import contextmanager
from typing import Any, Iterator

import httpx
import logfire

from courseloop.domain.error import NetworkError


def create_http_client(
    url: str, anon_key: str, timeout: float, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create the client shared by the auth and table gateways.

    Args:
        url: Project URL, e.g. https://<project>.supabase.co
        anon_key: Public API key sent as ``apikey`` on every request
        timeout: Transport timeout in seconds
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        Configured AsyncClient; the caller owns closing it
    """
    return httpx.AsyncClient(
        base_url=url.rstrip("/"),
        headers={"apikey": anon_key},
        timeout=httpx.Timeout(timeout),
        transport=transport,
    )


@contextmanager
def transport_errors(operation: str) -> Iterator[None]:
    """Translate httpx transport failures into NetworkError."""
    try:
        yield
    except httpx.TimeoutException as e:
        logfire.warn("Supabase request timed out", operation=operation)
        raise NetworkError(NetworkError.TIMEOUT, operation) from e
    except httpx.TransportError as e:
        logfire.warn("Supabase transport failure", operation=operation, error=str(e))
        raise NetworkError(NetworkError.TRANSPORT, f"{operation}: {e}") from e


def raise_if_unavailable(response: httpx.Response, operation: str) -> None:
    """5xx and rate limiting are transient; surface them as NetworkError."""
    if response.status_code >= 500 or response.status_code == 429:
        logfire.warn(
            "Supabase unavailable",
            operation=operation,
            status_code=response.status_code,
        )
        raise NetworkError(
            NetworkError.UNAVAILABLE, f"{operation}: HTTP {response.status_code}"
        )


def error_body(response: httpx.Response) -> dict[str, Any]:
    """Decoded JSON error payload, or an empty dict."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
