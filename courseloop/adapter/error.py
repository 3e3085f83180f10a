"""Infrastructure layer errors."""

from courseloop.domain.error import BackendError


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError, BackendError):
    """External provider rejected a request.

    Also a ``BackendError``, so domain services handle it like any other
    backend failure.
    """

    def __init__(self, provider: str, status_code: int, detail: str):
        self.provider = provider
        BackendError.__init__(self, status_code, f"{provider}: {detail}")
