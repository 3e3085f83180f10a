"""Local persistence of the backend session token."""

import json
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class StoredSession(BaseModel):
    """Tokens issued by the auth server."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
    expires_at: datetime
    user_id: UUID

    def is_expired(self, leeway_seconds: float = 30.0) -> bool:
        remaining = (self.expires_at - datetime.now(timezone.utc)).total_seconds()
        return remaining <= leeway_seconds


class TokenStore(ABC):
    """Where the session survives between process runs."""

    @abstractmethod
    def load(self) -> Optional[StoredSession]:
        pass

    @abstractmethod
    def save(self, session: StoredSession) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MemoryTokenStore(TokenStore):
    """Keeps the session for the lifetime of the process only."""

    def __init__(self) -> None:
        self._session: Optional[StoredSession] = None

    def load(self) -> Optional[StoredSession]:
        return self._session

    def save(self, session: StoredSession) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileTokenStore(TokenStore):
    """Keeps the session in a JSON file readable only by the owner."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[StoredSession]:
        if not self.path.exists():
            return None
        try:
            return StoredSession.model_validate_json(self.path.read_text())
        except ValueError:
            # Corrupt file: treat as signed out
            self.clear()
            return None

    def save(self, session: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Created owner-only; the mode also applies to an existing file
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w") as f:
            json.dump(session.model_dump(mode="json"), f)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
