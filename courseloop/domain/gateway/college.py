"""College lookup collaborator contract."""

from abc import ABC, abstractmethod

from courseloop.domain.model import College


class CollegeLookup(ABC):
    """Read-only, best-effort college name search."""

    @abstractmethod
    async def search(self, query: str) -> list[College]:
        """Search colleges by name.

        Never raises: any failure yields an empty list, indistinguishable
        from "no matches".
        """
        pass
