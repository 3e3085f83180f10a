"""College Scorecard API client.

Best-effort name search used during onboarding. Every failure degrades to
an empty result.
"""

from typing import Any

import httpx
import logfire

from courseloop.domain.gateway import CollegeLookup
from courseloop.domain.model import College

FIELDS = "id,school.name,school.city,school.state"


class CollegeScorecardClient(CollegeLookup):
    """Base class for College Scorecard clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealCollegeScorecardClient(CollegeScorecardClient):
    """Searches the U.S. Department of Education College Scorecard."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        per_page: int = 20,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize College Scorecard client.

        Args:
            base_url: Schools endpoint
            api_key: api.data.gov key
            per_page: Maximum results per search
            timeout: Request timeout in seconds
            transport: Optional transport override (tests use httpx.MockTransport)
        """
        self.base_url = base_url
        self.api_key = api_key
        self.per_page = per_page
        self.timeout = timeout
        self._transport = transport

    async def search(self, query: str) -> list[College]:
        query = query.strip()
        if not query:
            return []

        params = {
            "api_key": self.api_key,
            "fields": FIELDS,
            "school.name": query,
            "per_page": self.per_page,
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self.base_url, params=params, timeout=self.timeout)
                response.raise_for_status()
                colleges = [self._to_college(item) for item in response.json()["results"]]
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logfire.warn(
                "College search failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        logfire.info("College search", query=query, results=len(colleges))
        return colleges

    @staticmethod
    def _to_college(item: dict[str, Any]) -> College:
        return College(
            id=str(item["id"]),
            name=item["school.name"],
            city=item.get("school.city"),
            state=item.get("school.state"),
        )


class MockCollegeScorecardClient(CollegeScorecardClient):
    """Mock College Scorecard client for testing."""

    DEFAULT_COLLEGES = [
        College(id="110635", name="University of California-Berkeley", city="Berkeley", state="CA"),
        College(id="166683", name="Massachusetts Institute of Technology", city="Cambridge", state="MA"),
        College(id="243744", name="Stanford University", city="Stanford", state="CA"),
        College(id="228778", name="The University of Texas at Austin", city="Austin", state="TX"),
    ]

    def __init__(self, colleges: list[College] | None = None) -> None:
        self.colleges = list(self.DEFAULT_COLLEGES if colleges is None else colleges)
        self.queries: list[str] = []

    async def search(self, query: str) -> list[College]:
        self.queries.append(query)
        needle = query.strip().lower()
        if not needle:
            return []
        return [college for college in self.colleges if needle in college.name.lower()]
